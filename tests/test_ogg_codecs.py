import struct
from datetime import timedelta

import pytest

from audiometa.model import AudioFile
from audiometa.ogg_codecs import (
    parse_opus_head,
    parse_opus_tags,
    parse_vorbis_comment,
    parse_vorbis_identification,
)


def _vorbis_ident(channels=2, rate=44100, nominal=128000, version=0, kind=0x01):
    return (
        bytes([kind])
        + b"vorbis"
        + struct.pack("<IBIIII", version, channels, rate, 0, nominal, 0)
        + b"\xb8\x01"
    )


def _comment_block(comments, vendor=b"audiometa", count=None):
    body = struct.pack("<I", len(vendor)) + vendor
    body += struct.pack("<I", len(comments) if count is None else count)
    for comment in comments:
        encoded = comment.encode("utf-8")
        body += struct.pack("<I", len(encoded)) + encoded
    return body


def _vorbis_comment(comments, **kwargs):
    return b"\x03vorbis" + _comment_block(comments, **kwargs) + b"\x01"


def _opus_head(channels=2, rate=48000, gain=0, version=1):
    return b"OpusHead" + struct.pack("<BBHIhB", version, channels, 312, rate, gain, 0)


def _opus_tags(comments, **kwargs):
    return b"OpusTags" + _comment_block(comments, **kwargs)


def test_vorbis_identification_fields():
    file = AudioFile()
    parse_vorbis_identification(_vorbis_ident(channels=1, rate=22050, nominal=96000), file)
    assert file.audio.codec == "Vorbis"
    assert file.audio.container == "Ogg"
    assert file.audio.channels == 1
    assert file.audio.sample_rate == 22050
    assert file.audio.bitrate == 96000
    assert file.audio.vbr is True
    assert file.audio.lossless is False


@pytest.mark.parametrize(
    "packet",
    [
        _vorbis_ident()[:29],
        _vorbis_ident(kind=0x03),
        b"\x01vorbix" + _vorbis_ident()[7:],
        _vorbis_ident(version=1),
    ],
)
def test_vorbis_identification_rejects_bad_packets(packet):
    with pytest.raises(ValueError):
        parse_vorbis_identification(packet, AudioFile())


def test_vorbis_comment_sets_tags_and_raw():
    file = AudioFile()
    parse_vorbis_comment(_vorbis_comment(["TITLE=Song", "ARTIST=Band", "FOO=bar"]), file)
    assert file.tags.title == "Song"
    assert file.tags.artist == "Band"
    assert file.tags.get("FOO") == ["bar"]
    assert file.warnings == []


def test_vorbis_comment_invalid_entry_warns():
    file = AudioFile()
    parse_vorbis_comment(_vorbis_comment(["no separator", "ALBUM=Record"]), file)
    assert file.tags.album == "Record"
    assert len(file.warnings) == 1
    assert file.warnings[0].message.startswith("invalid Vorbis comment")


def test_vorbis_comment_truncated_list_warns_and_keeps_earlier():
    file = AudioFile()
    parse_vorbis_comment(_vorbis_comment(["TITLE=Kept"], count=2)[:-1], file)
    assert file.tags.title == "Kept"
    assert [w.stage for w in file.warnings] == ["metadata"]
    assert file.warnings[0].message.startswith("truncated comment")


def test_vorbis_comment_chapters():
    file = AudioFile()
    comments = [
        "CHAPTER001=00:00:00.000",
        "CHAPTER001NAME=Intro",
        "CHAPTER002=00:01:00.000",
    ]
    parse_vorbis_comment(_vorbis_comment(comments), file)
    assert [c.title for c in file.chapters] == ["Intro", "Chapter 2"]
    assert file.chapters[0].end_time == timedelta(minutes=1)
    assert file.chapters[1].start_time == timedelta(minutes=1)


@pytest.mark.parametrize(
    "packet",
    [b"\x03vorb", b"\x05vorbis\x00\x00\x00\x00", b"\x03vorbis\x05\x00\x00\x00ab"],
)
def test_vorbis_comment_rejects_bad_header(packet):
    with pytest.raises(ValueError):
        parse_vorbis_comment(packet, AudioFile())


def test_opus_head_fields_without_warnings():
    file = AudioFile()
    parse_opus_head(_opus_head(channels=2), file)
    assert file.audio.codec == "Opus"
    assert file.audio.container == "Ogg"
    assert file.audio.sample_rate == 48000
    assert file.audio.channels == 2
    assert file.audio.vbr is True
    assert file.warnings == []


def test_opus_head_reports_input_rate_and_gain():
    file = AudioFile()
    parse_opus_head(_opus_head(rate=44100, gain=256), file)
    assert file.audio.sample_rate == 48000
    messages = [w.message for w in file.warnings]
    assert len(messages) == 2
    assert "44100" in messages[0]
    assert messages[1] == "output gain: 1.00 dB"
    assert all(w.stage == "technical" for w in file.warnings)


@pytest.mark.parametrize(
    "packet",
    [_opus_head()[:18], b"OpusHeaX" + _opus_head()[8:], _opus_head(version=2)],
)
def test_opus_head_rejects_bad_packets(packet):
    with pytest.raises(ValueError):
        parse_opus_head(packet, AudioFile())


def test_opus_tags_sets_tags():
    file = AudioFile()
    parse_opus_tags(_opus_tags(["TITLE=Opus Song", "GENRE=Jazz"]), file)
    assert file.tags.title == "Opus Song"
    assert file.tags.genres == ["Jazz"]


def test_opus_tags_invalid_entry_warns():
    file = AudioFile()
    parse_opus_tags(_opus_tags(["broken"]), file)
    assert file.warnings[0].message.startswith("invalid Opus tag")


@pytest.mark.parametrize(
    "packet",
    [b"OpusTags\x00", b"OpusTagz" + _comment_block([]), b"OpusTags\xff\x00\x00\x00abcd"],
)
def test_opus_tags_rejects_bad_header(packet):
    with pytest.raises(ValueError):
        parse_opus_tags(packet, AudioFile())