from datetime import timedelta

import pytest

from audiometa.errors import OutOfBoundsError
from audiometa.model import AudioFile
from audiometa.mp3_technical import (
    duration_from_frames,
    estimate_cbr_duration,
    find_frame_header,
    parse_frame_header,
    parse_technical_info,
    parse_vbr_header,
)
from audiometa.reader import SafeReader

FRAME = bytes([0xFF, 0xFB, 0x90, 0x00])


def _reader(data):
    return SafeReader(data, len(data), "t.mp3")


def _vbr_stream(marker_block):
    return FRAME + b"\x00" * 32 + marker_block + b"\x00" * 150


def test_find_frame_header_returns_raw_header():
    data = FRAME + b"\x00" * 4
    assert find_frame_header(_reader(data), 0) == int.from_bytes(FRAME, "big")


@pytest.mark.parametrize(
    "raw, message",
    [
        (b"\x00\x00\x00\x00", "invalid frame sync"),
        (bytes([0xFF, 0xE3, 0x90, 0x00]), "unsupported MPEG version"),
        (bytes([0xFF, 0xFF, 0x90, 0x00]), "unsupported layer"),
    ],
)
def test_find_frame_header_rejects(raw, message):
    with pytest.raises(ValueError, match=message):
        find_frame_header(_reader(raw), 0)


def test_find_frame_header_out_of_bounds():
    with pytest.raises(OutOfBoundsError):
        find_frame_header(_reader(b"\xff\xfb"), 0)


def test_parse_frame_header_128k_44100():
    bitrate, sample_rate, channels = parse_frame_header(0xFFFB9000)
    assert bitrate == 128000
    assert sample_rate == 44100
    assert channels == 2


def test_parse_frame_header_mono_mode():
    assert parse_frame_header(0xFFFB90C0)[2] == 1


def test_duration_from_frames_scales_linearly():
    one = duration_from_frames(1000, 44100)
    two = duration_from_frames(2000, 44100)
    assert duration_from_frames(0, 44100) == timedelta(0)
    assert abs(two - 2 * one) <= timedelta(microseconds=1)


def test_duration_from_frames_rejects_zero_rate():
    with pytest.raises(ValueError):
        duration_from_frames(10, 0)


def test_estimate_cbr_duration():
    assert estimate_cbr_duration(128000, 16026, 26) == timedelta(seconds=1)
    assert estimate_cbr_duration(0, 16026, 26) == timedelta(0)


def test_parse_vbr_header_xing():
    block = b"Xing" + (1).to_bytes(4, "big") + (500).to_bytes(4, "big")
    data = _vbr_stream(block)
    assert parse_vbr_header(_reader(data), 0, 44100) == duration_from_frames(500, 44100)


def test_parse_vbr_header_info_without_frames_flag():
    block = b"Info" + (0).to_bytes(4, "big") + (500).to_bytes(4, "big")
    assert parse_vbr_header(_reader(_vbr_stream(block)), 0, 44100) is None


def test_parse_vbr_header_vbri():
    block = b"VBRI" + b"\x00" * 10 + (321).to_bytes(4, "big")
    data = _vbr_stream(block)
    assert parse_vbr_header(_reader(data), 0, 48000) == duration_from_frames(321, 48000)


def test_parse_vbr_header_absent_or_short():
    assert parse_vbr_header(_reader(_vbr_stream(b"None")), 0, 44100) is None
    assert parse_vbr_header(_reader(FRAME * 4), 0, 44100) is None


def test_parse_technical_info_cbr():
    data = b"junk" * 10 + b"\xff\x00" + FRAME + b"\x00" * 20
    file = AudioFile()
    parse_technical_info(_reader(data), 0, len(data), file)
    assert file.audio.codec == "MP3"
    assert file.audio.bitrate == 128000
    assert file.audio.sample_rate == 44100
    assert file.audio.vbr is False
    assert file.audio.duration == estimate_cbr_duration(128000, len(data), 0)


def test_parse_technical_info_vbr():
    block = b"Xing" + (1).to_bytes(4, "big") + (77).to_bytes(4, "big")
    data = b"\x00" * 8 + _vbr_stream(block)
    file = AudioFile()
    parse_technical_info(_reader(data), 8, len(data), file)
    assert file.audio.vbr is True
    assert file.audio.duration == duration_from_frames(77, 44100)


def test_parse_technical_info_no_frame():
    data = b"\x00" * 100
    with pytest.raises(ValueError, match="no valid MP3 frame found"):
        parse_technical_info(_reader(data), 0, len(data), AudioFile())