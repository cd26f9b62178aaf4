"""Vorbis and Opus header packets inside an Ogg stream."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import List

from .model import AudioFile
from .vorbis_chapters import parse_chapters
from .vorbis_comments import parse_comment

_OPUS_RATE = 48000


@dataclass(frozen=True)
class _CommentMessages:
    missing_length: str
    truncated_data: str
    invalid: str


_VORBIS_MESSAGES = _CommentMessages(
    missing_length="truncated comment {index}",
    truncated_data="truncated comment {index} data",
    invalid="invalid Vorbis comment: {error}",
)

_OPUS_MESSAGES = _CommentMessages(
    missing_length="truncated comment {index} (missing length field)",
    truncated_data="truncated comment {index} data (expected {length} bytes)",
    invalid="invalid Opus tag: {error}",
)


def _quoted(raw: bytes) -> str:
    return '"' + raw.decode("latin-1") + '"'


def _u32(data: bytes, offset: int) -> int:
    return struct.unpack_from("<I", data, offset)[0]


def _parse_comment_list(
    data: bytes, offset: int, file: AudioFile, messages: _CommentMessages
) -> None:
    """Parse vendor string and comments starting at ``offset`` into ``file``."""
    if offset + 4 > len(data):
        raise ValueError("truncated vendor length")
    vendor_length = _u32(data, offset)
    offset += 4

    if offset + vendor_length > len(data):
        raise ValueError("truncated vendor string")
    offset += vendor_length

    if offset + 4 > len(data):
        raise ValueError("truncated comment count")
    count = _u32(data, offset)
    offset += 4

    comments: List[str] = []
    for index in range(count):
        if offset + 4 > len(data):
            file.add_warning("metadata", messages.missing_length.format(index=index))
            break
        length = _u32(data, offset)
        offset += 4
        if offset + length > len(data):
            file.add_warning(
                "metadata", messages.truncated_data.format(index=index, length=length)
            )
            break
        comment = data[offset : offset + length].decode("utf-8", errors="replace")
        offset += length
        comments.append(comment)
        try:
            parse_comment(comment, file.tags)
        except ValueError as exc:
            file.add_warning("metadata", messages.invalid.format(error=exc))

    if comments:
        file.chapters = parse_chapters(comments, file.audio.duration)


def parse_vorbis_identification(data: bytes, file: AudioFile) -> None:
    """Fill ``file.audio`` from a Vorbis identification packet.

    Raises ValueError when the packet is short, mistyped or of another version.
    """
    if len(data) < 30:
        raise ValueError(f"identification header too short: {len(data)} bytes")
    if data[0] != 0x01:
        raise ValueError(f"not an identification header (type 0x{data[0]:02x})")
    if data[1:7] != b"vorbis":
        raise ValueError(f"invalid vorbis magic: {_quoted(data[1:7])}")

    version = _u32(data, 7)
    if version != 0:
        raise ValueError(f"unsupported Vorbis version: {version}")

    audio = file.audio
    audio.codec = "Vorbis"
    audio.container = "Ogg"
    audio.channels = data[11]
    audio.sample_rate = _u32(data, 12)
    audio.bitrate = _u32(data, 20)
    audio.lossless = False
    audio.vbr = True


def parse_vorbis_comment(data: bytes, file: AudioFile) -> None:
    """Apply the comments of a Vorbis comment packet to ``file``.

    Raises ValueError when the packet header is invalid or truncated; a
    truncated comment list only adds a warning.
    """
    if len(data) < 8:
        raise ValueError(f"comment header too short: {len(data)} bytes")
    if data[0] != 0x03:
        raise ValueError(f"not a comment header (type 0x{data[0]:02x})")
    if data[1:7] != b"vorbis":
        raise ValueError(f"invalid vorbis magic: {_quoted(data[1:7])}")
    _parse_comment_list(data, 7, file, _VORBIS_MESSAGES)


def parse_opus_head(data: bytes, file: AudioFile) -> None:
    """Fill ``file.audio`` from an OpusHead packet.

    Opus always decodes at 48 kHz; a different original rate or a non-zero
    output gain is noted as a warning. Raises ValueError on an invalid header.
    """
    if len(data) < 19:
        raise ValueError(f"OpusHead packet too short: {len(data)} bytes (need at least 19)")
    if data[0:8] != b"OpusHead":
        raise ValueError(f'invalid OpusHead magic: {_quoted(data[0:8])} (expected "OpusHead")')
    version = data[8]
    if version != 1:
        raise ValueError(f"unsupported Opus version: {version} (only version 1 is supported)")

    channels = data[9]
    input_rate = _u32(data, 12)
    (output_gain,) = struct.unpack_from("<h", data, 16)

    audio = file.audio
    audio.codec = "Opus"
    audio.container = "Ogg"
    audio.sample_rate = _OPUS_RATE
    audio.channels = channels
    audio.lossless = False
    audio.vbr = True

    if input_rate != _OPUS_RATE and input_rate > 0:
        file.add_warning(
            "technical",
            f"original sample rate was {input_rate} Hz (Opus outputs at 48 kHz)",
        )
    if output_gain != 0:
        file.add_warning("technical", f"output gain: {output_gain / 256.0:.2f} dB")


def parse_opus_tags(data: bytes, file: AudioFile) -> None:
    """Apply the comments of an OpusTags packet to ``file``.

    Raises ValueError when the packet header is invalid or truncated.
    """
    if len(data) < 12:
        raise ValueError(f"OpusTags packet too short: {len(data)} bytes (need at least 12)")
    if data[0:8] != b"OpusTags":
        raise ValueError(f'invalid OpusTags magic: {_quoted(data[0:8])} (expected "OpusTags")')
    _parse_comment_list(data, 8, file, _OPUS_MESSAGES)