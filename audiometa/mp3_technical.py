"""Technical properties of MPEG audio: frame headers, bitrate and duration."""

from __future__ import annotations

from datetime import timedelta
from typing import Optional, Tuple

from .errors import AudioMetaError
from .model import AudioFile
from .reader import SafeReader

BITRATE_TABLE = (0, 32, 40, 48, 56, 64, 80, 96, 112, 128, 160, 192, 224, 256, 320, 0)
SAMPLE_RATE_TABLE = (44100, 48000, 32000, 0)
SAMPLES_PER_FRAME = 1152

_SYNC_MASK = 0xFFE00000
_XING_OFFSET = 36
_SEARCH_CHUNK = 65536


def _to_timedelta(seconds: float) -> timedelta:
    nanoseconds = int(seconds * 1e9)
    return timedelta(microseconds=nanoseconds // 1000)


def find_frame_header(reader: SafeReader, offset: int) -> int:
    """Return the 32-bit MPEG1/2 Layer III frame header at ``offset``.

    Raises ValueError when the bytes are not such a header and
    OutOfBoundsError when they cannot be read.
    """
    header = reader.read_int(offset, 4, "MP3 frame header")
    if header & _SYNC_MASK != _SYNC_MASK:
        raise ValueError("invalid frame sync")
    version = (header >> 19) & 0x3
    layer = (header >> 17) & 0x3
    if version not in (2, 3):
        raise ValueError("unsupported MPEG version")
    if layer != 1:
        raise ValueError("unsupported layer")
    return header


def parse_frame_header(header: int) -> Tuple[int, int, int]:
    """Return (bitrate in bit/s, sample rate in Hz, channel count) from a frame header."""
    bitrate = BITRATE_TABLE[(header >> 12) & 0xF] * 1000
    sample_rate = SAMPLE_RATE_TABLE[(header >> 10) & 0x3]
    channels = 1 if (header >> 6) & 0x3 == 3 else 2
    return bitrate, sample_rate, channels


def duration_from_frames(num_frames: int, sample_rate: int) -> timedelta:
    """Duration of ``num_frames`` Layer III frames of 1152 samples each.

    Raises ValueError for a non-positive sample rate.
    """
    if sample_rate <= 0:
        raise ValueError("sample rate must be positive")
    return _to_timedelta(num_frames * SAMPLES_PER_FRAME / sample_rate)


def estimate_cbr_duration(bitrate: int, file_size: int, tag_size: int) -> timedelta:
    """Duration of a constant-bitrate stream from the size of its audio data."""
    if bitrate == 0:
        return timedelta(0)
    return _to_timedelta((file_size - tag_size) * 8 / bitrate)


def parse_vbr_header(
    reader: SafeReader, frame_offset: int, sample_rate: int
) -> Optional[timedelta]:
    """Duration from a Xing/Info or VBRI header after the frame at ``frame_offset``.

    Returns None when no such header, or no frame count, is present.
    """
    try:
        buf = reader.read_at(frame_offset + _XING_OFFSET, 120, "VBR header")
    except AudioMetaError:
        return None

    marker = buf[0:4]
    if marker in (b"Xing", b"Info"):
        flags = int.from_bytes(buf[4:8], "big")
        if flags & 0x0001:
            return duration_from_frames(int.from_bytes(buf[8:12], "big"), sample_rate)
        return None
    if marker == b"VBRI":
        return duration_from_frames(int.from_bytes(buf[14:18], "big"), sample_rate)
    return None


def parse_technical_info(
    reader: SafeReader, tag_size: int, file_size: int, file: AudioFile
) -> None:
    """Find the first valid frame after the tag and fill ``file.audio``.

    Raises ValueError when no usable frame is found.
    """
    offset = tag_size
    end = file_size - 4
    while offset < end:
        chunk = reader.read_at(offset, min(_SEARCH_CHUNK, end - offset), "MP3 frame search")
        position = chunk.find(b"\xff")
        while position >= 0:
            candidate = offset + position
            try:
                header = find_frame_header(reader, candidate)
            except (ValueError, AudioMetaError):
                header = None
            if header is not None:
                bitrate, sample_rate, channels = parse_frame_header(header)
                if bitrate > 0 and sample_rate > 0:
                    audio = file.audio
                    audio.bitrate = bitrate
                    audio.sample_rate = sample_rate
                    audio.channels = channels
                    audio.codec = "MP3"
                    duration = parse_vbr_header(reader, candidate, sample_rate)
                    if duration is not None:
                        audio.duration = duration
                        audio.vbr = True
                    else:
                        audio.duration = estimate_cbr_duration(bitrate, file_size, tag_size)
                        audio.vbr = False
                    return
            position = chunk.find(b"\xff", position + 1)
        offset += len(chunk)
    raise ValueError("no valid MP3 frame found")