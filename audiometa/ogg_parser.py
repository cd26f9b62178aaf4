"""Parser for Ogg files carrying Vorbis or Opus audio."""

from __future__ import annotations

from datetime import timedelta
from typing import List

from .errors import AudioMetaError, CorruptedFileError, UnsupportedFormatError
from .formats import Format
from .model import AudioFile
from .ogg_codecs import (
    parse_opus_head,
    parse_opus_tags,
    parse_vorbis_comment,
    parse_vorbis_identification,
)
from .ogg_container import OggPage, extract_packets, find_last_granule_position, read_page
from .reader import SafeReader, Source
from .registry import register

_HEADER_PAGES = 3
_OPUS_RATE = 48000
_OPUS_HEADER_OVERHEAD = 5000


def detect_ogg_codec(first_packet: bytes) -> str:
    """Return "opus", "vorbis" or "unknown" from the first packet's magic."""
    if first_packet[:8] == b"OpusHead":
        return "opus"
    if len(first_packet) >= 7 and first_packet[0] == 0x01 and first_packet[1:7] == b"vorbis":
        return "vorbis"
    return "unknown"


def estimate_opus_bitrate(file_size: int, duration: timedelta) -> int:
    """Estimate bits per second from file size, allowing about 5 kB for headers."""
    seconds = duration.total_seconds()
    if seconds == 0:
        return 0
    audio_size = file_size - _OPUS_HEADER_OVERHEAD
    if audio_size < 0:
        audio_size = file_size
    return int(audio_size * 8 / seconds)


def calculate_duration(reader: SafeReader, file_size: int, sample_rate: int) -> timedelta:
    """Duration from the last page's granule position at ``sample_rate``.

    Raises ValueError for a zero sample rate or an unset granule position.
    """
    if sample_rate == 0:
        raise ValueError("sample rate is zero")
    granule = find_last_granule_position(reader, file_size)
    if granule < 0:
        raise ValueError("granule position not set")
    nanoseconds = int(granule / sample_rate * 1e9)
    return timedelta(microseconds=nanoseconds // 1000)


class OggParser:
    """Reads tags and technical properties of Ogg Vorbis and Ogg Opus files."""

    def parse(self, source: Source, size: int, path: str) -> AudioFile:
        """Parse an Ogg file.

        Raises CorruptedFileError when the stream is not valid Ogg or its
        headers cannot be read, and UnsupportedFormatError for other codecs.
        """
        reader = SafeReader(source, size, path)
        if reader.read_at(0, 4, "Ogg magic bytes") != b"OggS":
            raise CorruptedFileError(path, 0, "invalid Ogg magic bytes")

        file = AudioFile(path=path, format=Format.OGG, size=size)

        pages: List[OggPage] = []
        offset = 0
        for index in range(_HEADER_PAGES):
            if offset >= size:
                break
            try:
                page, offset_after = read_page(reader, offset)
            except AudioMetaError as exc:
                if index == 0:
                    raise CorruptedFileError(
                        path, offset, f"failed to read first Ogg page: {exc}"
                    ) from exc
                file.add_warning("metadata", f"failed to read Ogg page {index}: {exc}", offset)
                break
            pages.append(page)
            offset = offset_after

        if not pages:
            raise CorruptedFileError(path, 0, "no Ogg pages found")

        packets = extract_packets(pages)
        if len(packets) < 2:
            raise CorruptedFileError(
                path, 0, f"not enough packets found (need at least 2, got {len(packets)})"
            )

        codec = detect_ogg_codec(packets[0])
        if codec == "vorbis":
            self._parse_vorbis(reader, packets, file)
        elif codec == "opus":
            self._parse_opus(reader, packets, file)
        else:
            raise UnsupportedFormatError(path, f'unknown or unsupported Ogg codec: "{codec}"')
        return file

    @staticmethod
    def _parse_vorbis(reader: SafeReader, packets: List[bytes], file: AudioFile) -> None:
        try:
            parse_vorbis_identification(packets[0], file)
        except ValueError as exc:
            raise CorruptedFileError(
                file.path, 0, f"failed to parse Vorbis identification header: {exc}"
            ) from exc

        try:
            parse_vorbis_comment(packets[1], file)
        except ValueError as exc:
            file.add_warning("metadata", f"failed to parse Vorbis comment header: {exc}")

        if file.audio.sample_rate > 0:
            try:
                file.audio.duration = calculate_duration(
                    reader, file.size, file.audio.sample_rate
                )
            except (ValueError, AudioMetaError) as exc:
                file.add_warning("technical", f"failed to calculate duration: {exc}")

    @staticmethod
    def _parse_opus(reader: SafeReader, packets: List[bytes], file: AudioFile) -> None:
        try:
            parse_opus_head(packets[0], file)
        except ValueError as exc:
            raise CorruptedFileError(
                file.path, 0, f"failed to parse OpusHead header: {exc}"
            ) from exc

        try:
            parse_opus_tags(packets[1], file)
        except ValueError as exc:
            file.add_warning("metadata", f"failed to parse OpusTags header: {exc}")

        try:
            file.audio.duration = calculate_duration(reader, file.size, _OPUS_RATE)
        except (ValueError, AudioMetaError) as exc:
            file.add_warning("technical", f"failed to calculate duration: {exc}")

        if file.audio.duration > timedelta(0):
            file.audio.bitrate = estimate_opus_bitrate(file.size, file.audio.duration)


register(Format.OGG, OggParser())