"""Audio format identification from magic bytes."""

from __future__ import annotations

from enum import IntEnum
from typing import Tuple

from .errors import OutOfBoundsError, UnsupportedFormatError
from .reader import SafeReader, Source


class Format(IntEnum):
    """Detected audio file format."""

    UNKNOWN = 0
    FLAC = 1
    MP3 = 2
    M4A = 3
    M4B = 4
    OGG = 5
    OPUS = 6
    WAV = 7
    AIFF = 8

    def __str__(self) -> str:
        return _FORMAT_LABELS[self]

    def extensions(self) -> Tuple[str, ...]:
        """Common file extensions for this format (empty for UNKNOWN)."""
        return _FORMAT_EXTENSIONS.get(self, ())


_FORMAT_LABELS = {
    Format.UNKNOWN: "Unknown",
    Format.FLAC: "FLAC",
    Format.MP3: "MP3",
    Format.M4A: "M4A",
    Format.M4B: "M4B",
    Format.OGG: "Ogg Vorbis",
    Format.OPUS: "Opus",
    Format.WAV: "WAV",
    Format.AIFF: "AIFF",
}

_FORMAT_EXTENSIONS = {
    Format.FLAC: (".flac",),
    Format.MP3: (".mp3",),
    Format.M4A: (".m4a", ".mp4", ".m4p"),
    Format.M4B: (".m4b",),
    Format.OGG: (".ogg", ".oga"),
    Format.OPUS: (".opus",),
    Format.WAV: (".wav",),
    Format.AIFF: (".aiff", ".aif"),
}

_M4A_BRANDS = (b"M4A ", b"mp42", b"isom")


def _tag_at(reader: SafeReader, offset: int, what: str) -> bytes:
    try:
        return reader.read_at(offset, 4, what)
    except OutOfBoundsError:
        return b""


def detect_format(source: Source, size: int, path: str = "") -> Format:
    """Identify the format of a file from its leading bytes.

    Raises UnsupportedFormatError when the format is not recognised.
    """
    if size < 4:
        raise UnsupportedFormatError(path, "file too small")

    reader = SafeReader(source, size, path)
    try:
        magic = reader.read_at(0, 4, "file magic bytes")
    except OutOfBoundsError as exc:
        raise UnsupportedFormatError(path, "failed to read file header") from exc

    if magic == b"fLaC":
        return Format.FLAC
    if magic[:3] == b"ID3":
        return Format.MP3
    if magic[0] == 0xFF and magic[1] & 0xE0 == 0xE0:
        return Format.MP3
    if magic == b"OggS":
        return Format.OGG
    if magic == b"RIFF" and size >= 12 and _tag_at(reader, 8, "WAVE tag") == b"WAVE":
        return Format.WAV
    if magic == b"FORM" and size >= 12 and _tag_at(reader, 8, "AIFF tag") in (b"AIFF", b"AIFC"):
        return Format.AIFF

    try:
        atom_size = reader.read_int(0, 4, "ftyp atom size")
        atom_type = reader.read_at(4, 4, "ftyp atom type")
    except OutOfBoundsError as exc:
        raise UnsupportedFormatError(path, "failed to read file header") from exc

    if atom_type != b"ftyp":
        raise UnsupportedFormatError(path, "unsupported file format")
    if atom_size < 16:
        raise UnsupportedFormatError(path, "ftyp atom too small")

    try:
        major_brand = reader.read_at(8, 4, "major brand")
    except OutOfBoundsError as exc:
        raise UnsupportedFormatError(path, "failed to read major brand") from exc

    if major_brand == b"M4B ":
        return Format.M4B
    if major_brand in _M4A_BRANDS:
        return Format.M4A
    raise UnsupportedFormatError(path, "unsupported file brand")