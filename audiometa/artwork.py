"""Embedded artwork and raw tag values."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

_KB = 1024
_MB = 1024 * _KB


class ArtworkType(IntEnum):
    """Purpose of a picture, numbered as in ID3v2 APIC and FLAC pictures."""

    OTHER = 0
    ICON = 1
    OTHER_ICON = 2
    FRONT_COVER = 3
    BACK_COVER = 4
    LEAFLET = 5
    MEDIA = 6
    LEAD_ARTIST = 7
    ARTIST = 8
    CONDUCTOR = 9
    BAND = 10
    COMPOSER = 11
    LYRICIST = 12
    RECORDING_LOCATION = 13
    DURING_RECORDING = 14
    DURING_PERFORMANCE = 15
    VIDEO_CAPTURE = 16
    BRIGHT_FISH = 17
    ILLUSTRATION = 18
    BAND_LOGOTYPE = 19
    PUBLISHER_LOGOTYPE = 20

    def __str__(self) -> str:
        return _ARTWORK_LABELS[self]


_ARTWORK_LABELS = {
    ArtworkType.OTHER: "Other",
    ArtworkType.ICON: "File icon (32x32 PNG)",
    ArtworkType.OTHER_ICON: "Other file icon",
    ArtworkType.FRONT_COVER: "Front cover",
    ArtworkType.BACK_COVER: "Back cover",
    ArtworkType.LEAFLET: "Leaflet page",
    ArtworkType.MEDIA: "Media (CD/vinyl label)",
    ArtworkType.LEAD_ARTIST: "Lead artist/performer/soloist",
    ArtworkType.ARTIST: "Artist/performer",
    ArtworkType.CONDUCTOR: "Conductor",
    ArtworkType.BAND: "Band/orchestra",
    ArtworkType.COMPOSER: "Composer",
    ArtworkType.LYRICIST: "Lyricist/text writer",
    ArtworkType.RECORDING_LOCATION: "Recording location",
    ArtworkType.DURING_RECORDING: "During recording",
    ArtworkType.DURING_PERFORMANCE: "During performance",
    ArtworkType.VIDEO_CAPTURE: "Movie/video screen capture",
    ArtworkType.BRIGHT_FISH: "A bright colored fish",
    ArtworkType.ILLUSTRATION: "Illustration",
    ArtworkType.BAND_LOGOTYPE: "Band/artist logotype",
    ArtworkType.PUBLISHER_LOGOTYPE: "Publisher/studio logotype",
}

_MIME_FORMATS = {
    "image/jpeg": "JPEG",
    "image/png": "PNG",
    "image/gif": "GIF",
    "image/bmp": "BMP",
    "image/tiff": "TIFF",
    "image/webp": "WebP",
}


def format_size(num_bytes: int) -> str:
    """Format a byte count as e.g. "512B", "245KB" or "1.5MB"."""
    if num_bytes >= _MB:
        return f"{num_bytes / _MB:.1f}MB"
    if num_bytes >= _KB:
        return f"{num_bytes // _KB}KB"
    return f"{num_bytes}B"


def mime_to_format(mime: str) -> str:
    """Short format name for an image MIME type; "Image" when unknown."""
    return _MIME_FORMATS.get(mime, "Image")


@dataclass
class Artwork:
    """An embedded picture such as a cover image."""

    type: ArtworkType = ArtworkType.OTHER
    mime_type: str = ""
    description: str = ""
    data: bytes = b""
    width: int = 0
    height: int = 0

    def __str__(self) -> str:
        dims = f"{self.width}x{self.height} " if self.width > 0 and self.height > 0 else ""
        return (
            f"{self.type} ({dims}{mime_to_format(self.mime_type)}, "
            f"{format_size(len(self.data))})"
        )


class RawTagType(IntEnum):
    """Semantic type of a raw tag value."""

    TEXT = 0
    BINARY = 1
    IMAGE = 2
    COUNTER = 3
    URL = 4


@dataclass
class RawTag:
    """An unmapped tag kept in its original binary form."""

    key: str
    value: bytes = b""
    encoding: str = "UTF-8"
    type: RawTagType = RawTagType.TEXT

    def __str__(self) -> str:
        if self.type in (RawTagType.TEXT, RawTagType.URL):
            return self.value.decode("utf-8", errors="replace")
        labels = {
            RawTagType.IMAGE: "image",
            RawTagType.BINARY: "binary",
            RawTagType.COUNTER: "counter",
        }
        label = labels.get(self.type)
        if label is None:
            return f"<{len(self.value)} bytes>"
        return f"<{label}: {len(self.value)} bytes>"