"""Parser for MP3 files: ID3v2 tags plus MPEG frame properties."""

from __future__ import annotations

from typing import List

from .artwork import Artwork
from .errors import AudioMetaError
from .formats import Format
from .id3v2 import parse_id3v2
from .model import AudioFile
from .mp3_technical import parse_technical_info
from .reader import SafeReader, Source
from .registry import register


class MP3Parser:
    """Reads tags, chapters and technical properties of MP3 files."""

    def parse(self, source: Source, size: int, path: str) -> AudioFile:
        """Parse an MP3 file; problems with the tag or frames become warnings."""
        reader = SafeReader(source, size, path)
        file = AudioFile(path=path, format=Format.MP3, size=size)

        try:
            tag_size = parse_id3v2(reader, file)
        except AudioMetaError as exc:
            file.add_warning("metadata", f"ID3v2 parsing failed: {exc}")
            tag_size = 0

        try:
            parse_technical_info(reader, tag_size, size, file)
        except (ValueError, AudioMetaError) as exc:
            file.add_warning("technical", f"failed to parse MP3 technical info: {exc}")

        if not file.tags.narrator and file.tags.composers:
            file.tags.narrator = file.tags.composers[0]
        return file

    def extract_artwork(self, source: Source, size: int, path: str) -> List[Artwork]:
        """Embedded pictures are not read from MP3 files; always returns an empty list."""
        return []


register(Format.MP3, MP3Parser())