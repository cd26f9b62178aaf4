"""The parsed representation of one audio file."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .artwork import Artwork, RawTag
from .audio import AudioInfo, Chapter
from .errors import ParseWarning
from .formats import Format
from .tags import Tags


@dataclass
class AudioFile:
    """Metadata, technical properties, chapters and warnings of an audio file."""

    path: str = ""
    format: Format = Format.UNKNOWN
    size: int = 0
    tags: Tags = field(default_factory=Tags)
    audio: AudioInfo = field(default_factory=AudioInfo)
    chapters: List[Chapter] = field(default_factory=list)
    warnings: List[ParseWarning] = field(default_factory=list)
    artwork: List[Artwork] = field(default_factory=list, repr=False)
    raw_tags: Dict[str, List[RawTag]] = field(default_factory=dict, repr=False)
    source: Optional[Any] = field(default=None, repr=False, compare=False)
    parser: Optional[Any] = field(default=None, repr=False, compare=False)

    def add_warning(self, stage: str, message: str, offset: int = 0) -> ParseWarning:
        """Record a non-fatal issue and return it."""
        warning = ParseWarning(stage, message, offset)
        self.warnings.append(warning)
        return warning