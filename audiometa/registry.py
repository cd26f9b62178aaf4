"""Lookup table from audio format to the parser that handles it."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from .formats import Format


@runtime_checkable
class FormatParser(Protocol):
    """Anything that can turn the bytes of one audio file into parsed metadata."""

    def parse(self, source: Any, size: int, path: str) -> Any:
        """Parse the file and return its metadata."""


@runtime_checkable
class ArtworkExtractor(Protocol):
    """A parser that can also pull embedded pictures out of a file."""

    def extract_artwork(self, source: Any, size: int, path: str) -> List[Any]:
        """Return the artwork embedded in the file."""


_parsers: Dict[Format, FormatParser] = {}


def register(fmt: Format, parser: FormatParser) -> None:
    """Register ``parser`` for ``fmt``, replacing any earlier registration."""
    _parsers[fmt] = parser


def get(fmt: Format) -> Optional[FormatParser]:
    """Return the parser registered for ``fmt``, or None."""
    return _parsers.get(fmt)