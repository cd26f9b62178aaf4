"""Format-agnostic tag metadata with access to raw, format-specific keys."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Callable, Dict, Iterator, List, Optional, Tuple

_LIST_FIELDS = ("artists", "genres", "composers", "performers")


def _merge_unique(a: List[str], b: List[str]) -> List[str]:
    """Append values of ``b`` to a copy of ``a``, skipping case-insensitive duplicates."""
    if not b:
        return a
    result = list(a)
    for value in b:
        folded = value.casefold()
        if not any(existing.casefold() == folded for existing in result):
            result.append(value)
    return result


@dataclass(eq=False)
class Tags:
    """Unified view of an audio file's metadata.

    Well-known fields are attributes; every key as stored in the file is also
    kept in a raw table reachable through ``get``, ``items`` and ``filter``.
    """

    title: str = ""
    artist: str = ""
    album: str = ""
    album_artist: str = ""

    artists: List[str] = field(default_factory=list)
    genres: List[str] = field(default_factory=list)
    composers: List[str] = field(default_factory=list)
    performers: List[str] = field(default_factory=list)

    year: int = 0
    date: str = ""
    original_date: str = ""

    track_number: int = 0
    track_total: int = 0
    disc_number: int = 0
    disc_total: int = 0

    comment: str = ""
    lyrics: str = ""

    narrator: str = ""
    publisher: str = ""
    series: str = ""
    series_part: str = ""
    isbn: str = ""
    asin: str = ""

    musicbrainz_track_id: str = ""
    musicbrainz_album_id: str = ""
    musicbrainz_artist_id: str = ""
    isrc: str = ""
    barcode: str = ""
    catalog_number: str = ""
    label: str = ""
    copyright: str = ""

    _raw: Dict[str, List[str]] = field(default_factory=dict, init=False, repr=False)

    @classmethod
    def _scalar_names(cls) -> List[str]:
        return [f.name for f in fields(cls) if f.init and f.name not in _LIST_FIELDS]

    def items(self) -> Iterator[Tuple[str, List[str]]]:
        """Yield every raw tag key with a copy of its values."""
        for key, values in self._raw.items():
            yield key, list(values)

    def get(self, key: str) -> List[str]:
        """Return a copy of all values stored under ``key`` (empty if absent)."""
        return list(self._raw.get(key, ()))

    def get_first(self, key: str) -> str:
        """Return the first value stored under ``key``, or "" if there is none."""
        values = self._raw.get(key)
        return values[0] if values else ""

    def get_best(self, *args: str) -> str:
        """Return the first non-empty value among the candidate keys, or ""."""
        for key in args:
            value = self.get_first(key)
            if value:
                return value
        return ""

    def set(self, key: str, *args: str) -> None:
        """Store ``args`` under ``key``; with no values the key is removed."""
        if not args:
            self._raw.pop(key, None)
            return
        self._raw[key] = list(args)

    def merge(self, other: Optional["Tags"]) -> None:
        """Fill empty fields from ``other``, union list fields and copy its raw tags."""
        if other is None:
            return
        for name in self._scalar_names():
            if not getattr(self, name):
                setattr(self, name, getattr(other, name))
        for name in _LIST_FIELDS:
            setattr(self, name, _merge_unique(getattr(self, name), getattr(other, name)))
        for key, values in other._raw.items():
            self._raw[key] = list(values)

    def clone(self) -> "Tags":
        """Return a deep copy."""
        copy = Tags(**{name: getattr(self, name) for name in self._scalar_names()})
        for name in _LIST_FIELDS:
            setattr(copy, name, list(getattr(self, name)))
        copy._raw = {key: list(values) for key, values in self._raw.items()}
        return copy

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tags):
            return NotImplemented
        for f in fields(self):
            if getattr(self, f.name) != getattr(other, f.name):
                return False
        return True

    def filter(self, predicate: Callable[[str], bool]) -> Iterator[Tuple[str, List[str]]]:
        """Yield the raw tags whose key satisfies ``predicate``."""
        for key, values in self._raw.items():
            if predicate(key):
                yield key, list(values)