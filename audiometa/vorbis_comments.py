"""Mapping of Vorbis "KEY=VALUE" comments onto Tags."""

from __future__ import annotations

import re
from typing import Optional

from .tags import Tags

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")

_STRING_FIELDS = {
    "TITLE": "title",
    "ALBUM": "album",
    "ALBUMARTIST": "album_artist",
    "ORIGINALDATE": "original_date",
    "COMMENT": "comment",
    "LYRICS": "lyrics",
    "NARRATOR": "narrator",
    "PUBLISHER": "publisher",
    "SERIES": "series",
    "SERIESPART": "series_part",
    "ISBN": "isbn",
    "ASIN": "asin",
    "MUSICBRAINZ_TRACKID": "musicbrainz_track_id",
    "MUSICBRAINZ_ALBUMID": "musicbrainz_album_id",
    "MUSICBRAINZ_ARTISTID": "musicbrainz_artist_id",
    "ISRC": "isrc",
    "BARCODE": "barcode",
    "CATALOGNUMBER": "catalog_number",
    "LABEL": "label",
    "COPYRIGHT": "copyright",
}

_INT_FIELDS = {
    "TRACKNUMBER": "track_number",
    "TRACKTOTAL": "track_total",
    "TOTALTRACKS": "track_total",
    "DISCNUMBER": "disc_number",
    "DISCTOTAL": "disc_total",
    "TOTALDISCS": "disc_total",
}

_LIST_FIELDS = {
    "GENRE": "genres",
    "COMPOSER": "composers",
    "PERFORMER": "performers",
}


def _scan_int(text: str) -> Optional[int]:
    """Leading decimal integer of ``text`` (after whitespace), or None."""
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else None


def parse_comment(comment: str, tags: Tags) -> None:
    """Apply one "KEY=VALUE" comment to ``tags`` and store it as a raw tag.

    Keys are matched exactly against the usual upper-case names. Raises
    ValueError when the comment has no '='.
    """
    key, sep, value = comment.partition("=")
    if not sep:
        raise ValueError(f"missing '=' in comment: {comment}")

    if key in _STRING_FIELDS:
        setattr(tags, _STRING_FIELDS[key], value)
    elif key in _INT_FIELDS:
        number = _scan_int(value)
        if number is not None:
            setattr(tags, _INT_FIELDS[key], number)
    elif key in _LIST_FIELDS:
        getattr(tags, _LIST_FIELDS[key]).append(value)
    elif key == "ARTIST":
        tags.artist = value
        tags.artists.append(value)
    elif key == "DATE":
        tags.date = value
        if len(value) >= 4:
            year = _scan_int(value[:4])
            if year is not None and year > 0:
                tags.year = year

    tags.set(key, value)