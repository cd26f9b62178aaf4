"""Heuristics for finding a book's position within a series."""

from __future__ import annotations

import math
import os
import re
from decimal import Decimal

_NUM = r"(\d+(?:\.\d+)?)"

_SERIES_PATTERNS = tuple(
    re.compile(pattern, flags | re.ASCII)
    for pattern, flags in (
        (rf"book\s+{_NUM}", re.IGNORECASE),
        (rf"part\s+{_NUM}", re.IGNORECASE),
        (rf"vol(?:ume)?\.?\s+{_NUM}", re.IGNORECASE),
        (rf"#{_NUM}", 0),
        (rf"^{_NUM}\s*[-–—:]", 0),
        (rf"[-–—:]\s*book\s+{_NUM}", 0),
        (rf"\({_NUM}\)", 0),
        (rf"^{_NUM}$", 0),
    )
)

_INTEGER = re.compile(r"[+-]?\d+", re.ASCII)
_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


def normalize_series_part(part: str) -> str:
    """Normalise a series position: "01" -> "1", "01.5" -> "1.5", ".5" -> "0.5".

    Text that is not a number is returned unchanged.
    """
    if not part:
        return ""

    if "." in part:
        if not _DECIMAL.fullmatch(part):
            return part
        number = float(part)
        if math.isinf(number) or math.isnan(number):
            return part
        return format(Decimal(repr(number)).normalize(), "f")

    if _INTEGER.fullmatch(part):
        number = int(part)
        if _INT64_MIN <= number <= _INT64_MAX:
            return str(number)
    return part


def extract_series_part_from_text(text: str) -> str:
    """Find a series position in text such as "Book 2", "#0.5" or "3 - Title".

    Returns the normalised position, or "" when none is found.
    """
    if not text:
        return ""
    for pattern in _SERIES_PATTERNS:
        match = pattern.search(text)
        if match:
            return normalize_series_part(match.group(1))
    return ""


def is_likely_series_position(track_num: int, track_total: int) -> bool:
    """Guess whether a track number/total pair denotes a book's place in a series
    rather than a chapter or file position."""
    if track_num == 0 or track_total == 0:
        return False
    if track_num > track_total:
        return False
    # 1/1 is what most single-file audiobooks carry; it says nothing about series.
    if track_num == 1 and track_total == 1:
        return False
    if track_total <= 10:
        return True
    if track_total <= 30:
        return track_num / track_total > 0.33 or track_num == 1
    # Larger totals are treated as chapters.
    return False


def extract_series_part_from_path(path: str) -> str:
    """Find a series position in the name of the file's parent directory."""
    if not path:
        return ""
    parent = os.path.normpath(os.path.dirname(path))
    return extract_series_part_from_text(os.path.basename(parent))