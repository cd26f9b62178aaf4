"""Chapter markers stored as CHAPTERxxx / CHAPTERxxxNAME Vorbis comments."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import timedelta
from typing import Dict, Iterable, List, Optional

from .audio import Chapter

_INT = re.compile(r"[+-]?\d+")
_FLOAT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass
class _PendingChapter:
    number: int
    timestamp: str = ""
    title: str = ""


def _atoi(text: str) -> Optional[int]:
    return int(text) if _INT.fullmatch(text) else None


def parse_chapter_timestamp(ts: str) -> timedelta:
    """Parse "HH:MM:SS.mmm", "MM:SS.mmm" or "SS.mmm" into a duration.

    Raises ValueError when the text is malformed or a value is out of range.
    """
    parts = ts.split(":")
    hours = minutes = 0
    if len(parts) > 3:
        raise ValueError(f"invalid timestamp format: {ts}")
    if len(parts) == 3:
        h = _atoi(parts[0])
        if h is None:
            raise ValueError(f"invalid hours in timestamp: {ts}")
        hours = h
    if len(parts) >= 2:
        m = _atoi(parts[-2])
        if m is None:
            raise ValueError(f"invalid minutes in timestamp: {ts}")
        minutes = m
    if not _FLOAT.fullmatch(parts[-1]):
        raise ValueError(f"invalid seconds in timestamp: {ts}")
    seconds = float(parts[-1])

    if hours < 0 or minutes < 0 or minutes >= 60 or seconds < 0 or seconds >= 60:
        raise ValueError(f"timestamp values out of range: {ts}")

    nanoseconds = int((hours * 3600 + minutes * 60 + seconds) * 1e9)
    return timedelta(microseconds=nanoseconds // 1000)


def parse_chapters(comments: Iterable[str], file_duration: timedelta) -> List[Chapter]:
    """Build chapters from CHAPTERxxx comments, ordered by chapter number.

    Each chapter ends where the next begins; the last ends at
    ``file_duration`` when that is positive. Chapters without a timestamp are
    dropped; unnamed ones are called "Chapter N". An entry whose timestamp
    cannot be parsed is left as an empty placeholder with index 0.
    """
    pending: Dict[int, _PendingChapter] = {}

    for comment in comments:
        key, sep, value = comment.partition("=")
        if not sep:
            continue
        key = key.strip().upper()
        value = value.strip()
        if not key.startswith("CHAPTER"):
            continue
        rest = key[len("CHAPTER"):]
        is_name = key.endswith("NAME")
        if is_name and rest.endswith("NAME"):
            rest = rest[: -len("NAME")]
        number = _atoi(rest)
        if number is None:
            continue
        entry = pending.setdefault(number, _PendingChapter(number))
        if is_name:
            entry.title = value
        else:
            entry.timestamp = value

    ordered = sorted(
        (entry for entry in pending.values() if entry.timestamp),
        key=lambda entry: entry.number,
    )

    chapters: List[Chapter] = []
    for position, entry in enumerate(ordered):
        try:
            start = parse_chapter_timestamp(entry.timestamp)
        except ValueError:
            chapters.append(Chapter(index=0, title=""))
            continue

        if position < len(ordered) - 1:
            try:
                end = parse_chapter_timestamp(ordered[position + 1].timestamp)
            except ValueError:
                end = timedelta(0)
        elif file_duration > timedelta(0):
            end = file_duration
        else:
            end = timedelta(0)

        chapters.append(
            Chapter(
                index=position + 1,
                title=entry.title or f"Chapter {entry.number}",
                start_time=start,
                end_time=end,
            )
        )
    return chapters