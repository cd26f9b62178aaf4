"""ID3v2.3 / ID3v2.4 tags: frames, text encodings and chapter markers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import timedelta
from typing import List, Optional, Tuple

from .audio import Chapter
from .errors import OutOfBoundsError, UnsupportedFormatError
from .model import AudioFile
from .reader import SafeReader

_HEADER_SIZE = 10
_FLAG_EXTENDED_HEADER = 0x40
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")

_TXXX_FIELDS = {
    "narrator": "narrator",
    "series": "series",
    "series part": "series_part",
    "seriespart": "series_part",
    "part": "series_part",
    "series-part": "series_part",
    "series position": "series_part",
    "publisher": "publisher",
    "isbn": "isbn",
    "asin": "asin",
}


@dataclass
class ID3v2Header:
    """The fixed ten-byte header of an ID3v2 tag; ``size`` excludes the header."""

    version: int
    revision: int
    flags: int
    size: int
    extended_size: int = 0


@dataclass
class ID3v2Frame:
    """One frame of an ID3v2 tag, e.g. "TIT2" or "CHAP"."""

    id: str
    size: int = 0
    flags: int = 0
    data: bytes = b""


def decode_synchsafe(data: bytes) -> int:
    """Decode a four-byte synchsafe integer (7 bits per byte); 0 for other lengths."""
    if len(data) != 4:
        return 0
    return (
        (data[0] & 0x7F) << 21
        | (data[1] & 0x7F) << 14
        | (data[2] & 0x7F) << 7
        | (data[3] & 0x7F)
    )


def _scan_int(text: str) -> Optional[int]:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else None


def _decode_utf16(data: bytes, byteorder: str) -> str:
    if len(data) % 2:
        data = data[:-1]
    codec = "utf-16-le" if byteorder == "little" else "utf-16-be"
    return data.decode(codec, errors="replace")


def decode_text(data: bytes, encoding: int) -> str:
    """Decode frame text by its ID3v2 encoding byte.

    0 is ISO-8859-1, 1 UTF-16 with optional BOM (big-endian without one),
    2 UTF-16BE, 3 UTF-8; unknown encodings are read as ISO-8859-1.
    """
    if not data:
        return ""
    if encoding == 1:
        if len(data) < 2:
            return ""
        if data[:2] == b"\xff\xfe":
            return _decode_utf16(data[2:], "little")
        if data[:2] == b"\xfe\xff":
            return _decode_utf16(data[2:], "big")
        return _decode_utf16(data, "big")
    if encoding == 2:
        return _decode_utf16(data, "big")
    if encoding == 3:
        return data.decode("utf-8", errors="replace")
    return data.decode("latin-1")


def _find_terminator(data: bytes, encoding: int) -> int:
    """Index of the string terminator for ``encoding``, or -1."""
    if encoding in (1, 2):
        for index in range(0, len(data) - 1, 2):
            if data[index] == 0 and data[index + 1] == 0:
                return index
        return -1
    return data.find(b"\x00")


def _terminator_size(encoding: int) -> int:
    return 2 if encoding in (1, 2) else 1


def parse_year(text: str) -> int:
    """Year from the first four characters of ``text`` if within 1900-2100, else 0."""
    if len(text) >= 4:
        year = _scan_int(text[:4])
        if year is not None and 1900 <= year <= 2100:
            return year
    return 0


def parse_track_number(text: str) -> Tuple[int, int]:
    """Parse "N" or "N/Total"; missing or unreadable parts are 0."""
    parts = text.split("/")
    number = _scan_int(parts[0]) or 0
    total = (_scan_int(parts[1]) or 0) if len(parts) >= 2 else 0
    return number, total


def parse_text_frame(frame: ID3v2Frame, file: AudioFile) -> None:
    """Apply a standard text frame (TIT2, TPE1, TALB, ...) to ``file.tags``."""
    if not frame.data:
        return
    text = decode_text(frame.data[1:], frame.data[0])
    tags = file.tags
    fid = frame.id
    if fid == "TIT2":
        tags.title = text
    elif fid == "TPE1":
        tags.artist = text
    elif fid == "TALB":
        tags.album = text
    elif fid == "TPE2":
        tags.album_artist = text
    elif fid == "TCON":
        if text:
            tags.genres.append(text)
    elif fid == "TCOM":
        if text:
            tags.composers.append(text)
    elif fid in ("TYER", "TDRC"):
        year = parse_year(text)
        if year > 0:
            tags.year = year
    elif fid == "TRCK":
        tags.track_number, tags.track_total = parse_track_number(text)
    elif fid == "TPOS":
        tags.disc_number, tags.disc_total = parse_track_number(text)


def parse_txxx_frame(frame: ID3v2Frame, file: AudioFile) -> None:
    """Apply a user-defined text frame (description, value) to ``file.tags``."""
    if len(frame.data) < 2:
        return
    encoding = frame.data[0]
    data = frame.data[1:]
    end = _find_terminator(data, encoding)
    if end < 0:
        return
    description = decode_text(data[:end], encoding)
    value = decode_text(data[end + _terminator_size(encoding):], encoding)
    attribute = _TXXX_FIELDS.get(description.lower())
    if attribute is not None:
        setattr(file.tags, attribute, value)


def parse_comment_frame(frame: ID3v2Frame, file: AudioFile) -> None:
    """Apply a COMM frame: language, short description, then the comment text."""
    if len(frame.data) < 4:
        return
    encoding = frame.data[0]
    data = frame.data[4:]
    end = _find_terminator(data, encoding)
    if end < 0:
        file.tags.comment = decode_text(data, encoding)
        return
    file.tags.comment = decode_text(data[end + _terminator_size(encoding):], encoding)


def _chapter_title(subframes: bytes) -> str:
    if len(subframes) < 10 or subframes[:4] != b"TIT2":
        return ""
    size = decode_synchsafe(subframes[4:8])
    if len(subframes) < 10 + size:
        return ""
    title_data = subframes[10 : 10 + size]
    if not title_data:
        return ""
    return decode_text(title_data[1:], title_data[0])


def parse_chapter_frames(
    frames: List[ID3v2Frame], total_duration: timedelta
) -> List[Chapter]:
    """Build chapters from CHAP frames, ordered by start time.

    A chapter without a TIT2 subframe takes its element ID as title.
    Frames too short to hold the times are skipped.
    """
    found: List[Tuple[int, int, str]] = []
    for frame in frames:
        data = frame.data
        if len(data) < 20:
            continue
        end = data.find(b"\x00")
        if end < 0:
            continue
        element_id = data[:end].decode("latin-1")
        data = data[end + 1 :]
        if len(data) < 16:
            continue
        start_ms = int.from_bytes(data[0:4], "big")
        end_ms = int.from_bytes(data[4:8], "big")
        title = _chapter_title(data[16:]) or element_id
        found.append((start_ms, end_ms, title))

    found.sort(key=lambda item: item[0])
    return [
        Chapter(
            index=position,
            title=title,
            start_time=timedelta(milliseconds=start_ms),
            end_time=timedelta(milliseconds=end_ms),
        )
        for position, (start_ms, end_ms, title) in enumerate(found, start=1)
    ]


def _read_header(reader: SafeReader) -> ID3v2Header:
    try:
        raw = reader.read_at(0, _HEADER_SIZE, "ID3v2 header")
    except OutOfBoundsError as exc:
        raise UnsupportedFormatError(reader.path, "failed to read ID3v2 header") from exc
    if raw[:3] != b"ID3":
        raise UnsupportedFormatError(reader.path, "not an ID3v2 file (missing ID3 header)")
    header = ID3v2Header(
        version=raw[3],
        revision=raw[4],
        flags=raw[5],
        size=decode_synchsafe(raw[6:10]),
    )
    if header.version not in (3, 4):
        raise UnsupportedFormatError(
            reader.path, f"unsupported ID3v2 version: 2.{header.version}"
        )
    return header


def _frames_start(reader: SafeReader, header: ID3v2Header) -> int:
    offset = _HEADER_SIZE
    if not header.flags & _FLAG_EXTENDED_HEADER:
        return offset
    try:
        raw = reader.read_at(offset, 4, "extended header size")
    except OutOfBoundsError:
        return offset
    if header.version == 4:
        header.extended_size = decode_synchsafe(raw)
        return offset + header.extended_size
    header.extended_size = int.from_bytes(raw, "big")
    return offset + header.extended_size + 4


def parse_id3v2(reader: SafeReader, file: AudioFile) -> int:
    """Read the ID3v2 tag at the start of the file into ``file``.

    Returns the size of the whole tag including its header. Raises
    UnsupportedFormatError when there is no readable ID3v2.3/2.4 tag.
    """
    header = _read_header(reader)
    tag_end = _HEADER_SIZE + header.size
    offset = _frames_start(reader, header)
    chapters: List[ID3v2Frame] = []

    while offset < tag_end:
        try:
            raw = reader.read_at(offset, 10, "frame header")
        except OutOfBoundsError:
            break
        if raw[0] == 0:
            break

        frame_id = raw[0:4].decode("latin-1")
        if header.version == 4:
            frame_size = decode_synchsafe(raw[4:8])
        else:
            frame_size = int.from_bytes(raw[4:8], "big")
        flags = int.from_bytes(raw[8:10], "big")

        try:
            data = reader.read_at(offset + 10, frame_size, f"frame {frame_id} data")
        except OutOfBoundsError as exc:
            file.add_warning("metadata", f"failed to read frame {frame_id}: {exc}")
            offset += 10 + frame_size
            continue

        frame = ID3v2Frame(id=frame_id, size=frame_size, flags=flags, data=data)
        if frame_id == "TXXX":
            parse_txxx_frame(frame, file)
        elif frame_id.startswith("T"):
            parse_text_frame(frame, file)
        elif frame_id == "COMM":
            parse_comment_frame(frame, file)
        elif frame_id == "CHAP":
            chapters.append(frame)

        offset += 10 + frame_size

    if chapters:
        file.chapters = parse_chapter_frames(chapters, file.audio.duration)
    return tag_end