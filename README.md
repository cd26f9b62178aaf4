# audiometa

A pure-Python library for reading metadata from audio files. It has no
third-party dependencies.

It reads:

- **MP3** (`audiometa.mp3_parser.MP3Parser`): ID3v2.3 and ID3v2.4 tags
  (text frames, `TXXX` custom fields, `COMM` comments, `CHAP` chapters) and
  MPEG Layer III frame headers. It reports bitrate, sample rate and channels,
  and takes the duration from a Xing, Info or VBRI header, or estimates it
  from the file size for constant-bitrate files. When no narrator is tagged,
  the first composer is used.
- **Ogg Vorbis** and **Ogg Opus** (`audiometa.ogg_parser.OggParser`):
  identification headers, Vorbis comments and OpusTags, `CHAPTERxxx` /
  `CHAPTERxxxNAME` chapters, and a duration worked out from the last page's
  granule position. For Opus the bitrate is estimated from file size and
  duration.

`audiometa.formats.detect_format` recognises FLAC, MP3, M4A, M4B, Ogg, WAV
and AIFF from their magic bytes. There are also helpers for audiobook series
positions.

## Installation

```
pip install audiometa
```

## Detecting a format

```python
import os

from audiometa.formats import detect_format

path = "song.mp3"
with open(path, "rb") as source:
    fmt = detect_format(source, os.path.getsize(path), path)

print(fmt, fmt.extensions())   # "MP3 ('.mp3',)"
```

If no format is recognised, `detect_format` raises
`audiometa.errors.UnsupportedFormatError`. Both Vorbis and Opus streams are
reported as `Format.OGG`.

## Parsing a file

Every parser takes a source (bytes or a seekable binary file), its size and
its path, and returns an `audiometa.model.AudioFile`.

```python
import os

from audiometa.mp3_parser import MP3Parser

path = "audiobook.mp3"
with open(path, "rb") as source:
    file = MP3Parser().parse(source, os.path.getsize(path), path)

print(file.tags.title, file.tags.artist, file.tags.album)
print(file.audio)              # e.g. "MP3 44.1kHz stereo 128kbps"
for chapter in file.chapters:
    print(chapter.index, chapter.title, chapter.start_time, chapter.end_time)
for warning in file.warnings:
    print(warning)
```

Ogg files are read the same way with `OggParser().parse(...)`; the codec is
chosen from the first packet.

Importing `audiometa.mp3_parser` or `audiometa.ogg_parser` registers its
parser, after which `audiometa.registry.get(Format.MP3)` or
`get(Format.OGG)` returns it.

Parsing is forgiving. A problem that does not stop extraction, such as a
truncated comment, an unreadable frame or a missing duration, is recorded in
`file.warnings` as a `ParseWarning` and parsing goes on. Structural failures
raise exceptions derived from `audiometa.errors.AudioMetaError`:
`OutOfBoundsError`, `UnsupportedFormatError` and `CorruptedFileError`.

## Tags

`audiometa.tags.Tags` holds the format-independent fields, for example
`title`, `artist`, `album`, `genres`, `composers`, `narrator`, `series` and
`series_part`. It also keeps the raw key/value pairs of the file (for Ogg
files, every Vorbis comment):

```python
from audiometa.tags import Tags

tags = Tags(title="Example")
tags.set("GENRE", "Rock", "Alternative")
tags.get("GENRE")                       # ["Rock", "Alternative"]
tags.get_first("GENRE")                 # "Rock"
tags.get_best("ALBUMARTIST", "GENRE")   # "Rock": first key that has a value

fallback = Tags(album="Fallback Album", genres=["rock"])
copy = tags.clone()
copy.merge(fallback)                    # fills empty fields, unions list fields
copy.album                              # "Fallback Album"
dict(copy.filter(lambda key: key.startswith("GEN")))
```

## Audiobook series positions

```python
from audiometa.series import (
    extract_series_part_from_path,
    extract_series_part_from_text,
    is_likely_series_position,
)

extract_series_part_from_text("The Wingfeather Saga, Book 2: North or Be Eaten")  # "2"
extract_series_part_from_text("Book 01.5")                                         # "1.5"
extract_series_part_from_path("/audiobooks/Author/Series/0.5 - The Last Wish/file.m4b")  # "0.5"
is_likely_series_position(2, 3)    # True
is_likely_series_position(2, 25)   # False
```

## Options and version

`audiometa.options` provides `with_strict_parsing()`,
`with_artwork_preload()`, `with_ignore_warnings()` and
`with_max_artwork_size(num_bytes)`. Pass any of them to
`build_options(...)` to get an `OpenOptions` value.

`audiometa.version.get_version()` returns the library version;
`get_version_info()` returns a `VersionInfo` with build details.

## What it does not do

- There is no single "open this path" function: pick a parser yourself, or
  use `detect_format` with `audiometa.registry.get`.
- FLAC, M4A, M4B, WAV and AIFF are only detected, not parsed.
- Artwork is not extracted: `MP3Parser.extract_artwork` always returns an
  empty list.
- `OpenOptions` is only a settings value; the parsers do not read it.
- Nothing is written back to files; `Tags.set` changes only the in-memory
  tags.

## Running the tests

```
pip install -e ".[test]"
pytest
```