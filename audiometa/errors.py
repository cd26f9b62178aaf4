"""Exceptions raised while reading audio files, and non-fatal parse warnings."""

from __future__ import annotations

from dataclasses import dataclass


class AudioMetaError(Exception):
    """Base class for every error raised by this package."""


class OutOfBoundsError(AudioMetaError):
    """A read would go beyond the end (or before the start) of the file."""

    def __init__(self, path: str, offset: int, length: int, size: int, what: str) -> None:
        self.path = path
        self.offset = offset
        self.length = length
        self.size = size
        self.what = what
        if offset >= size:
            message = (
                f"{path}: offset {offset} out of bounds (file size: {size}) "
                f"while reading {what}"
            )
        else:
            message = (
                f"{path}: read of {length} bytes at offset {offset} would exceed "
                f"file size {size} while reading {what}"
            )
        super().__init__(message)


class UnsupportedFormatError(AudioMetaError):
    """The file is not in a format this package understands."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: unsupported format: {reason}")


class CorruptedFileError(AudioMetaError):
    """The file's structure is invalid."""

    def __init__(self, path: str, offset: int, reason: str) -> None:
        self.path = path
        self.offset = offset
        self.reason = reason
        super().__init__(f"{path}: corrupted file at offset {offset}: {reason}")


@dataclass(frozen=True)
class ParseWarning:
    """A non-fatal issue met while parsing.

    ``stage`` is one of "metadata", "technical", "chapters" or "artwork";
    ``offset`` is the file offset of the issue, or 0 when not applicable.
    """

    stage: str
    message: str
    offset: int = 0

    def __str__(self) -> str:
        if self.offset > 0:
            return f"{self.stage} (at offset {self.offset}): {self.message}"
        return f"{self.stage}: {self.message}"