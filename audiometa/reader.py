"""Bounds-checked random access reads over bytes or binary files."""

from __future__ import annotations

from typing import BinaryIO, Literal, Union

from .errors import OutOfBoundsError

Source = Union[bytes, bytearray, memoryview, BinaryIO]


class SafeReader:
    """Reads byte ranges from a source of known size, refusing out-of-range reads.

    The source is either a bytes-like object or a seekable binary file.
    """

    def __init__(self, source: Source, size: int, path: str = "") -> None:
        self._source = source
        self.size = size
        self.path = path

    def read_at(self, offset: int, length: int, what: str) -> bytes:
        """Return exactly ``length`` bytes starting at ``offset``.

        Raises OutOfBoundsError if the range is not inside the file.
        """
        if offset < 0 or length < 0 or offset + length > self.size:
            raise OutOfBoundsError(self.path, offset, length, self.size, what)
        if length == 0:
            return b""
        if isinstance(self._source, (bytes, bytearray, memoryview)):
            data = bytes(self._source[offset : offset + length])
        else:
            self._source.seek(offset)
            data = self._source.read(length)
        if len(data) != length:
            raise OutOfBoundsError(self.path, offset, length, self.size, what)
        return data

    def read_int(
        self,
        offset: int,
        width: int,
        what: str,
        byteorder: Literal["big", "little"] = "big",
    ) -> int:
        """Read an unsigned integer of ``width`` bytes at ``offset``."""
        return int.from_bytes(self.read_at(offset, width, what), byteorder)