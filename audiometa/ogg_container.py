"""Reading pages and packets from an Ogg bitstream."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from .errors import CorruptedFileError
from .reader import SafeReader

_CAPTURE = b"OggS"
_FLAG_CONTINUED = 0x01
_TAIL_SEARCH = 65536


@dataclass
class OggPage:
    """One Ogg page: header fields and its payload.

    ``header_type`` bits: 0x01 continued packet, 0x02 beginning of stream,
    0x04 end of stream. ``granule_position`` is -1 when unset.
    """

    header_type: int
    granule_position: int
    serial_number: int
    sequence_number: int
    data: bytes

    @property
    def continued(self) -> bool:
        return bool(self.header_type & _FLAG_CONTINUED)


def _signed64(value: int) -> int:
    return value - (1 << 64) if value >= 1 << 63 else value


def read_page(reader: SafeReader, offset: int) -> Tuple[OggPage, int]:
    """Read the page at ``offset`` and return it with the offset of the next page.

    Raises CorruptedFileError for a bad capture pattern or stream version and
    OutOfBoundsError when the page runs past the end of the file.
    """
    magic = reader.read_at(offset, 4, "Ogg magic")
    if magic != _CAPTURE:
        raise CorruptedFileError(reader.path, offset, f"invalid Ogg page at offset {offset}")

    version = reader.read_int(offset + 4, 1, "version")
    if version != 0:
        raise CorruptedFileError(reader.path, offset, f"unsupported Ogg version: {version}")

    header_type = reader.read_int(offset + 5, 1, "header type")
    granule = _signed64(reader.read_int(offset + 6, 8, "granule position", "little"))
    serial = reader.read_int(offset + 14, 4, "serial number", "little")
    sequence = reader.read_int(offset + 18, 4, "sequence number", "little")
    segment_count = reader.read_int(offset + 26, 1, "segment count")

    segments = reader.read_at(offset + 27, segment_count, "segment table")
    data_size = sum(segments)
    data_offset = offset + 27 + segment_count
    data = reader.read_at(data_offset, data_size, "page data")

    page = OggPage(
        header_type=header_type,
        granule_position=granule,
        serial_number=serial,
        sequence_number=sequence,
        data=data,
    )
    return page, data_offset + data_size


def extract_packets(pages: Iterable[OggPage]) -> List[bytes]:
    """Join page payloads into packets.

    A continued page extends the packet in progress; any other page starts a
    new one. Empty packets are dropped.
    """
    packets: List[bytes] = []
    current = bytearray()
    for page in pages:
        if page.continued and current:
            current.extend(page.data)
        else:
            if current:
                packets.append(bytes(current))
            current = bytearray(page.data)
    if current:
        packets.append(bytes(current))
    return packets


def find_last_granule_position(reader: SafeReader, file_size: int) -> int:
    """Return the granule position of the last page in the final 64 KiB of the file.

    Raises CorruptedFileError when no page is found there.
    """
    search_start = max(0, file_size - _TAIL_SEARCH)
    tail = reader.read_at(search_start, file_size - search_start, "search region")
    position = tail.rfind(_CAPTURE)
    if position < 0:
        raise CorruptedFileError(reader.path, search_start, "could not find last Ogg page")
    last_page = search_start + position
    return _signed64(reader.read_int(last_page + 6, 8, "granule position", "little"))