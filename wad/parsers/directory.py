"""
WAD Directory Scanner
======================

Walks the directory table, one 16-byte record per lump::

    [0..4)   file position of the lump data  (int32, little-endian)
    [4..8)   size of the lump data           (int32, little-endian)
    [8..16)  name, zero-padded ASCII

Records are yielded in file order with their name bytes untouched.
"""

from __future__ import annotations

import struct
from typing import Iterator

from wad.core.errors import InvalidFileError
from wad.core.models import DIRECTORY_ENTRY_SIZE, DirectoryEntry, WadHeader

_ENTRY_STRUCT = struct.Struct("<ii8s")


def scan_directory(data: bytes, header: WadHeader) -> Iterator[DirectoryEntry]:
    """Return a lazy iterator over the directory records.

    The table bounds are checked here, before the first record is read,
    so an out-of-range header fails even if the iterator is never consumed.

    Raises:
        InvalidFileError: ``directory out of bounds`` if the table
            ``[directory_offset, directory_offset + lump_count * 16)``
            does not fit inside *data*.
    """
    end = header.directory_end
    if end > len(data):
        raise InvalidFileError(
            "directory out of bounds",
            f"directory spans [{header.directory_offset}, {end}) "
            f"but the file is {len(data)} bytes",
        )
    return _iter_entries(data, header.directory_offset, end)


def _iter_entries(data: bytes, start: int, end: int) -> Iterator[DirectoryEntry]:
    for offset in range(start, end, DIRECTORY_ENTRY_SIZE):
        file_pos, size, raw_name = _ENTRY_STRUCT.unpack_from(data, offset)
        yield DirectoryEntry(file_pos=file_pos, size=size, raw_name=raw_name)
