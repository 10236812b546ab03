"""
WAD Header Validator
=====================

Decodes and validates the 12-byte header at the start of a WAD file::

    [0..4)   identification tag, 4 ASCII bytes ("IWAD")
    [4..8)   number of lumps          (int32, little-endian)
    [8..12)  offset of the directory  (int32, little-endian)

References:
    - Kuehl, M. (1994). The Unofficial Doom Specs v1.666, section 2-1.
"""

from __future__ import annotations

import struct

from wad.core.errors import InvalidFileError
from wad.core.models import HEADER_SIZE, WadHeader

_HEADER_STRUCT = struct.Struct("<4sii")

DEFAULT_MAGIC: bytes = b"IWAD"


def validate_header(data: bytes, magic: bytes = DEFAULT_MAGIC) -> WadHeader:
    """Validate the WAD header and return its decoded fields.

    Args:
        data: The complete file contents.
        magic: The single accepted identification tag.  Compared byte for
            byte, case-sensitive, without trimming.

    Returns:
        The decoded :class:`WadHeader`.

    Raises:
        InvalidFileError: ``too small`` if fewer than 12 bytes are
            available, ``wrong magic`` if the tag differs, ``empty or
            corrupt`` unless the lump count is positive and the directory
            starts past the header.
    """
    if len(data) < HEADER_SIZE:
        raise InvalidFileError(
            "too small",
            f"file is {len(data)} bytes, a header needs {HEADER_SIZE}",
        )

    tag, lump_count, directory_offset = _HEADER_STRUCT.unpack_from(data, 0)
    if tag != magic:
        raise InvalidFileError(
            "wrong magic", f"expected {magic!r}, found {tag!r}"
        )

    if lump_count <= 0 or directory_offset <= HEADER_SIZE:
        raise InvalidFileError(
            "empty or corrupt",
            f"lump count {lump_count}, directory offset {directory_offset}",
        )

    return WadHeader(
        magic=tag, lump_count=lump_count, directory_offset=directory_offset
    )
