"""
lumpkit WAD -- Directory Reader for id Software WAD Files
==========================================================

Validates a WAD header, walks its directory table, decodes the 8-byte
lump names and extracts the lumps of a marker-delimited section (floor
textures between ``F_START`` and ``F_END`` by default).

Only directory metadata (offset, size, name) is read; lump contents are
never decoded and files are never written.

References:
    - Doom Wiki. WAD. https://doomwiki.org/wiki/WAD
    - Kuehl, M. (1994). The Unofficial Doom Specs v1.666.
"""

from wad.core.errors import InvalidFileError, InvalidLumpNameError, WadReaderError
from wad.core.models import SECTIONS, Lump, SectionMarkers, WadHeader
from wad.core.reader import WadReader, open_wad, parse

__version__ = "1.0.0"
__all__ = [
    "InvalidFileError",
    "InvalidLumpNameError",
    "Lump",
    "SECTIONS",
    "SectionMarkers",
    "WadHeader",
    "WadReader",
    "WadReaderError",
    "open_wad",
    "parse",
]
