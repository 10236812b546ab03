"""
WAD Data Models
================

Value objects produced while reading a WAD directory.

:class:`WadHeader` and :class:`DirectoryEntry` are transient, internal
records decoded straight from the byte buffer.  :class:`Lump` is the
public result handed to callers; it is a frozen pydantic model so it
can be serialised with ``model_dump`` / ``model_dump_json``.

References:
    - Doom Wiki. WAD. https://doomwiki.org/wiki/WAD
    - Kuehl, M. (1994). The Unofficial Doom Specs v1.666, chapter 2.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Layout constants
# ---------------------------------------------------------------------------

HEADER_SIZE: int = 12
DIRECTORY_ENTRY_SIZE: int = 16
LUMP_NAME_SIZE: int = 8

INT32_MIN: int = -(2 ** 31)
INT32_MAX: int = 2 ** 31 - 1


@dataclass(frozen=True, slots=True)
class WadHeader:
    """Decoded 12-byte WAD header.

    Attributes:
        magic: The 4-byte identification tag.
        lump_count: Number of directory records.
        directory_offset: Absolute file offset of the directory table.
    """
    magic: bytes
    lump_count: int
    directory_offset: int

    @property
    def directory_end(self) -> int:
        """Offset one past the last byte of the directory table."""
        return self.directory_offset + self.lump_count * DIRECTORY_ENTRY_SIZE


@dataclass(frozen=True, slots=True)
class DirectoryEntry:
    """One undecoded 16-byte directory record."""
    file_pos: int
    size: int
    raw_name: bytes


@dataclass(frozen=True, slots=True)
class SectionMarkers:
    """A pair of sentinel lump names delimiting a section.

    Attributes:
        start: Name that opens the section (e.g. ``F_START``).
        end: Name that closes it (e.g. ``F_END``).
    """
    start: str
    end: str


# Well-known marker pairs in IWAD directories.
SECTIONS: dict[str, SectionMarkers] = {
    "floor": SectionMarkers("F_START", "F_END"),
    "sprite": SectionMarkers("S_START", "S_END"),
    "patch": SectionMarkers("P_START", "P_END"),
}


class Lump(BaseModel):
    """A named, offset-addressed data blob listed in the WAD directory.

    Attributes:
        file_pos: Absolute offset of the lump data in the file.
        size: Length of the lump data in bytes.
        name: Decoded ASCII name, 0-8 characters, exactly as stored.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    file_pos: int = Field(..., ge=INT32_MIN, le=INT32_MAX)
    size: int = Field(..., ge=INT32_MIN, le=INT32_MAX)
    name: str = Field(..., max_length=LUMP_NAME_SIZE)
