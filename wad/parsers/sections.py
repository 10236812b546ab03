"""
Section Filter
===============

IWAD directories group related lumps between pairs of empty marker
lumps, e.g. every floor texture (flat) sits between ``F_START`` and
``F_END``.  :class:`SectionFilter` walks the directory once, toggling an
inside/outside flag on those markers and keeping the lumps seen while
inside.

The markers themselves never appear in the output.  A closing marker
without an opener is consumed and ignored, a repeated opener keeps the
section open, and several marker pairs simply accumulate.
"""

from __future__ import annotations

from typing import Iterable

from wad.core.errors import InvalidFileError
from wad.core.models import SECTIONS, DirectoryEntry, Lump, SectionMarkers
from wad.parsers.names import decode_lump_name


def resolve_section(section: str | SectionMarkers) -> SectionMarkers:
    """Look up a section by registry name, or pass markers through.

    Raises:
        KeyError: For an unknown section name.
    """
    if isinstance(section, SectionMarkers):
        return section
    try:
        return SECTIONS[section]
    except KeyError:
        raise KeyError(
            f"unknown section {section!r}; known: {', '.join(sorted(SECTIONS))}"
        ) from None


class SectionFilter:
    """Collect the lumps enclosed by one pair of section markers.

    Usage::

        lumps = SectionFilter(SECTIONS["floor"]).collect(entries)

    Args:
        markers: Start/end sentinel names.
        strict: Raise instead of accepting a section still open when the
            directory ends.
    """

    def __init__(self, markers: SectionMarkers, *, strict: bool = False) -> None:
        self.markers = markers
        self.strict = strict
        self.unterminated = False

    def collect(self, entries: Iterable[DirectoryEntry]) -> list[Lump]:
        """Decode and filter *entries*, returning the lumps inside sections.

        Every name is decoded, including names outside any section, so an
        undecodable name anywhere in the directory fails the whole pass.

        Raises:
            InvalidLumpNameError: From the name decoder.
            InvalidFileError: ``unterminated section`` in strict mode.
        """
        inside = False
        lumps: list[Lump] = []

        for entry in entries:
            name = decode_lump_name(entry.raw_name)
            if name == self.markers.start:
                inside = True
            elif name == self.markers.end:
                inside = False
            elif inside:
                lumps.append(Lump(file_pos=entry.file_pos, size=entry.size, name=name))

        self.unterminated = inside
        if inside and self.strict:
            raise InvalidFileError(
                "unterminated section",
                f"{self.markers.start} has no matching {self.markers.end}",
            )
        return lumps
