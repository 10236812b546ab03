"""
WAD Reader Errors
==================

Exception hierarchy raised by the WAD directory reader.  Every error
carries a short, stable ``reason`` and an optional human ``detail``;
``str(exc)`` combines both and is meant to be shown to users verbatim.

Loader I/O failures (missing file, permissions) are *not* wrapped: the
built-in :class:`OSError` subclasses propagate unchanged.
"""

from __future__ import annotations


class WadReaderError(Exception):
    """Base class for all WAD reader failures.

    Attributes:
        reason: Short machine-stable reason, e.g. ``"wrong magic"``.
        detail: Human-readable elaboration (may be empty).
    """

    def __init__(self, reason: str, detail: str = "") -> None:
        self.reason = reason
        self.detail = detail
        super().__init__(f"{reason}: {detail}" if detail else reason)


class InvalidFileError(WadReaderError):
    """The buffer is not a usable WAD file.

    Raised for a short header, a wrong magic tag, a non-positive lump
    count, a directory offset inside the header, a directory table that
    runs past the end of the buffer, an oversized file, or (in strict
    mode) a section left open.
    """


class InvalidLumpNameError(WadReaderError):
    """A directory entry's name field is not 7-bit ASCII.

    Attributes:
        raw_name: The full 8-byte name field as stored in the file.
    """

    def __init__(self, reason: str, raw_name: bytes, detail: str = "") -> None:
        self.raw_name = bytes(raw_name)
        super().__init__(reason, detail or f"name bytes {self.raw_name!r}")
