"""
Lump Name Decoder
==================

Lump names occupy a fixed 8-byte field.  Shorter names are padded with
zero bytes; a name using all eight bytes has no terminator at all.
"""

from __future__ import annotations

from wad.core.errors import InvalidLumpNameError
from wad.core.models import LUMP_NAME_SIZE


def decode_lump_name(raw: bytes) -> str:
    """Decode an 8-byte name field.

    The name is everything before the first zero byte, or all eight bytes
    when none is present.  No trimming or case folding is applied.

    Raises:
        ValueError: If *raw* is not exactly 8 bytes long.
        InvalidLumpNameError: If the name contains a byte above 0x7F.
    """
    if len(raw) != LUMP_NAME_SIZE:
        raise ValueError(
            f"lump name field must be {LUMP_NAME_SIZE} bytes, got {len(raw)}"
        )

    terminator = raw.find(b"\x00")
    prefix = raw if terminator < 0 else raw[:terminator]
    try:
        return prefix.decode("ascii")
    except UnicodeDecodeError as exc:
        raise InvalidLumpNameError(
            "undecodable name",
            raw,
            f"non-ASCII byte 0x{prefix[exc.start]:02x} at position "
            f"{exc.start} in {bytes(raw)!r}",
        ) from exc
