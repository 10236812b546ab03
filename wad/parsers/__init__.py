"""Stage parsers for the WAD header, directory, names and sections."""

from wad.parsers.directory import scan_directory
from wad.parsers.header import validate_header
from wad.parsers.names import decode_lump_name
from wad.parsers.sections import SectionFilter, resolve_section

__all__ = [
    "SectionFilter",
    "decode_lump_name",
    "resolve_section",
    "scan_directory",
    "validate_header",
]
