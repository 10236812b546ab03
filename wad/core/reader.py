"""
WAD Directory Reader
=====================

Loads a WAD file into an immutable buffer and runs the directory
pipeline over it:

    1. Load the file (buffered read or read-only memory map)
    2. Validate the 12-byte header
    3. Scan the 16-byte directory records
    4. Decode each 8-byte name and filter by section markers

Parsing is fail-fast: the first error aborts the call and no partial
lump list is returned.  Each :meth:`WadReader.parse` call starts from a
fresh section state, so a reader can be parsed repeatedly.

Usage::

    with WadReader.open("doom1.wad") as reader:
        for lump in reader.parse():
            print(lump.name, lump.file_pos, lump.size)

References:
    - Doom Wiki. WAD. https://doomwiki.org/wiki/WAD
    - Kuehl, M. (1994). The Unofficial Doom Specs v1.666.
"""

from __future__ import annotations

import mmap
from pathlib import Path
from typing import Any, Union

from shared.config import LumpConfig
from shared.logger import LumpLogger

from wad.core.errors import InvalidFileError, WadReaderError
from wad.core.models import Lump, SectionMarkers, WadHeader
from wad.parsers.directory import scan_directory
from wad.parsers.header import validate_header
from wad.parsers.names import decode_lump_name
from wad.parsers.sections import SectionFilter, resolve_section

Buffer = Union[bytes, mmap.mmap]


class WadReader:
    """Reader over one WAD file's bytes.

    The reader owns its buffer exclusively.  ``bytes`` are used as-is,
    any other bytes-like object (``bytearray``, ``memoryview``) is copied
    so later mutation by the caller cannot affect parsing.

    Args:
        data: Complete file contents, or a read-only memory map.
        path: Where the data came from, for log messages.
        config: Reader configuration.  Defaults are used if not provided.
        logger: Logger instance.  One is built from *config* if not provided.
    """

    def __init__(
        self,
        data: Any,
        *,
        path: str | Path | None = None,
        config: LumpConfig | None = None,
        logger: LumpLogger | None = None,
    ) -> None:
        self._config: LumpConfig = config or LumpConfig()
        self._logger: LumpLogger = logger or LumpLogger.from_config(
            "wad.reader", self._config
        )
        if isinstance(data, (bytes, mmap.mmap)):
            self._data: Buffer | None = data
        else:
            self._data = bytes(data)
        self._path: str = str(path) if path is not None else "<memory>"

    # ------------------------------------------------------------------ #
    #  Loading
    # ------------------------------------------------------------------ #

    @classmethod
    def open(
        cls,
        path: str | Path,
        *,
        use_mmap: bool | None = None,
        config: LumpConfig | None = None,
        logger: LumpLogger | None = None,
    ) -> WadReader:
        """Load *path* fully without parsing it.

        Args:
            path: WAD file location.
            use_mmap: Map the file read-only instead of reading it.
                Defaults to ``config.wad.use_mmap``.
            config: Reader configuration.
            logger: Logger instance.

        Raises:
            OSError: Propagated unchanged from the file system.
            InvalidFileError: ``too large`` if the file exceeds
                ``config.wad.max_file_size``.
        """
        config = config or LumpConfig()
        if use_mmap is None:
            use_mmap = config.wad.use_mmap
        file_path = Path(path)

        file_size = file_path.stat().st_size
        max_size = config.wad.max_file_size
        if file_size > max_size:
            raise InvalidFileError(
                "too large",
                f"{file_path} is {file_size:,} bytes (max: {max_size:,} bytes)",
            )

        data: Buffer
        if use_mmap and file_size > 0:
            with open(file_path, "rb") as fh:
                data = mmap.mmap(fh.fileno(), 0, access=mmap.ACCESS_READ)
        else:
            # Zero-length files cannot be mapped; they fail header
            # validation either way.
            data = file_path.read_bytes()

        return cls(data, path=file_path, config=config, logger=logger)

    @property
    def path(self) -> str:
        return self._path

    @property
    def size(self) -> int:
        return len(self._buffer())

    @property
    def closed(self) -> bool:
        return self._data is None

    def close(self) -> None:
        """Release the buffer, unmapping it if it was memory-mapped."""
        if isinstance(self._data, mmap.mmap):
            self._data.close()
        self._data = None

    def __enter__(self) -> WadReader:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def _buffer(self) -> Buffer:
        if self._data is None:
            raise ValueError(f"reader for {self._path} is closed")
        return self._data

    # ------------------------------------------------------------------ #
    #  Parsing
    # ------------------------------------------------------------------ #

    def validate(self) -> WadHeader:
        """Validate the header only.

        Raises:
            InvalidFileError: See :func:`~wad.parsers.header.validate_header`.
            ValueError: If ``config.wad.magic`` was set to something other
                than 4 ASCII characters after construction.
        """
        header = validate_header(self._buffer(), self._config.wad.magic_bytes())
        self._logger.debug(
            "Header of %s: %d lumps, directory at %d",
            self._path,
            header.lump_count,
            header.directory_offset,
        )
        return header

    def parse(self, section: str | SectionMarkers | None = None) -> list[Lump]:
        """Return the lumps enclosed by *section*'s markers, in file order.

        Args:
            section: A registry name (``"floor"``, ``"sprite"``,
                ``"patch"``) or explicit :class:`SectionMarkers`.
                Defaults to ``config.wad.section``.

        Raises:
            InvalidFileError: Header, bounds, or strict-section failures.
            InvalidLumpNameError: A directory name is not ASCII.
        """
        markers = resolve_section(
            section if section is not None else self._config.wad.section
        )
        section_filter = SectionFilter(
            markers, strict=self._config.wad.strict_sections
        )

        with self._logger.operation("parse"):
            try:
                with self._logger.timed(f"parse {self._path}"):
                    data = self._buffer()
                    header = self.validate()
                    lumps = section_filter.collect(scan_directory(data, header))
            except WadReaderError as exc:
                self._logger.error("Rejected %s: %s", self._path, exc)
                raise

            if section_filter.unterminated:
                self._logger.warning(
                    "%s: section %s is never closed by %s",
                    self._path,
                    markers.start,
                    markers.end,
                )
            self._logger.info(
                "Parsed %d lumps between %s and %s from %s",
                len(lumps),
                markers.start,
                markers.end,
                self._path,
                lump_count=header.lump_count,
            )
        return lumps

    def directory(self) -> list[Lump]:
        """Return every directory record as a :class:`Lump`, markers included.

        Raises:
            InvalidFileError: Header or bounds failures.
            InvalidLumpNameError: A directory name is not ASCII.
        """
        with self._logger.operation("directory"):
            try:
                data = self._buffer()
                header = self.validate()
                lumps = [
                    Lump(
                        file_pos=entry.file_pos,
                        size=entry.size,
                        name=decode_lump_name(entry.raw_name),
                    )
                    for entry in scan_directory(data, header)
                ]
            except WadReaderError as exc:
                self._logger.error("Rejected %s: %s", self._path, exc)
                raise
            self._logger.debug("Listed %d directory entries", len(lumps))
        return lumps


# ---------------------------------------------------------------------------
# Module-level convenience
# ---------------------------------------------------------------------------

def open_wad(path: str | Path, **kwargs: Any) -> WadReader:
    """Shortcut for :meth:`WadReader.open`."""
    return WadReader.open(path, **kwargs)


def parse(
    reader: WadReader, section: str | SectionMarkers | None = None
) -> list[Lump]:
    """Shortcut for :meth:`WadReader.parse`."""
    return reader.parse(section)
