"""
lumpkit Structured Logger
==========================

:class:`LumpLogger` binds a stdlib :mod:`logging` logger to one lumpkit
tool.  Records go to stderr through Rich and, when a log file is
configured, to a size-rotated file as plain text or JSON lines.

Each record is stamped with the tool name and the current operation
(see :meth:`LumpLogger.operation`).  Keyword arguments that logging
itself does not understand travel with the record as ``lump_extra``
and appear under ``"extra"`` in JSON output.

References:
    - Python logging HOWTO. https://docs.python.org/3/howto/logging.html
    - Rich library. https://github.com/Textualize/rich
"""

from __future__ import annotations

import json
import logging
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Iterator

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

_STDLIB_KWARGS = frozenset({"exc_info", "stack_info", "stacklevel"})
_CONTEXT_FIELDS = ("tool_name", "operation")

_PLAIN_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_PLAIN_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"

_CONSOLE_THEME = Theme(
    {
        "log.level.debug": "dim cyan",
        "log.level.info": "bold bright_blue",
        "log.level.warning": "bold yellow",
        "log.level.error": "bold red",
    }
)


class _JSONLineFormatter(logging.Formatter):
    """One JSON object per record: time, level, logger, message, context."""

    def format(self, record: logging.LogRecord) -> str:
        when = datetime.fromtimestamp(record.created, tz=timezone.utc)
        line: dict[str, Any] = {
            "timestamp": when.isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        line.update(
            (name, getattr(record, name))
            for name in _CONTEXT_FIELDS
            if getattr(record, name, None) is not None
        )
        if getattr(record, "lump_extra", None):
            line["extra"] = record.lump_extra  # type: ignore[attr-defined]
        if record.exc_info and record.exc_info[1] is not None:
            line["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False, default=str)


def _console_handler(level: int) -> logging.Handler:
    return RichHandler(
        level=level,
        console=Console(theme=_CONSOLE_THEME, stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )


def _file_handler(
    path: Path, level: int, json_lines: bool, max_bytes: int, backup_count: int
) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(
        _JSONLineFormatter()
        if json_lines
        else logging.Formatter(_PLAIN_FORMAT, datefmt=_PLAIN_DATEFMT)
    )
    return handler


class _Stopwatch:
    """Elapsed-time handle yielded by :meth:`LumpLogger.timed`."""

    __slots__ = ("started",)

    def __init__(self) -> None:
        self.started = time.perf_counter()

    @property
    def elapsed(self) -> float:
        return time.perf_counter() - self.started


class LumpLogger:
    """Logger for one lumpkit tool, named ``lumpkit.<tool_name>``.

    Usage::

        log = LumpLogger("wad.reader", log_file="lumpkit.log", json_logs=True)
        with log.operation("parse"):
            log.info("Parsed %d lumps", 54, section="floor")

    Args:
        tool_name:       Suffix of the logger name, also stamped on records.
        log_level:       Minimum severity name; unknown names mean INFO.
        log_file:        Rotating log file.  ``None`` or ``""`` disables it.
        json_logs:       Write JSON lines instead of plain text to the file.
        max_bytes:       File size that triggers rotation.
        backup_count:    Rotated files kept.
        console_output:  Also log to stderr through Rich.
    """

    def __init__(
        self,
        tool_name: str,
        *,
        log_level: str = "INFO",
        log_file: str | Path | None = None,
        json_logs: bool = False,
        max_bytes: int = 10_485_760,
        backup_count: int = 5,
        console_output: bool = True,
    ) -> None:
        self._tool_name = tool_name
        self._operation: str | None = None
        level = logging.getLevelName(log_level.upper())
        if not isinstance(level, int):
            level = logging.INFO

        # Re-creating a logger for the same tool replaces its handlers.
        self._logger = logging.getLogger(f"lumpkit.{tool_name}")
        self._logger.setLevel(level)
        self._logger.propagate = False
        self._logger.handlers.clear()

        if console_output:
            self._logger.addHandler(_console_handler(level))
        if log_file:
            self._logger.addHandler(
                _file_handler(Path(log_file), level, json_logs, max_bytes, backup_count)
            )

    @classmethod
    def from_config(cls, tool_name: str, config: Any) -> LumpLogger:
        """Build a logger from the ``[global]`` section of a :class:`LumpConfig`."""
        settings = config.global_settings
        return cls(
            tool_name,
            log_level="DEBUG" if settings.debug else settings.log_level,
            log_file=settings.log_file or None,
            json_logs=settings.log_json,
        )

    @contextmanager
    def operation(self, name: str) -> Iterator[LumpLogger]:
        """Stamp records logged inside the block with ``operation=name``."""
        outer, self._operation = self._operation, name
        try:
            yield self
        finally:
            self._operation = outer

    @contextmanager
    def timed(self, label: str) -> Iterator[_Stopwatch]:
        """Log *label* at DEBUG on entry and again with the elapsed seconds."""
        watch = _Stopwatch()
        self.debug("Started: %s", label)
        try:
            yield watch
        finally:
            self.debug("Completed: %s (%.3f sec)", label, watch.elapsed)

    def _log(self, level: int, msg: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        options = {k: kwargs.pop(k) for k in list(kwargs) if k in _STDLIB_KWARGS}
        extra = dict(kwargs.pop("extra", None) or {})
        extra.update(tool_name=self._tool_name, operation=self._operation)
        if kwargs:
            extra["lump_extra"] = kwargs
        options.setdefault("stacklevel", 3)
        self._logger.log(level, msg, *args, extra=extra, **options)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, args, kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, args, kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, args, kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.ERROR, msg, args, kwargs)

    @property
    def tool_name(self) -> str:
        return self._tool_name

    @property
    def underlying(self) -> logging.Logger:
        """Direct access to the stdlib :class:`logging.Logger`."""
        return self._logger
