"""
lumpkit Configuration Management
=================================

Centralized configuration for the lumpkit tools using Python dataclasses
and TOML-based persistence.

Only behavioural knobs live here.  The WAD layout itself (12-byte header,
16-byte directory records, 8-byte names) is fixed by the format and is
never configurable.

References:
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
    - PEP 681 -- Data Class Transforms (2022).
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


# ---------------------------------------------------------------------------
# Default configuration file path relative to the project root
# ---------------------------------------------------------------------------
_DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / "lumpkit.toml"


# ========================== Tool-Specific Configs ==========================


@dataclass(frozen=False, slots=True)
class WadConfig:
    """Configuration for the WAD directory reader.

    Attributes:
        magic: The one accepted 4-character header tag (exact match).
        section: Default section to extract (``floor``, ``sprite``, ``patch``).
        strict_sections: Reject a section left open at the end of the directory.
        use_mmap: Map files read-only instead of reading them into memory.
        max_file_size: Files above this size are refused before loading.
    """

    magic: str = "IWAD"
    section: str = "floor"
    strict_sections: bool = False
    use_mmap: bool = False
    max_file_size: int = 268_435_456  # 256 MiB

    def __post_init__(self) -> None:
        self.magic_bytes()

    def magic_bytes(self) -> bytes:
        """Return :attr:`magic` as the 4 bytes compared against the header.

        Raises:
            ValueError: Unless *magic* is exactly 4 ASCII characters.
        """
        if not isinstance(self.magic, str) or len(self.magic) != 4 or not self.magic.isascii():
            raise ValueError(
                f"wad.magic must be exactly 4 ASCII characters, got {self.magic!r}"
            )
        return self.magic.encode("ascii")


# =========================== Global Settings ===============================


@dataclass(frozen=False, slots=True)
class GlobalConfig:
    """Global settings shared across lumpkit modules."""

    log_level: str = "INFO"
    log_file: str = ""  # empty disables file logging
    log_json: bool = False
    debug: bool = False
    version: str = "1.0.0"


# =========================== Master Config =================================


@dataclass(frozen=False, slots=True)
class LumpConfig:
    """Master configuration aggregating tool-specific and global settings.

    Usage:
        >>> config = LumpConfig.load()                  # from default path
        >>> config = LumpConfig.load("custom.toml")     # from custom path
        >>> print(config.wad.magic)
        'IWAD'
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    wad: WadConfig = field(default_factory=WadConfig)

    @classmethod
    def load(cls, path: str | Path | None = None) -> LumpConfig:
        """Load configuration from a TOML file.

        If *path* is ``None`` the loader looks for ``lumpkit.toml`` in the
        project root.  Missing keys fall back to dataclass defaults.

        Args:
            path: Filesystem path to a TOML configuration file.

        Returns:
            A fully-populated :class:`LumpConfig` instance.

        Raises:
            FileNotFoundError: If the specified path does not exist
                *and* was explicitly provided by the caller.
        """
        config_path = Path(path) if path is not None else _DEFAULT_CONFIG_PATH

        if not config_path.exists():
            if path is not None:
                raise FileNotFoundError(
                    f"Configuration file not found: {config_path}"
                )
            return cls()

        with open(config_path, "rb") as fh:
            raw: dict[str, Any] = tomllib.load(fh)

        return cls(
            global_settings=cls._build_section(GlobalConfig, raw.get("global", {})),
            wad=cls._build_section(WadConfig, raw.get("wad", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise the entire configuration tree to a plain dictionary."""
        return asdict(self)

    @staticmethod
    def _build_section(cls: type, data: dict[str, Any]) -> Any:
        """Instantiate a dataclass *cls* using only the keys it declares.

        Unknown keys are ignored so newer config files still load.
        """
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered)


# ========================= Module-level convenience ========================

def get_config(path: str | Path | None = None) -> LumpConfig:
    """Cached wrapper around :meth:`LumpConfig.load`.

    Passing an explicit *path* always reloads.
    """
    if not hasattr(get_config, "_cached") or path is not None:
        get_config._cached = LumpConfig.load(path)  # type: ignore[attr-defined]
    return get_config._cached  # type: ignore[attr-defined]
