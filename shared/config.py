"""
Airwatch Configuration Management
==================================

Centralised configuration for the Airwatch beacon monitor using Python
dataclasses and TOML-based persistence.

A configuration file is optional. Every section falls back to the
dataclass defaults, and unknown keys are ignored so that newer config
files keep working with older code.

Example ``config.toml``::

    [global]
    log_level = "DEBUG"
    log_file = "logs/airwatch.log"
    log_json = true

    [capture]
    interface = "wlan0mon"
    duration = 600

    [storage]
    db_path = "wifi_data.db"

References:
    - Wiggins, A. (2011). The Twelve-Factor App. https://12factor.net/
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[no-redef]


_DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / "config.toml"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    """Raised when a configuration value is outside its accepted range."""


# ============================ Sections =====================================


@dataclass(frozen=False, slots=True)
class CaptureConfig:
    """Live capture parameters.

    ``interface`` wins over ``adapter_keyword``: when it is empty the
    collector searches the interface descriptions for the keyword.
    A ``duration`` of 0 captures until interrupted; ``max_frames`` of 0
    means no frame limit.
    """

    interface: str = ""
    adapter_keyword: str = "Qualcomm Atheros AR956x Wireless Network Adapter"
    duration: int = 0
    bpf_filter: str = ""
    monitor_mode: bool = True
    max_frames: int = 0


@dataclass(frozen=False, slots=True)
class StorageConfig:
    """SQLite persistence settings."""

    db_path: str = "wifi_data.db"


@dataclass(frozen=False, slots=True)
class OutputConfig:
    """Console output settings."""

    print_records: bool = True


@dataclass(frozen=False, slots=True)
class GlobalConfig:
    """Settings shared by every Airwatch command."""

    log_level: str = "INFO"
    log_file: str = ""
    log_json: bool = False


# =========================== Master Config =================================


@dataclass(frozen=False, slots=True)
class AirConfig:
    """Complete Airwatch configuration.

    Usage:
        >>> config = AirConfig.load()                 # default path or defaults
        >>> config = AirConfig.load("airwatch.toml")  # explicit file
        >>> config.storage.db_path
        'wifi_data.db'
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    capture: CaptureConfig = field(default_factory=CaptureConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    @classmethod
    def load(cls, path: str | Path | None = None) -> AirConfig:
        """Load configuration from a TOML file.

        Args:
            path: TOML file to read. Defaults to ``config.toml`` in the
                project root; a missing default file yields pure defaults.

        Returns:
            A validated :class:`AirConfig`.

        Raises:
            FileNotFoundError: If *path* was given explicitly and does not exist.
            ConfigError: If the file parses but holds out-of-range values.
        """
        config_path = Path(path) if path is not None else _DEFAULT_CONFIG_PATH

        if not config_path.exists():
            if path is not None:
                raise FileNotFoundError(
                    f"Configuration file not found: {config_path}"
                )
            return cls()

        with open(config_path, "rb") as fh:
            try:
                raw: dict[str, Any] = tomllib.load(fh)
            except tomllib.TOMLDecodeError as exc:
                raise ConfigError(f"Invalid TOML in {config_path}: {exc}") from exc

        config = cls(
            global_settings=cls._build_section(GlobalConfig, raw.get("global", {})),
            capture=cls._build_section(CaptureConfig, raw.get("capture", {})),
            storage=cls._build_section(StorageConfig, raw.get("storage", {})),
            output=cls._build_section(OutputConfig, raw.get("output", {})),
        )
        config.validate()
        return config

    def validate(self) -> None:
        """Check value ranges, raising :class:`ConfigError` on the first problem."""
        if self.global_settings.log_level.upper() not in _LOG_LEVELS:
            raise ConfigError(
                f"Unknown log level: {self.global_settings.log_level!r}"
            )
        if self.capture.duration < 0:
            raise ConfigError("capture.duration must be >= 0")
        if self.capture.max_frames < 0:
            raise ConfigError("capture.max_frames must be >= 0")
        if not self.storage.db_path:
            raise ConfigError("storage.db_path must not be empty")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @staticmethod
    def _build_section(cls: type, data: dict[str, Any]) -> Any:
        """Instantiate dataclass *cls* from the keys it declares, ignoring the rest."""
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
        return cls(**{k: v for k, v in data.items() if k in valid_keys})
