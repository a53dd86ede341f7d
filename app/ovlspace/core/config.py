"""Configuration model and I/O for the overlay space manager.

Every tunable of the tool lives here: the monitored mount point, the
usage thresholds, the ordered cache and relocation lists and the watch
loop runtime files. Configuration is stored in
~/.config/ovlspace/config.toml; a missing file means built-in defaults.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Self

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ovlspace.core.paths import DEFAULT_LOCK_FILE, DEFAULT_STATE_FILE, get_config_path

logger = logging.getLogger(__name__)

HOME = Path("/root")


class Thresholds(BaseModel):
    """Usage percentages at which the overlay is considered in trouble.

    Attributes:
        warn_percent: Usage at or above this is a warning (default: 85).
        critical_percent: Usage at or above this is critical (default: 95).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    warn_percent: Annotated[int, Field(ge=1, le=100)] = 85
    critical_percent: Annotated[int, Field(ge=1, le=100)] = 95

    @model_validator(mode="after")
    def check_order(self) -> Self:
        """Ensure the warning threshold does not exceed the critical one."""
        if self.warn_percent > self.critical_percent:
            msg = (
                f"warn_percent ({self.warn_percent}) must not exceed "
                f"critical_percent ({self.critical_percent})"
            )
            raise ValueError(msg)
        return self


class CacheTarget(BaseModel):
    """A cache or trash directory whose contents may be discarded.

    Attributes:
        path: Directory to empty.
        remove_directory: Also remove the emptied directory itself, leaving
            it to the owning application to recreate.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    path: Path
    remove_directory: bool = False


class LogCleanup(BaseModel):
    """Rules for trimming the system log directory.

    Attributes:
        directory: Log directory to walk.
        truncate_patterns: Name patterns of live logs truncated in place.
        truncate_above_bytes: Only logs larger than this are truncated.
        delete_patterns: Name patterns of rotated or stale logs to delete.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    directory: Path = Path("/var/log")
    truncate_patterns: list[str] = Field(default_factory=lambda: ["*.log"])
    truncate_above_bytes: Annotated[int, Field(ge=0)] = 1024 * 1024
    delete_patterns: list[str] = Field(default_factory=lambda: ["*.gz", "*.old"])


class HeavyPathSettings(BaseModel):
    """Where the status report looks for the largest directories."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    root: Path = HOME
    depth: Annotated[int, Field(ge=0, le=10)] = 2
    limit: Annotated[int, Field(ge=0)] = 12


class WatchSettings(BaseModel):
    """Watch loop timing and runtime file locations."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    interval_seconds: Annotated[int, Field(ge=1)] = 60
    notify_timeout_seconds: Annotated[int, Field(ge=1)] = 12
    lock_file: Path = DEFAULT_LOCK_FILE
    state_file: Path = DEFAULT_STATE_FILE


def _default_cache_targets() -> list[CacheTarget]:
    cache = HOME / ".cache"
    browsers = (
        "mozilla",
        "chromium",
        "google-chrome",
        "slimjet",
        "BraveSoftware",
        "opera",
        "microsoft-edge",
    )
    targets = [CacheTarget(path=cache / name, remove_directory=True) for name in browsers]
    targets += [
        CacheTarget(path=cache / "thumbnails"),
        CacheTarget(path=cache / "fontconfig"),
        CacheTarget(path=cache / "mesa_shader_cache"),
        CacheTarget(path=cache),
        CacheTarget(path=HOME / ".local/share/Trash/files"),
        CacheTarget(path=HOME / ".local/share/Trash/info"),
    ]
    return targets


def _default_relocation_sources() -> list[Path]:
    names = ("Downloads", "Video", "Videos", "Pictures", "Music", "Documents", "Backup", "Backups")
    return [HOME / name for name in names]


class OverlayConfig(BaseModel):
    """Complete configuration of the overlay space manager.

    Order matters for ``cache_targets`` and ``relocation_sources``: entries
    are processed exactly in the listed order.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    mount_point: Path = Path("/")
    default_target: Path = Path("/mnt/home/EasyData")
    thresholds: Thresholds = Field(default_factory=Thresholds)
    cache_targets: list[CacheTarget] = Field(default_factory=_default_cache_targets)
    logs: LogCleanup = Field(default_factory=LogCleanup)
    relocation_sources: list[Path] = Field(default_factory=_default_relocation_sources)
    heavy_paths: HeavyPathSettings = Field(default_factory=HeavyPathSettings)
    watch: WatchSettings = Field(default_factory=WatchSettings)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the configuration file cannot be parsed."""


def load_config(path: Path | None = None) -> OverlayConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated OverlayConfig. Defaults when the file does not exist.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config at %s, using defaults", config_path)
        return OverlayConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    try:
        return OverlayConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e


def config_to_toml(config: OverlayConfig) -> str:
    """Render a configuration as TOML text."""
    return tomli_w.dumps(config.model_dump(mode="json"))


def save_config(config: OverlayConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The OverlayConfig to save.
        path: Destination path. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(config.model_dump(mode="json"), f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config {config_path}: {e}") from e

    return config_path
