"""Typed configuration loading and access.

Configuration is optional. When present it is a TOML file, by default
`fleetcheck.toml` in the scanned root:

    [remote]
    name = "origin"
    fetch = true
    fetch_timeout = 180.0

    [status]
    include_untracked = true

    [hooks]
    tracked_dir = ".githooks"
    sample_suffix = ".sample"
    report_active_only = true
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_float, get_str, get_table

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_FETCH_TIMEOUT",
    "DEFAULT_REMOTE",
    "Config",
    "ConfigError",
    "HooksConfig",
    "RemoteConfig",
    "StatusConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "fleetcheck.toml"

DEFAULT_REMOTE = "origin"
DEFAULT_FETCH_TIMEOUT = 3 * 60.0
DEFAULT_TRACKED_HOOKS_DIR = ".githooks"
DEFAULT_SAMPLE_SUFFIX = ".sample"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class RemoteConfig:
    """Which remote to compare against and how to reach it."""

    name: str = DEFAULT_REMOTE
    fetch: bool = True
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT


@dataclass(frozen=True, slots=True)
class StatusConfig:
    """Working tree status options."""

    include_untracked: bool = True


@dataclass(frozen=True, slots=True)
class HooksConfig:
    """Hook comparison options.

    Attributes:
        tracked_dir: Hooks directory under version control, relative to the
            working tree root
        sample_suffix: Files ending with this suffix are ignored
        report_active_only: Also report hooks present only in the active
            hooks directory
    """

    tracked_dir: str = DEFAULT_TRACKED_HOOKS_DIR
    sample_suffix: str = DEFAULT_SAMPLE_SUFFIX
    report_active_only: bool = True


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    remote: RemoteConfig = field(default_factory=RemoteConfig)
    status: StatusConfig = field(default_factory=StatusConfig)
    hooks: HooksConfig = field(default_factory=HooksConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        remote: StrDict = get_table(data, "remote") or {}
        status: StrDict = get_table(data, "status") or {}
        hooks: StrDict = get_table(data, "hooks") or {}

        fetch_timeout = get_float(remote, "fetch_timeout")
        if fetch_timeout is not None and fetch_timeout <= 0:
            raise ValueError(f"remote.fetch_timeout must be positive, got {fetch_timeout}")

        return cls(
            remote=RemoteConfig(
                name=get_str(remote, "name") or DEFAULT_REMOTE,
                fetch=_bool_or(remote, "fetch", True),
                fetch_timeout=fetch_timeout or DEFAULT_FETCH_TIMEOUT,
            ),
            status=StatusConfig(
                include_untracked=_bool_or(status, "include_untracked", True),
            ),
            hooks=HooksConfig(
                tracked_dir=get_str(hooks, "tracked_dir") or DEFAULT_TRACKED_HOOKS_DIR,
                sample_suffix=get_str(hooks, "sample_suffix") or DEFAULT_SAMPLE_SUFFIX,
                report_active_only=_bool_or(hooks, "report_active_only", True),
            ),
        )

    def with_overrides(
        self,
        *,
        remote_name: str | None = None,
        fetch: bool | None = None,
    ) -> Config:
        """Return a copy with command-line overrides applied."""
        remote = self.remote
        if remote_name:
            remote = replace(remote, name=remote_name)
        if fetch is not None:
            remote = replace(remote, fetch=fetch)
        return replace(self, remote=remote)


def _bool_or(table: Mapping[str, object], key: str, default: bool) -> bool:
    value = get_bool(table, key)
    return default if value is None else value


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling import and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))
    except OSError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to the config file

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        config = Config.from_dict(result.value)
        return Ok(config)
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Load config from file, or the default config if the file doesn't exist.

    An existing but broken file is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
