"""Configuration loading and management for sf-metadata-counter.

Configuration sources are merged in priority order:
    1. Defaults (defined in CounterConfig)
    2. Global config (~/.sf-metadata-counter.toml)
    3. Project config (./sf-metadata-counter.toml)
    4. Explicit config file
    5. Environment variables (SFMC_* prefix)
    6. CLI overrides (passed as kwargs)

A ``[types]`` table in any config file extends or overrides the suffix to
metadata type mapping::

    [types]
    botVersion = "BotVersion"
    labels = "CustomLabel"

Example:
    >>> config = load_config(auto_refresh=False)
    >>> config.auto_refresh
    False
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

CONFIG_FILE_NAME = "sf-metadata-counter.toml"
ENV_PREFIX = "SFMC_"


@dataclass(frozen=True)
class CounterConfig:
    """Configuration for a counting run and the live watcher.

    Attributes:
        Display:
            show_summary_indicator: Surface the total continuously
            verbosity: Logging verbosity level

        Watching:
            auto_refresh: Re-run the count after file-tree changes
            debounce_seconds: Quiet period collapsing bursts of change events
            cooldown_seconds: Minimum gap between two watcher-driven scans

        Enumeration:
            workers: Threads listing top-level folders (None = sequential)
            exclude_dirs: Directory names never descended into
            exclude_file_names: Auxiliary file names never counted

        Classification:
            type_overrides: Extra suffix -> metadata type entries
    """

    # Display
    show_summary_indicator: bool = True
    verbosity: Verbosity = "normal"

    # Watching
    auto_refresh: bool = True
    debounce_seconds: float = 2.0
    cooldown_seconds: float = 1.0

    # Enumeration
    workers: Optional[int] = None
    exclude_dirs: list[str] = field(
        default_factory=lambda: [
            "node_modules",
            "bower_components",
            ".git",
            ".sfdx",
            ".sf",
            ".localdevserver",
        ]
    )
    exclude_file_names: list[str] = field(
        default_factory=lambda: [
            "package.xml",
            "jsconfig.json",
            ".eslintrc.json",
            "tsconfig.json",
            "README.md",
            ".DS_Store",
        ]
    )

    # Classification
    type_overrides: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.debounce_seconds < 0:
            raise ValueError("debounce_seconds must be non-negative")
        if self.cooldown_seconds < 0:
            raise ValueError("cooldown_seconds must be non-negative")
        if self.workers is not None and self.workers < 1:
            raise ValueError("workers must be at least 1")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ValueError("verbosity must be one of quiet, normal, verbose")
        for suffix, type_name in self.type_overrides.items():
            if not suffix or not type_name:
                raise ValueError("type_overrides entries must be non-empty strings")

    @property
    def debounce_ms(self) -> int:
        """Get debounce window in milliseconds."""
        return int(self.debounce_seconds * 1000)


DEFAULT_CONFIG = CounterConfig()


def load_config(config_file: Optional[Path] = None, **overrides) -> CounterConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated CounterConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
        InvalidConfigError: If a value fails validation
    """
    merged: dict = {}
    type_overrides: dict[str, str] = {}

    sources = [Path.home() / f".{CONFIG_FILE_NAME}", Path.cwd() / CONFIG_FILE_NAME]
    for path in sources:
        if path.exists():
            _merge_file(path, merged, type_overrides)

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        _merge_file(config_file, merged, type_overrides)

    merged.update(_load_env_vars())

    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    type_overrides.update(overrides.pop("type_overrides", None) or {})
    merged.update({k: v for k, v in overrides.items() if v is not None})

    if type_overrides:
        merged["type_overrides"] = type_overrides

    try:
        return CounterConfig(**merged)
    except TypeError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")
    except ValueError as e:
        key = str(e).split(" ", 1)[0]
        raise InvalidConfigError(key, merged.get(key), str(e))


def _merge_file(path: Path, merged: dict, type_overrides: dict[str, str]) -> None:
    try:
        data = _load_toml_file(path)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")

    types = data.pop("types", None)
    if types is not None:
        if not isinstance(types, dict):
            raise InvalidConfigError("types", types, "expected a table of suffix = TypeName")
        type_overrides.update({str(k): str(v) for k, v in types.items()})
    merged.update(data)


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from SFMC_* environment variables.

    Supported environment variables:
        SFMC_SHOW_SUMMARY_INDICATOR: bool (true/false/1/0)
        SFMC_AUTO_REFRESH: bool
        SFMC_DEBOUNCE_SECONDS: float
        SFMC_COOLDOWN_SECONDS: float
        SFMC_WORKERS: int
        SFMC_VERBOSITY: quiet/normal/verbose

    Returns:
        Dict of field_name -> parsed_value for any SFMC_* vars found.
    """
    type_hints = get_type_hints(CounterConfig)

    result: dict[str, Any] = {}

    for field_name in CounterConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Returns None for types that cannot come from the environment (lists,
    mappings).

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if origin in (list, dict) or type_hint in (list, dict):
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If tomllib/tomli not available
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
