"""Configuration loading and management for User Manager.

Configuration sources are merged in priority order:
    1. Defaults (defined in UserManagerConfig)
    2. Global config (~/.user-manager.toml)
    3. Project config (./user-manager.toml)
    4. Explicit config file (--config)
    5. Environment variables (USER_MANAGER_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(data_file="people.json", verbose=True)
    >>> config.verbosity
    'verbose'
    >>> config.data_path.name
    'people.json'
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional, get_args, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

ENV_PREFIX = "USER_MANAGER_"
CONFIG_FILENAME = "user-manager.toml"


@dataclass(frozen=True)
class UserManagerConfig:
    """Settings for a User Manager run.

    Attributes:
        data_file: Backing JSON file. Relative paths resolve against the
            current working directory.
        atomic_writes: Save through a temp file and rename instead of
            overwriting the backing file in place.
        strict_load: Treat a backing file that is not a JSON array as an
            error instead of an empty collection.
        verbosity: Logging verbosity level.
        log_file: Optional file that receives a copy of the log.
    """

    data_file: str = "data/users.json"
    atomic_writes: bool = False
    strict_load: bool = False
    verbosity: Verbosity = "normal"
    log_file: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not isinstance(self.data_file, str) or not self.data_file.strip():
            raise InvalidConfigError("data_file", self.data_file, "must be a non-empty path")
        for flag in ("atomic_writes", "strict_load"):
            if not isinstance(getattr(self, flag), bool):
                raise InvalidConfigError(flag, getattr(self, flag), "must be true or false")
        if self.verbosity not in get_args(Verbosity):
            raise InvalidConfigError(
                "verbosity", self.verbosity, "must be one of quiet, normal, verbose"
            )

    @property
    def data_path(self) -> Path:
        """Get the backing file as a Path."""
        return Path(self.data_file).expanduser()

    @property
    def verbose(self) -> bool:
        return self.verbosity == "verbose"

    @property
    def quiet(self) -> bool:
        return self.verbosity == "quiet"


def load_config(config_file: Optional[Path] = None, **overrides) -> UserManagerConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset options do not mask file settings.

    Returns:
        Validated UserManagerConfig instance

    Raises:
        ConfigurationError: If a config file is missing, unreadable or has
            unknown keys
        InvalidConfigError: If a value is invalid
    """
    merged: dict = {}

    # 1. Global config
    global_config = Path.home() / f".{CONFIG_FILENAME}"
    if global_config.exists():
        merged.update(_read_config_file(global_config, "global"))

    # 2. Project config
    project_config = Path.cwd() / CONFIG_FILENAME
    if project_config.exists():
        merged.update(_read_config_file(project_config, "project"))

    # 3. Explicit config file (highest priority from files)
    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_read_config_file(config_file, "explicit"))

    # 4. Environment variables
    merged.update(_load_env_vars())

    # 5. CLI overrides; boolean verbosity flags become the verbosity string
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"
    merged.update(overrides)

    unknown = sorted(set(merged) - set(UserManagerConfig.__dataclass_fields__))
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")

    return UserManagerConfig(**merged)


def _read_config_file(path: Path, label: str) -> dict:
    try:
        return _load_toml_file(path)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Invalid {label} config '{path}': {e}") from e


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from USER_MANAGER_* environment variables.

    Supported environment variables:
        USER_MANAGER_DATA_FILE: path
        USER_MANAGER_ATOMIC_WRITES: bool (true/false/1/0)
        USER_MANAGER_STRICT_LOAD: bool
        USER_MANAGER_VERBOSITY: quiet/normal/verbose
        USER_MANAGER_LOG_FILE: path

    Returns:
        Dict of field_name -> parsed_value for any USER_MANAGER_* vars found.
    """
    type_hints = get_type_hints(UserManagerConfig)

    result: dict[str, Any] = {}

    for field_name in UserManagerConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(field_name, env_value, f"{env_key}: {e}") from e
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    # Optional[X] is Union[X, None]; unwrap to X
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]

    origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.strip().lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If no TOML parser is available
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            # Fallback to tomli for Python 3.9-3.10
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
