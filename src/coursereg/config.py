"""Configuration loading for coursereg.

Settings resolve in three layers: built-in defaults, an optional YAML file,
then environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILENAME = "coursereg.yaml"

# Environment variable -> Settings field
ENV_VARS = {
    "COURSEREG_DB_PATH": "database_path",
    "COURSEREG_HOST": "host",
    "PORT": "port",
    "COURSEREG_SESSION_TTL_HOURS": "session_ttl_hours",
    "COURSEREG_BCRYPT_ROUNDS": "bcrypt_rounds",
    "COURSEREG_MAX_UPDATE_RETRIES": "max_update_retries",
    "COURSEREG_LOG_DIR": "log_dir",
    "COURSEREG_LOG_LEVEL": "log_level",
}


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the service."""

    database_path: str = "coursereg.db"
    host: str = "127.0.0.1"
    port: int = 3000
    session_ttl_hours: int = 24
    session_cookie: str = "coursereg_session"
    bcrypt_rounds: int = 12
    max_update_retries: int = 3
    log_dir: str = "logs"
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Create settings from a dictionary, coercing values to field types.

        Raises:
            ConfigError: On unknown keys or values that cannot be coerced.
        """
        return replace(cls(), **_coerce(data))


def _coerce(data: dict[str, Any]) -> dict[str, Any]:
    known = {f.name: f for f in fields(Settings)}
    unknown = sorted(set(data) - set(known))
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    result: dict[str, Any] = {}
    for key, value in data.items():
        # Annotations are strings under `from __future__ import annotations`
        if known[key].type == "int":
            try:
                result[key] = int(value)
            except (TypeError, ValueError) as e:
                raise ConfigError(f"Invalid integer for '{key}': {value!r}") from e
            if result[key] < 0:
                raise ConfigError(f"'{key}' must not be negative")
        else:
            result[key] = str(value)
    return result


def find_config(start: Path | None = None) -> Path | None:
    """Locate a config file from COURSEREG_CONFIG or the working directory."""
    env_path = os.environ.get("COURSEREG_CONFIG")
    if env_path:
        return Path(env_path)
    candidate = (start or Path.cwd()) / CONFIG_FILENAME
    return candidate if candidate.exists() else None


def load_config(path: Path) -> dict[str, Any]:
    """Read a YAML config file into a dictionary.

    Raises:
        ConfigError: If the file is missing or is not a YAML mapping.
    """
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    with path.open(encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def load_settings(config_path: Path | None = None) -> Settings:
    """Resolve settings from defaults, YAML file and environment.

    Args:
        config_path: Explicit config file. Falls back to find_config().

    Returns:
        The resolved Settings.
    """
    data: dict[str, Any] = {}

    path = config_path or find_config()
    if path is not None:
        data.update(load_config(path))

    for env_var, field_name in ENV_VARS.items():
        value = os.environ.get(env_var)
        if value:
            data[field_name] = value

    return Settings.from_dict(data)
