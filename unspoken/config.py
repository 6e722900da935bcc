"""Settings resolution from command line, config file and environment.

URL, model and system message come from the command line flag, else the
config file, else a built-in default (the system message has none). The API
key has no flag: ``OPENAI_API_KEY`` wins over the config file's ``api_key``,
and one of the two must be set.
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

from .errors import ConfigError

logger = logging.getLogger(__name__)

API_KEY_ENV = "OPENAI_API_KEY"
DEFAULT_API_URL = "https://models.inference.ai.azure.com/"
DEFAULT_MODEL = "gpt-4o"
CONFIG_FILENAME = "unspoken.toml"

_STRING_KEYS = ("api_key", "url", "model", "system_message")


@dataclass(frozen=True)
class Settings:
    """Fully resolved runtime configuration."""

    api_key: str = field(repr=False)
    api_url: str = DEFAULT_API_URL
    model: str = DEFAULT_MODEL
    system_message: Optional[str] = None


@dataclass(frozen=True)
class ConfigFile:
    """Contents of an ``unspoken.toml`` file. Every key is optional."""

    api_key: Optional[str] = field(default=None, repr=False)
    url: Optional[str] = None
    model: Optional[str] = None
    system_message: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ConfigFile":
        """Build from parsed TOML, ignoring unknown keys.

        Raises :class:`TypeError` when a known key holds a non-string value.
        """
        values = {}
        for key in _STRING_KEYS:
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise TypeError(
                    f"`{key}` must be a string, got {type(value).__name__}"
                )
            values[key] = value
        return cls(**values)


def home_dir() -> Optional[Path]:
    """Return the user's home directory, or ``None`` if it cannot be determined."""
    try:
        return Path.home()
    except RuntimeError:
        return None


def default_config_path(home: Optional[Path]) -> Optional[Path]:
    if home is None:
        return None
    return home / ".config" / CONFIG_FILENAME


def load_config(path: Path, *, required: bool) -> Optional[ConfigFile]:
    """Read and parse the config file at *path*.

    A missing file is an error only when *required*; otherwise ``None`` is
    returned. Unreadable or malformed files are always errors.
    """
    try:
        with open(path, "rb") as fh:
            data = tomllib.load(fh)
    except FileNotFoundError as exc:
        if not required:
            logger.debug("No config file at %s", path)
            return None
        raise ConfigError(f"Failed to read config file {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to read config file {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Failed to parse config file {path}") from exc

    try:
        config = ConfigFile.from_mapping(data)
    except TypeError as exc:
        raise ConfigError(f"Failed to parse config file {path}") from exc

    logger.debug("Loaded config file %s", path)
    return config


def resolve_settings(
    url: Optional[str] = None,
    model: Optional[str] = None,
    system: Optional[str] = None,
    config_path: Optional[Path] = None,
    *,
    environ: Mapping[str, str],
    home: Optional[Path],
) -> Settings:
    """Merge command line values, config file and environment into :class:`Settings`.

    *environ* and *home* are passed in rather than read from the process so
    the resolution can be exercised without touching the real environment.
    """
    if config_path is not None:
        config = load_config(config_path, required=True)
    else:
        default_path = default_config_path(home)
        config = load_config(default_path, required=False) if default_path else None

    if config is None:
        config = ConfigFile()

    api_key = environ.get(API_KEY_ENV)
    if api_key is None:
        api_key = config.api_key
    if api_key is None:
        raise ConfigError(f"Set `api_key` in config or `{API_KEY_ENV}` env.")

    return Settings(
        api_key=api_key,
        api_url=_first(url, config.url, DEFAULT_API_URL),
        model=_first(model, config.model, DEFAULT_MODEL),
        system_message=_first(system, config.system_message),
    )


def _first(*values: Optional[str]) -> Optional[str]:
    for value in values:
        if value is not None:
            return value
    return None
