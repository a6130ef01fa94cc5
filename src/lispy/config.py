"""REPL configuration."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_FILE = Path("~/.lispy_history")

# Environment variable -> config field
ENV_VARS = {
    "LISPY_PROMPT": "prompt",
    "LISPY_HISTORY_FILE": "history_file",
    "LISPY_HISTORY_LENGTH": "history_length",
    "LISPY_HISTORY": "history_enabled",
    "LISPY_SHOW_TREE": "show_tree",
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class ConfigError(Exception):
    """Invalid configuration file or environment value."""
    pass


@dataclass
class ReplConfig:
    """Settings for an interactive session.

    Attributes:
        prompt: Text shown before each input line
        history_file: Where line history is persisted
        history_length: Maximum number of history entries kept
        history_enabled: Whether history is loaded and saved at all
        show_tree: Print the parsed syntax tree before each result
    """

    prompt: str = "lispy> "
    history_file: Path = DEFAULT_HISTORY_FILE
    history_length: int = 1000
    history_enabled: bool = True
    show_tree: bool = False

    @classmethod
    def load(cls, path: Path | None = None) -> ReplConfig:
        """Build a config from defaults, a YAML file and the environment.

        Resolution order (later wins):
        1. Built-in defaults
        2. YAML file: ``path`` if given, else the LISPY_CONFIG env var
        3. LISPY_* environment variables

        Raises:
            ConfigError: For unreadable files, unknown keys or bad values.
        """
        config = cls()

        if path is None and os.environ.get("LISPY_CONFIG"):
            path = Path(os.environ["LISPY_CONFIG"])
        if path is not None:
            config = config.merge(_read_yaml(path))
            logger.debug("Loaded config file %s", path)

        env_values = {
            field_name: os.environ[var]
            for var, field_name in ENV_VARS.items()
            if var in os.environ
        }
        if env_values:
            logger.debug("Config overrides from environment: %s", sorted(env_values))
            config = config.merge(env_values)

        return config

    def merge(self, values: dict[str, Any]) -> ReplConfig:
        """Return a copy with the given fields replaced after type coercion."""
        known = {f.name: f for f in fields(self)}
        changes: dict[str, Any] = {}
        for key, raw in values.items():
            if key not in known:
                raise ConfigError(f"Unknown config key: {key}")
            changes[key] = _coerce(key, raw)
        return replace(self, **changes)

    @property
    def history_path(self) -> Path:
        return Path(self.history_file).expanduser()


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def _coerce(key: str, raw: Any) -> Any:
    """Convert a YAML or environment value to the field's type."""
    if key == "prompt":
        return str(raw)

    if key == "history_file":
        return Path(str(raw))

    if key == "history_length":
        if isinstance(raw, bool):
            raise ConfigError(f"{key} must be an integer, got {raw!r}")
        try:
            value = int(raw)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"{key} must be an integer, got {raw!r}") from e
        if value < 0:
            raise ConfigError(f"{key} must not be negative, got {value}")
        return value

    # Boolean fields
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"{key} must be a boolean, got {raw!r}")
