"""Configuration loading for trellocli."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

from trellocli.trello.client import DEFAULT_BASE_URL
from trellocli.trello.fetcher import DEFAULT_TIMEOUT

# Environment variable -> config field
ENV_VARS = {
    "TRELLO_API_KEY": "api_key",
    "TRELLO_API_TOKEN": "token",
    "TRELLO_BASE_URL": "base_url",
    "TRELLO_TIMEOUT": "timeout",
    "TRELLO_STRICT_STATUS": "strict_status",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass(frozen=True)
class TrelloConfig:
    """Connection settings for the Trello API.

    Attributes:
        api_key: Trello API key.
        token: Trello API token for the member whose boards are read.
        base_url: API root, without the version segment.
        timeout: Request timeout in seconds.
        strict_status: Treat non-2xx responses as errors instead of warnings.
    """

    api_key: str = ""
    token: str = ""
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    strict_status: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TrelloConfig:
        """Create config from a dictionary.

        Args:
            data: Configuration values, e.g. from YAML. Unknown keys are rejected.

        Returns:
            Parsed configuration object.

        Raises:
            ConfigError: If a key is unknown or a value has the wrong type.
        """
        known = set(cls.__dataclass_fields__)
        unknown = sorted(str(key) for key in set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls().merge(**data)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> TrelloConfig:
        """Create config from TRELLO_* environment variables."""
        return cls().merge(**read_env(environ))

    def merge(self, **values: Any) -> TrelloConfig:
        """Return a copy with the given values applied. None values are skipped.

        Raises:
            ConfigError: If a value cannot be converted to the field's type.
        """
        updates: dict[str, Any] = {}
        for name, value in values.items():
            if value is None:
                continue
            if name not in self.__dataclass_fields__:
                raise ConfigError(f"Unknown configuration key: {name}")
            updates[name] = _coerce(name, value)
        return replace(self, **updates)


def _coerce(name: str, value: Any) -> Any:
    if name == "timeout":
        try:
            timeout = float(value)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"timeout must be a number, got {value!r}") from e
        if timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {timeout}")
        return timeout

    if name == "strict_status":
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in _TRUE_VALUES:
            return True
        if text in _FALSE_VALUES:
            return False
        raise ConfigError(f"strict_status must be a boolean, got {value!r}")

    if not isinstance(value, str):
        raise ConfigError(f"{name} must be a string, got {type(value).__name__}")
    return value


def read_env(environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """Collect config values from TRELLO_* environment variables.

    Args:
        environ: Environment mapping. Defaults to os.environ.

    Returns:
        Map of config field name to raw string value, for non-empty variables.
    """
    if environ is None:
        environ = os.environ
    return {field: environ[var] for var, field in ENV_VARS.items() if environ.get(var)}


def load_config(config_path: Path | str) -> TrelloConfig:
    """Load trellocli configuration from a YAML file.

    Args:
        config_path: Path to a YAML mapping of config field names to values.

    Returns:
        Parsed configuration object.

    Raises:
        ConfigError: If file doesn't exist or is invalid.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        return TrelloConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a YAML mapping, got {type(data).__name__}")

    return TrelloConfig.from_dict(data)


def resolve_config(
    config_path: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
    **overrides: Any,
) -> TrelloConfig:
    """Build the effective configuration.

    Precedence, lowest first: defaults, config file, environment, overrides.

    Args:
        config_path: Optional YAML config file.
        environ: Environment mapping. Defaults to os.environ.
        **overrides: Explicit values (e.g. from CLI flags). None means unset.

    Returns:
        The merged configuration.

    Raises:
        ConfigError: If any source is invalid.
    """
    config = load_config(config_path) if config_path is not None else TrelloConfig()
    return config.merge(**read_env(environ)).merge(**overrides)
