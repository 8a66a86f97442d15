"""
================================================================================
Config Provider
================================================================================

Flat YAML configuration for the E2E harness with environment variable override.

Features:
    - Flat key/value file (``browser: chrome``, ``implicit.wait: 10``)
    - Environment override (E2E_IMPLICIT_WAIT overrides implicit.wait)
    - Typed accessors with documented defaults
    - Hard failure for required out-of-band values (invite token, ...)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from loguru import logger


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent.parent / "config" / "e2e.yaml"

# Recognized keys and the value used when a key is absent
DEFAULTS: Dict[str, Any] = {
    "browser": "chrome",
    "headless": False,
    "implicit.wait": 10,
    "explicit.wait": 20,
    "page.load.timeout": 30,
    "base.url": "http://localhost:3000",
    "poll.interval": 0.25,
    "evidence.dir": "test-results/screenshots",
    "log.level": "INFO",
    "log.file": None,
}

ENV_PREFIX = "E2E_"

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off", "")


class ConfigurationError(Exception):
    """Raised when configuration loading or access fails."""
    pass


class ConfigurationMissingError(ConfigurationError):
    """Raised when a contractually required value is absent."""
    pass


def env_key(key: str) -> str:
    """Map a config key to its environment variable name (base.url -> E2E_BASE_URL)."""
    return ENV_PREFIX + key.upper().replace(".", "_")


@dataclass(frozen=True)
class HarnessConfig:
    """
    Immutable configuration resolved once per run.

    Only keys listed in ``DEFAULTS`` are kept; anything else in the source
    file is ignored.

    Usage:
        >>> config = HarnessConfig.from_mapping({"implicit.wait": 5})
        >>> config.implicit_wait
        5.0
        >>> config.browser
        'chrome'
    """

    values: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "HarnessConfig":
        """Build a config from already-resolved raw values."""
        known = {key: raw[key] for key in DEFAULTS if key in raw}
        return cls(values=MappingProxyType(known))

    # -------------------------------------------------------------------------
    # Generic accessors
    # -------------------------------------------------------------------------

    def is_set(self, key: str) -> bool:
        return key in self.values

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a raw value.

        The documented default from ``DEFAULTS`` applies only when the key
        is absent; an explicit value (even ``""``) is returned as-is.
        """
        if key in self.values:
            return self.values[key]
        if default is not None:
            return default
        return DEFAULTS.get(key)

    def get_str(self, key: str) -> Optional[str]:
        value = self.get(key)
        return None if value is None else str(value)

    def get_required_str(self, key: str) -> str:
        """
        String value that must not be null.

        A key present with no value (``base.url:``) overrides the default
        with None, which no string setting accepts.
        """
        value = self.get_str(key)
        if value is None:
            raise ConfigurationError(f"Invalid value for '{key}': None")
        return value

    def get_bool(self, key: str) -> bool:
        value = self.get(key)
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in _TRUE_VALUES:
            return True
        if text in _FALSE_VALUES:
            return False
        raise ConfigurationError(f"Invalid boolean for '{key}': {value!r}")

    def get_float(self, key: str) -> float:
        value = self.get(key)
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid number for '{key}': {value!r}") from e

    # -------------------------------------------------------------------------
    # Typed properties for recognized keys
    # -------------------------------------------------------------------------

    @property
    def browser(self) -> str:
        return self.get_required_str("browser").strip().lower()

    @property
    def headless(self) -> bool:
        return self.get_bool("headless")

    @property
    def implicit_wait(self) -> float:
        """Implicit wait in seconds."""
        return self.get_float("implicit.wait")

    @property
    def explicit_wait(self) -> float:
        """Explicit wait bound in seconds."""
        return self.get_float("explicit.wait")

    @property
    def page_load_timeout(self) -> float:
        return self.get_float("page.load.timeout")

    @property
    def poll_interval(self) -> float:
        return self.get_float("poll.interval")

    @property
    def base_url(self) -> str:
        return self.get_required_str("base.url").rstrip("/")

    @property
    def evidence_dir(self) -> Path:
        return Path(self.get_required_str("evidence.dir"))

    @property
    def log_level(self) -> str:
        return self.get_required_str("log.level").upper()

    @property
    def log_file(self) -> Optional[str]:
        return self.get_str("log.file")


class ConfigProvider:
    """
    Loads ``HarnessConfig`` from a flat YAML file and the environment.

    Resolution order (highest to lowest priority):
        1. Environment variables (E2E_EXPLICIT_WAIT, E2E_BASE_URL, ...)
        2. YAML configuration file
        3. DEFAULTS
    """

    def __init__(
        self,
        config_path: Optional[Union[str, Path]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self._config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._environ = os.environ if environ is None else environ

    @property
    def config_path(self) -> Path:
        return self._config_path

    def load(self) -> HarnessConfig:
        """Resolve the configuration for this run."""
        raw = self._read_file()

        for key in DEFAULTS:
            env_value = self._environ.get(env_key(key))
            if env_value is not None:
                raw[key] = env_value

        unknown = sorted(k for k in raw if k not in DEFAULTS)
        if unknown:
            logger.debug(f"Ignoring unknown configuration keys: {unknown}")

        config = HarnessConfig.from_mapping(raw)
        logger.debug(f"Configuration resolved: {dict(config.values)}")
        return config

    def _read_file(self) -> Dict[str, Any]:
        if not self._config_path.exists():
            logger.warning(
                f"Configuration file not found: {self._config_path}. "
                f"Using defaults and environment variables only."
            )
            return {}

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {e}"
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file must contain a flat mapping: {self._config_path}"
            )

        logger.debug(f"Loaded configuration from: {self._config_path}")
        return {str(k): v for k, v in data.items()}


def require_env(name: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Return a required out-of-band value from the environment.

    Args:
        name: Environment variable name (e.g. ``E2E_INVITE_TOKEN``)
        environ: Mapping to read from (defaults to ``os.environ``)

    Raises:
        ConfigurationMissingError: When the variable is unset or blank
    """
    source = os.environ if environ is None else environ
    value = source.get(name)
    if value is None or not value.strip():
        raise ConfigurationMissingError(
            f"Required environment variable '{name}' is not set"
        )
    return value


__all__ = [
    "ConfigProvider",
    "ConfigurationError",
    "ConfigurationMissingError",
    "DEFAULTS",
    "HarnessConfig",
    "require_env",
]
