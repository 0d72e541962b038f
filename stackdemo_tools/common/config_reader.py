"""
================================================================================
Configuration Reader
================================================================================

YAML key/value settings with built-in defaults and environment overrides.

Features:
    - Built-in default set used when the file is absent or unreadable
    - File values deep-merged over the defaults
    - Environment variable override (BASE_URL overrides base.url)
    - Flat ("base.url: ...") or nested ("base: {url: ...}") keys
    - Typed getters that never raise on malformed values

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple
from urllib.parse import urljoin

import yaml
from loguru import logger


# Default configuration file path
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yaml"

DEFAULTS: Dict[str, Any] = {
    "base": {
        "url": "https://bstackdemo.com/",
    },
    "browser": {
        "name": "chromium",
        "headless": False,
        "window_width": 1920,
        "window_height": 1080,
    },
    "timeouts": {
        "implicit_wait": 10,
        "explicit_wait": 10,
        "page_load": 30,
    },
    "credentials": {
        "default_username": "demouser",
        "default_password": "testingisfun99",
    },
    "report": {
        "dir": "test-output/reports",
        "name": "StackDemo-Test-Report",
        "title": "StackDemo Test Execution Report",
    },
    "logging": {
        "level": "INFO",
    },
}

TRUE_VALUES = ("true", "1", "yes", "on")
FALSE_VALUES = ("false", "0", "no", "off")

_MISSING = object()


class ConfigError(Exception):
    """Raised when a configuration value cannot be converted to the requested type."""

    def __init__(self, key: str, value: Any, expected: str):
        self.key = key
        self.value = value
        self.expected = expected
        super().__init__(f"Invalid {expected} value for '{key}': {value!r}")


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merges two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class ConfigReader:
    """
    Read-only settings for one test run.

    Lookup order (highest to lowest priority):
        1. Environment variables (BROWSER_HEADLESS for browser.headless)
        2. YAML configuration file
        3. Built-in defaults

    Usage:
        >>> config = ConfigReader()
        >>> config.base_url
        'https://bstackdemo.com/'
        >>> config.get_int("timeouts.explicit_wait", 10)
        10
        >>> config.get("missing.key", "fallback")
        'fallback'

    Instances are not mutated after construction (except by `reload()`), so one
    reader may be shared by parallel test workers.
    """

    def __init__(self, config_path: Optional[Path] = None) -> None:
        self._config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._config: Dict[str, Any] = {}
        self._load_config()

    @property
    def config_path(self) -> Path:
        return self._config_path

    def _load_config(self) -> None:
        """Load defaults, then merge the YAML file over them if it is usable."""
        config = copy.deepcopy(DEFAULTS)

        if not self._config_path.exists():
            logger.warning(
                f"Configuration file not found: {self._config_path}. "
                f"Using built-in defaults."
            )
            self._config = config
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                file_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(
                f"Failed to load configuration from {self._config_path}: {e}. "
                f"Using built-in defaults."
            )
            self._config = config
            return

        if not isinstance(file_config, dict):
            logger.warning(
                f"Configuration file {self._config_path} is not a key/value mapping. "
                f"Using built-in defaults."
            )
            self._config = config
            return

        self._config = _deep_merge(config, file_config)
        logger.info(f"Configuration loaded from: {self._config_path}")

    def reload(self) -> None:
        """Reload configuration from file."""
        logger.info(f"Reloading configuration from: {self._config_path}")
        self._load_config()

    # =========================================================================
    # Raw access
    # =========================================================================

    def _lookup(self, key: str) -> Any:
        env_key = key.upper().replace(".", "_")
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return env_value

        # Flat dotted key written literally in the file
        if key in self._config:
            return self._config[key]

        value: Any = self._config
        for part in key.split("."):
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return _MISSING
        return value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation key.

        Args:
            key: Dot-notation key (e.g., "base.url")
            default: Value returned when the key is not configured

        Returns:
            Configuration value or default
        """
        value = self._lookup(key)
        if value is _MISSING or value is None:
            logger.debug(f"Property '{key}' not found, using default value: {default}")
            return default
        return value

    def has(self, key: str) -> bool:
        return self._lookup(key) not in (_MISSING, None)

    # =========================================================================
    # Typed getters
    # =========================================================================

    def get_str(self, key: str, default: str = "") -> str:
        value = self.get(key, default)
        return value if isinstance(value, str) else str(value)

    def get_int(self, key: str, default: int = 0) -> int:
        """Get an integer setting; malformed values log a warning and return default."""
        return self._get_typed(key, default, int)

    def get_float(self, key: str, default: float = 0.0) -> float:
        return self._get_typed(key, default, float)

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Get a boolean setting (true/false, yes/no, on/off, 1/0)."""
        return self._get_typed(key, default, bool)

    def _get_typed(self, key: str, default: Any, kind: type) -> Any:
        value = self._lookup(key)
        if value is _MISSING or value is None:
            logger.debug(f"Property '{key}' not found, using default value: {default}")
            return default
        try:
            return self._coerce(key, value, kind)
        except ConfigError as e:
            logger.warning(f"{e}, using default: {default}")
            return default

    @staticmethod
    def _coerce(key: str, value: Any, kind: type) -> Any:
        if kind is bool:
            if isinstance(value, bool):
                return value
            if isinstance(value, str):
                lowered = value.strip().lower()
                if lowered in TRUE_VALUES:
                    return True
                if lowered in FALSE_VALUES:
                    return False
            elif isinstance(value, int) and value in (0, 1):
                return bool(value)
            raise ConfigError(key, value, "boolean")

        if isinstance(value, bool):
            raise ConfigError(key, value, kind.__name__)
        if isinstance(value, kind):
            return value
        if kind is int and isinstance(value, float):
            if value.is_integer():
                return int(value)
            raise ConfigError(key, value, "int")
        try:
            return kind(value.strip() if isinstance(value, str) else value)
        except (TypeError, ValueError) as e:
            raise ConfigError(key, value, kind.__name__) from e

    # =========================================================================
    # Commonly used settings
    # =========================================================================

    @property
    def base_url(self) -> str:
        url = self.get_str("base.url", DEFAULTS["base"]["url"])
        return url if url.endswith("/") else f"{url}/"

    @property
    def login_url(self) -> str:
        return urljoin(self.base_url, "signin")

    @property
    def checkout_url(self) -> str:
        return urljoin(self.base_url, "checkout")

    @property
    def browser(self) -> str:
        return self.get_str("browser.name", "chromium").strip().lower()

    @property
    def headless(self) -> bool:
        return self.get_bool("browser.headless", False)

    @property
    def window_size(self) -> Tuple[int, int]:
        return (
            self.get_int("browser.window_width", 1920),
            self.get_int("browser.window_height", 1080),
        )

    @property
    def implicit_wait(self) -> int:
        return self.get_int("timeouts.implicit_wait", 10)

    @property
    def explicit_wait(self) -> int:
        return self.get_int("timeouts.explicit_wait", 10)

    @property
    def page_load_timeout(self) -> int:
        return self.get_int("timeouts.page_load", 30)

    @property
    def default_username(self) -> str:
        return self.get_str("credentials.default_username", "demouser")

    @property
    def default_password(self) -> str:
        return self.get_str("credentials.default_password", "testingisfun99")

    @property
    def report_dir(self) -> Path:
        return Path(self.get_str("report.dir", "test-output/reports"))

    # =========================================================================
    # Introspection
    # =========================================================================

    def as_dict(self) -> Dict[str, Any]:
        """Return a deep copy of the merged file/default configuration."""
        return copy.deepcopy(self._config)

    def log_all(self) -> None:
        """Log every configured value, masking passwords."""
        logger.info("=== Configuration Properties ===")
        for key, value in sorted(self._flatten(self._config).items()):
            if "password" in key.lower():
                value = "***MASKED***"
            logger.info(f"{key} = {value}")
        logger.info("================================")

    @classmethod
    def _flatten(cls, data: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
        flat: Dict[str, Any] = {}
        for key, value in data.items():
            full_key = f"{prefix}{key}"
            if isinstance(value, dict):
                flat.update(cls._flatten(value, f"{full_key}."))
            else:
                flat[full_key] = value
        return flat


__all__ = [
    "ConfigReader",
    "ConfigError",
    "DEFAULTS",
    "DEFAULT_CONFIG_PATH",
]
