"""
Configuration management with TOML + environment variable support.

Configuration hierarchy (later overrides earlier):
1. Default values in code
2. TOML file
3. Environment variables (CHATSTORE_* prefix)
"""
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from chatstore.core.retry import CONFIG_KEYS as RETRY_CONFIG_KEYS, RetryConfig

DEFAULT_MONGO_URI = "mongodb://localhost:27017"
DEFAULT_DATABASE_NAME = "chatstore"


class ConfigManager:
    """Centralized configuration with TOML + env var support.

    Usage:
        config = ConfigManager(Path("config/default.toml"))
        uri = config.get("database.uri")
        verify = config.get_bool("migrations.verify_schema")
    """

    def __init__(
        self,
        config_path: Optional[Path] = None,
        env_prefix: str = "CHATSTORE_",
    ) -> None:
        """Initialize ConfigManager.

        Args:
            config_path: Path to TOML config file (optional)
            env_prefix: Prefix for environment variable overrides
        """
        self._data: dict[str, Any] = {}
        self._env_prefix = env_prefix
        self._config_path = config_path

        if config_path and config_path.exists():
            self._load_toml(config_path)

    def _load_toml(self, path: Path) -> None:
        with open(path, "rb") as f:
            self._data = tomllib.load(f)

    def _get_nested(self, data: dict[str, Any], key: str) -> tuple[bool, Any]:
        """Get a nested value using dot notation.

        Returns (found, value) tuple.
        """
        current = data
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return False, None
            current = current[part]

        return True, current

    def _get_env_value(self, key: str) -> tuple[bool, Any]:
        """Get value from environment variable.

        Converts key like "database.uri" to "CHATSTORE_DATABASE_URI".
        """
        env_key = self._env_prefix + key.upper().replace(".", "_")
        if env_key in os.environ:
            return True, self._parse_env_value(os.environ[env_key])
        return False, None

    def _parse_env_value(self, value: str) -> Any:
        """Parse environment variable string to appropriate type."""
        if value.lower() in ("true", "yes", "on"):
            return True
        if value.lower() in ("false", "no", "off"):
            return False

        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        return value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value with dot notation.

        Environment variables take precedence over TOML values.

        Args:
            key: Dot-notation key like "database.name"
            default: Default value if key not found

        Returns:
            Configuration value
        """
        found, value = self._get_env_value(key)
        if found:
            return value

        found, value = self._get_nested(self._data, key)
        if found:
            return value

        return default

    def get_section(self, section: str) -> dict[str, Any]:
        """Get entire configuration section.

        Environment overrides are not applied to sections; use get() for
        individual keys.
        """
        found, value = self._get_nested(self._data, section)
        if found and isinstance(value, dict):
            return value
        return {}

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self.get(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes", "on")
        return bool(value)

    def get_int(self, key: str, default: int = 0) -> int:
        value = self.get(key)
        if value is None:
            return default
        return int(value)

    def get_float(self, key: str, default: float = 0.0) -> float:
        value = self.get(key)
        if value is None:
            return default
        return float(value)

    def reload(self) -> None:
        """Reload configuration from TOML file."""
        if self._config_path and self._config_path.exists():
            self._load_toml(self._config_path)

    @property
    def raw_data(self) -> dict[str, Any]:
        """Get raw configuration data (for debugging)."""
        return self._data.copy()


@dataclass
class DatabaseSettings:
    """Connection and migration settings resolved from configuration.

    Attributes:
        uri: MongoDB connection string.
        name: Name of the application database.
        verify_schema: Check final-schema post-conditions after migrating.
        probe_retry: Backoff used while probing for the database.
    """

    uri: str = DEFAULT_MONGO_URI
    name: str = DEFAULT_DATABASE_NAME
    verify_schema: bool = False
    probe_retry: RetryConfig = field(default_factory=RetryConfig)

    @classmethod
    def from_config(cls, config: ConfigManager) -> "DatabaseSettings":
        """Build settings from a ConfigManager.

        Probe retry keys are read one by one so that environment overrides
        such as CHATSTORE_MIGRATIONS_PROBE_RETRY_MAX_ATTEMPTS apply.
        """
        probe_retry = RetryConfig.from_dict(
            {
                key: value
                for key in RETRY_CONFIG_KEYS
                if (value := config.get(f"migrations.probe_retry.{key}")) is not None
            }
        )
        return cls(
            uri=config.get("database.uri", DEFAULT_MONGO_URI),
            name=config.get("database.name", DEFAULT_DATABASE_NAME),
            verify_schema=config.get_bool("migrations.verify_schema", False),
            probe_retry=probe_retry,
        )
