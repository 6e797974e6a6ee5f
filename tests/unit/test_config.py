"""
Unit tests for ConfigManager and DatabaseSettings.

Tests verify:
- TOML loading
- Environment variable overrides
- Type-specific getters
- Settings resolution with defaults
"""
from pathlib import Path

import pytest

from chatstore.core.config import (
    DEFAULT_DATABASE_NAME,
    DEFAULT_MONGO_URI,
    ConfigManager,
    DatabaseSettings,
)

CONFIG = """
[logging]
level = "DEBUG"

[database]
uri = "mongodb://db.internal:27017"
name = "chat"

[migrations]
verify_schema = true

[migrations.probe_retry]
max_attempts = 5
min_wait_seconds = 0.5
jitter = false
"""


@pytest.fixture
def config_path(tmp_path) -> Path:
    path = tmp_path / "chatstore.toml"
    path.write_text(CONFIG)
    return path


class TestConfigManager:
    """Tests for basic ConfigManager functionality."""

    def test_empty_config(self):
        config = ConfigManager()
        assert config.get("any.key") is None
        assert config.get("any.key", "default") == "default"

    def test_load_toml_file(self, config_path):
        config = ConfigManager(config_path)
        assert config.get("database.uri") == "mongodb://db.internal:27017"
        assert config.get("migrations.probe_retry.max_attempts") == 5
        assert config.get_section("migrations.probe_retry")["jitter"] is False

    def test_missing_file_is_ignored(self, tmp_path):
        config = ConfigManager(tmp_path / "absent.toml")
        assert config.raw_data == {}

    def test_env_overrides_toml(self, config_path, monkeypatch):
        monkeypatch.setenv("CHATSTORE_DATABASE_NAME", "override")
        monkeypatch.setenv("CHATSTORE_MIGRATIONS_VERIFY_SCHEMA", "false")

        config = ConfigManager(config_path)

        assert config.get("database.name") == "override"
        assert config.get_bool("migrations.verify_schema") is False

    def test_env_value_parsing(self, monkeypatch):
        monkeypatch.setenv("CHATSTORE_A", "3")
        monkeypatch.setenv("CHATSTORE_B", "2.5")
        monkeypatch.setenv("CHATSTORE_C", "yes")
        monkeypatch.setenv("CHATSTORE_D", "text")

        config = ConfigManager()

        assert config.get_int("a") == 3
        assert config.get_float("b") == 2.5
        assert config.get_bool("c") is True
        assert config.get("d") == "text"

    def test_reload(self, config_path):
        config = ConfigManager(config_path)
        config_path.write_text('[database]\nname = "reloaded"\n')

        config.reload()

        assert config.get("database.name") == "reloaded"


class TestDatabaseSettings:
    """Settings resolved from configuration."""

    def test_defaults(self):
        settings = DatabaseSettings.from_config(ConfigManager())

        assert settings.uri == DEFAULT_MONGO_URI
        assert settings.name == DEFAULT_DATABASE_NAME
        assert settings.verify_schema is False
        assert settings.probe_retry.max_attempts == 3

    def test_from_toml(self, config_path):
        settings = DatabaseSettings.from_config(ConfigManager(config_path))

        assert settings.uri == "mongodb://db.internal:27017"
        assert settings.name == "chat"
        assert settings.verify_schema is True
        assert settings.probe_retry.max_attempts == 5
        assert settings.probe_retry.min_wait_seconds == 0.5
        assert settings.probe_retry.jitter is False

    def test_probe_retry_env_override(self, config_path, monkeypatch):
        monkeypatch.setenv("CHATSTORE_MIGRATIONS_PROBE_RETRY_MAX_ATTEMPTS", "7")

        settings = DatabaseSettings.from_config(ConfigManager(config_path))

        assert settings.probe_retry.max_attempts == 7

    def test_shipped_default_config_loads(self):
        path = Path(__file__).resolve().parents[2] / "config" / "default.toml"

        settings = DatabaseSettings.from_config(ConfigManager(path))

        assert settings.name == "chatstore"
        assert settings.probe_retry.max_wait_seconds == 10.0
