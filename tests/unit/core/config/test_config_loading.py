"""Tests for YAML configuration loading and environment substitution."""

from pathlib import Path

import pytest

from src.storefront.runtime.config.config_data import ConfigData, CORSConfig, DatabaseConfig
from src.storefront.runtime.config.config_template import (
    load_config,
    load_templated_yaml,
    substitute_env_vars,
)

CONFIG_YAML = """
config:
  app:
    environment: ${APP_ENVIRONMENT:-development}
    port: ${APP_PORT:-8000}
    cors:
      origins: "${SANCTUM_STATEFUL_DOMAINS:-http://localhost:5173}"
  database:
    url: "${DATABASE_URL:-sqlite:///./test.db}"
"""


class TestSubstituteEnvVars:
    def test_default_used_when_unset(self, monkeypatch):
        monkeypatch.delenv("STOREFRONT_TEST_VAR", raising=False)

        assert substitute_env_vars("${STOREFRONT_TEST_VAR:-fallback}") == "fallback"

    def test_environment_value_wins(self, monkeypatch):
        monkeypatch.setenv("STOREFRONT_TEST_VAR", "real")

        assert substitute_env_vars("x=${STOREFRONT_TEST_VAR:-fallback}") == "x=real"

    def test_required_variable_missing(self, monkeypatch):
        monkeypatch.delenv("STOREFRONT_TEST_VAR", raising=False)

        with pytest.raises(ValueError, match="STOREFRONT_TEST_VAR"):
            substitute_env_vars("${STOREFRONT_TEST_VAR}")

    def test_required_variable_custom_message(self, monkeypatch):
        monkeypatch.delenv("STOREFRONT_TEST_VAR", raising=False)

        with pytest.raises(ValueError, match="set me"):
            substitute_env_vars("${STOREFRONT_TEST_VAR:?set me}")


class TestLoadTemplatedYaml:
    def _write(self, tmp_path: Path) -> Path:
        path = tmp_path / "config.yaml"
        path.write_text(CONFIG_YAML)
        return path

    def test_defaults(self, tmp_path, monkeypatch):
        monkeypatch.delenv("SANCTUM_STATEFUL_DOMAINS", raising=False)
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("APP_PORT", raising=False)
        monkeypatch.delenv("APP_ENVIRONMENT", raising=False)

        config = load_templated_yaml(self._write(tmp_path))

        assert config.app.cors.origins == ["http://localhost:5173"]
        assert config.app.port == 8000
        assert config.database.url == "sqlite:///./test.db"

    def test_stateful_domains_are_split(self, tmp_path, monkeypatch):
        monkeypatch.setenv(
            "SANCTUM_STATEFUL_DOMAINS", "https://shop.example.com, https://admin.example.com"
        )

        config = load_templated_yaml(self._write(tmp_path))

        assert config.app.cors.origins == [
            "https://shop.example.com",
            "https://admin.example.com",
        ]

    def test_environment_prefixed_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv("APP_ENVIRONMENT", "test")
        monkeypatch.setenv("TEST_DATABASE_URL", "sqlite:///./override.db")
        # registered so monkeypatch restores it after the override writes to it
        monkeypatch.setenv("DATABASE_URL", "sqlite:///./placeholder.db")

        config = load_templated_yaml(self._write(tmp_path))

        assert config.app.environment == "test"
        assert config.database.url == "sqlite:///./override.db"

    def test_invalid_values_raise(self, tmp_path, monkeypatch):
        monkeypatch.setenv("APP_PORT", "not-a-port")

        with pytest.raises(ValueError, match="Invalid configuration"):
            load_templated_yaml(self._write(tmp_path))

    def test_missing_file_falls_back_to_defaults(self, tmp_path):
        config = load_config(tmp_path / "missing.yaml")

        assert config == ConfigData()


class TestConfigModels:
    def test_cors_accepts_list(self):
        assert CORSConfig(origins=["http://a"]).origins == ["http://a"]

    def test_cors_default_paths(self):
        assert "/api/" in CORSConfig().paths
        assert "/sanctum/csrf-cookie" in CORSConfig().paths

    def test_database_password_from_env(self, monkeypatch):
        monkeypatch.setenv("STOREFRONT_DB_PASSWORD", "s3cret")
        config = DatabaseConfig(
            url="postgresql://app@db:5432/storefront",
            password_env_var="STOREFRONT_DB_PASSWORD",
        )

        assert config.connection_string == "postgresql://app:s3cret@db:5432/storefront"

    def test_database_password_env_missing(self, monkeypatch):
        monkeypatch.delenv("STOREFRONT_DB_PASSWORD", raising=False)
        config = DatabaseConfig(
            url="postgresql://app@db:5432/storefront",
            password_env_var="STOREFRONT_DB_PASSWORD",
        )

        with pytest.raises(ValueError, match="STOREFRONT_DB_PASSWORD"):
            _ = config.connection_string

    def test_sqlite_detection(self):
        assert DatabaseConfig(url="sqlite:///./x.db").is_sqlite
        assert not DatabaseConfig(url="postgresql://db/x").is_sqlite
