"""Tests for environment-driven configuration."""
import pytest

from common.api_error import ConfigurationError
from common.config import (
    DatabaseConfig,
    DbDriver,
    Environment,
    initialize_config,
    load_app_config,
)

BASE_ENV = {
    "APP_TITLE": "Patient Service",
    "APP_VERSION": "1.2.3",
    "ENVIRONMENT": "development",
    "LOG_LEVEL": "debug",
    "DB_DRIVER": "aiosqlite",
    "DB_NAME": "./patients.db",
}


@pytest.fixture
def env(monkeypatch):
    for key in ("DB_HOST", "DB_PORT", "DB_USER", "DB_PASSWORD", "DB_AUTO_CREATE_SCHEMA"):
        monkeypatch.delenv(key, raising=False)
    for key, value in BASE_ENV.items():
        monkeypatch.setenv(key, value)
    return monkeypatch


class TestLoadAppConfig:
    def test_loads_sqlite_config(self, env):
        config = load_app_config()

        assert config.environment == Environment.DEVELOPMENT
        assert config.database.driver == DbDriver.AIOSQLITE
        assert config.database.get_connection_url() == "sqlite+aiosqlite:///./patients.db"
        assert config.logging.level_value == "DEBUG"

    def test_auto_create_schema_flag(self, env):
        env.setenv("DB_AUTO_CREATE_SCHEMA", "true")
        assert load_app_config().database.auto_create_schema is True

    def test_bad_boolean_is_rejected(self, env):
        env.setenv("DB_AUTO_CREATE_SCHEMA", "maybe")
        with pytest.raises(ConfigurationError, match="DB_AUTO_CREATE_SCHEMA"):
            load_app_config()

    def test_missing_variable(self, env):
        env.delenv("APP_TITLE")
        with pytest.raises(ConfigurationError, match="APP_TITLE"):
            load_app_config()

    def test_unknown_driver(self, env):
        env.setenv("DB_DRIVER", "mysql")
        with pytest.raises(ConfigurationError, match="DB_DRIVER"):
            load_app_config()

    def test_production_requires_database_credentials(self, env):
        env.setenv("ENVIRONMENT", "production")
        env.setenv("LOG_LEVEL", "INFO")
        env.setenv("DB_DRIVER", "asyncpg")
        env.setenv("DB_HOST", "db")
        env.setenv("DB_PORT", "5432")
        with pytest.raises(ConfigurationError, match="DB_USER"):
            load_app_config()


class TestInitializeConfig:
    def test_returns_validated_config(self, env):
        assert initialize_config().app_version == "1.2.3"

    def test_validation_errors_become_configuration_error(self, env):
        env.setenv("APP_VERSION", "latest")
        with pytest.raises(ConfigurationError, match="app_version"):
            initialize_config()


class TestDatabaseConfig:
    def test_postgres_requires_host_and_port(self):
        with pytest.raises(ValueError, match="DB_HOST"):
            DatabaseConfig(driver=DbDriver.ASYNCPG, name="patients")

    def test_password_is_masked(self):
        config = DatabaseConfig(
            driver=DbDriver.ASYNCPG,
            name="patients",
            host="db",
            port=5432,
            username="svc",
            password="s3cret",
        )

        assert config.get_connection_url() == "postgresql+asyncpg://svc:****@db:5432/patients"
        assert "s3cret" in config.get_connection_url(include_password=True)
        assert config.to_dict_safe()["password"] == "****"
