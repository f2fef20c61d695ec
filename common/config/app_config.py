"""
Complete application configuration with validation.
Database configuration covers PostgreSQL (asyncpg) and SQLite (aiosqlite).
"""

from typing import Optional, Any
from pydantic import BaseModel, Field, model_validator, SecretStr
from .config_types import EnvLogLevel, DbDriver, Environment
from .env_config import require_env, get_env, get_env_bool
from .logging_config import LoggingConfig, load_logging_config
from common.api_error import ConfigurationError


class DatabaseConfig(BaseModel):
    """
    Database connection settings.

    For SQLite, `name` is the database file path and host/port are unused.
    """

    driver: DbDriver = Field(...)
    name: str = Field(..., min_length=1, description="Database name or SQLite file")

    host: Optional[str] = Field(default=None, min_length=1)
    port: Optional[int] = Field(default=None, gt=0, le=65535)

    # Authentication (keep separate from URL for security)
    username: Optional[str] = Field(default=None, min_length=1)
    password: Optional[SecretStr] = Field(default=None)  # Pydantic hides this in logs

    # Connection pooling (ignored for SQLite)
    pool_size: int = Field(default=5, ge=1, le=100)
    max_overflow: int = Field(default=10, ge=0, le=100)
    pool_timeout: int = Field(default=30, ge=1, le=300)
    pool_recycle: int = Field(default=3600, ge=300)  # Min 5 minutes

    # Create tables from metadata at startup instead of requiring migrations
    auto_create_schema: bool = False

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_server_settings(self) -> "DatabaseConfig":
        if not self.driver.is_sqlite and (self.host is None or self.port is None):
            raise ValueError(f"DB_HOST and DB_PORT are required for {self.driver.value}")
        return self

    def get_connection_url(self, include_password: bool = False) -> str:
        """
        Build SQLAlchemy connection URL.

        Args:
            include_password: If True, include password in URL (use for actual connections)
                            If False, mask it (use for logging)
        """
        if self.driver.is_sqlite:
            return f"sqlite+{self.driver.value}:///{self.name}"

        if self.username:
            if include_password and self.password:
                auth = f"{self.username}:{self.password.get_secret_value()}"
            else:
                auth = f"{self.username}:****"
            return f"postgresql+{self.driver.value}://{auth}@{self.host}:{self.port}/{self.name}"

        return f"postgresql+{self.driver.value}://{self.host}:{self.port}/{self.name}"

    def to_dict_safe(self) -> dict[str, Any]:
        """Convert to dict with sensitive data masked (safe for logging)."""
        data = self.model_dump(mode="json")
        if data.get("password"):
            data["password"] = "****"
        return data


class AppConfig(BaseModel):
    """
    Complete application configuration.

    All configuration is loaded from environment variables and validated
    at startup. Invalid configuration will fail fast with clear error messages.
    """

    app_title: str = Field(..., min_length=1)
    app_version: str = Field(..., pattern=r"^\d+\.\d+\.\d+$")  # Semantic versioning
    environment: Environment

    logging: LoggingConfig
    database: DatabaseConfig

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_production_settings(self) -> "AppConfig":
        if self.environment.is_production:
            if self.logging.log_level == EnvLogLevel.DEBUG:
                raise ValueError("DEBUG log level not allowed in production")
            if self.database.auto_create_schema:
                raise ValueError("DB_AUTO_CREATE_SCHEMA not allowed in production")
        return self


def load_database_config(environment: Environment) -> DatabaseConfig:
    """
    Load database configuration from environment.

    Required:
    - DB_DRIVER: asyncpg or aiosqlite
    - DB_NAME: database name (file path for aiosqlite)

    Required for asyncpg:
    - DB_HOST, DB_PORT
    - DB_USER, DB_PASSWORD (production only)

    Optional:
    - DB_POOL_SIZE, DB_MAX_OVERFLOW, DB_POOL_TIMEOUT, DB_POOL_RECYCLE
    - DB_AUTO_CREATE_SCHEMA: create tables at startup (development/tests)
    """
    driver_str = require_env("DB_DRIVER")
    try:
        driver = DbDriver(driver_str)
    except ValueError:
        valid_drivers = [d.value for d in DbDriver]
        raise ConfigurationError(
            f"Invalid DB_DRIVER: {driver_str}. Must be one of: {valid_drivers}"
        )

    if environment.is_production and not driver.is_sqlite:
        username: Optional[str] = require_env("DB_USER")
        password_str: Optional[str] = require_env("DB_PASSWORD")
    else:
        username = get_env("DB_USER")
        password_str = get_env("DB_PASSWORD")

    pool_settings: dict[str, Any] = {}
    for field_name, env_key in (
        ("pool_size", "DB_POOL_SIZE"),
        ("max_overflow", "DB_MAX_OVERFLOW"),
        ("pool_timeout", "DB_POOL_TIMEOUT"),
        ("pool_recycle", "DB_POOL_RECYCLE"),
    ):
        raw = get_env(env_key)
        if raw:
            pool_settings[field_name] = raw

    return DatabaseConfig(
        driver=driver,
        name=require_env("DB_NAME"),
        host=get_env("DB_HOST"),
        port=get_env("DB_PORT"),  # type: ignore[arg-type]
        username=username,
        password=SecretStr(password_str) if password_str else None,
        auto_create_schema=get_env_bool("DB_AUTO_CREATE_SCHEMA"),
        **pool_settings,
    )


def load_app_config() -> AppConfig:
    """
    Load complete application configuration.

    Raises:
        ValidationError: If configuration is invalid
        ConfigurationError: If required env vars are missing
    """
    env_str = require_env("ENVIRONMENT")
    try:
        environment = Environment(env_str)
    except ValueError:
        valid_envs = [e.value for e in Environment]
        raise ConfigurationError(
            f"Invalid ENVIRONMENT: {env_str}. Must be one of: {valid_envs}"
        )

    return AppConfig(
        app_title=require_env("APP_TITLE"),
        app_version=require_env("APP_VERSION"),
        environment=environment,
        logging=load_logging_config(json_output=environment.is_production),
        database=load_database_config(environment),
    )


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "load_app_config",
    "load_database_config",
]
