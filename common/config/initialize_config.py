"""
Configuration initialization module.

Loads, validates and applies the application configuration once at startup.
"""
from typing import List
from pydantic import ValidationError
from .app_config import AppConfig, load_app_config
from .structlog_config import configure_structlog
from common.api_error import ConfigurationError


def initialize_config() -> AppConfig:
    """
    Initialize and validate all application configuration.

    Call once at startup, after load_dotenv(). Configures structlog as a
    side effect so loggers are usable right after.

    Returns:
        The validated AppConfig

    Raises:
        ConfigurationError: If configuration is invalid or missing
    """
    try:
        config = load_app_config()
    except ValidationError as e:
        errors: List[str] = []
        for error in e.errors():
            field = ".".join(str(x) for x in error["loc"])
            errors.append(f"{field}: {error['msg']}")

        raise ConfigurationError(
            "Configuration validation failed:\n"
            + "\n".join(f"  - {err}" for err in errors)
        ) from e

    configure_structlog(config.logging.level_int, json_output=config.logging.json_output)
    return config


__all__ = ["initialize_config"]
