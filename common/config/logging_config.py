from dataclasses import dataclass
from .env_config import require_env
from .config_types import EnvLogLevel
from common.api_error import ConfigurationError

_default_log_level_env_key = "LOG_LEVEL"


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    log_level: EnvLogLevel
    json_output: bool = False

    @property
    def level_value(self) -> str:
        """Get string value of log level."""
        return self.log_level.value

    @property
    def level_int(self) -> int:
        """Get numeric log level."""
        return self.log_level.level


def load_logging_config(
    log_level_env_key: str = _default_log_level_env_key,
    json_output: bool = False,
) -> LoggingConfig:
    """
    Load logging configuration from environment.

    Args:
        log_level_env_key: Environment variable name
        json_output: Render log lines as JSON instead of the console format

    Raises:
        ConfigurationError: If LOG_LEVEL is missing or invalid
    """
    log_level_val = require_env(log_level_env_key).upper()
    try:
        log_level = EnvLogLevel(log_level_val)
    except ValueError as exc:
        valid_levels = ", ".join(level.value for level in EnvLogLevel)
        raise ConfigurationError(
            f"Invalid logging configuration. "
            f"{log_level_env_key} must be one of [{valid_levels}]"
        ) from exc

    return LoggingConfig(log_level=log_level, json_output=json_output)


__all__ = [
    "LoggingConfig",
    "load_logging_config",
]
