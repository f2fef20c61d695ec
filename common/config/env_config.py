import os
from typing import Optional
from common.api_error import ConfigurationError

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    """
    Get Env variable with optional default
    """
    return os.getenv(name, default=default)


def require_env(name: str) -> str:
    """
    Get required environment variable or raise immediately.
    """
    value = os.getenv(name)
    if not value:
        raise ConfigurationError(f"Missing required env variables: {name}")
    return value


def get_env_bool(name: str, default: bool = False) -> bool:
    """
    Parse a boolean env variable ("true"/"false", "1"/"0", "yes"/"no", "on"/"off").
    """
    value = os.getenv(name)
    if value is None or value == "":
        return default

    normalized = value.strip().lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY:
        return False
    raise ConfigurationError(
        f"Invalid boolean for {name}: {value!r}. "
        f"Use one of {sorted(_TRUTHY | _FALSY)}"
    )


__all__ = ["require_env", "get_env", "get_env_bool"]
