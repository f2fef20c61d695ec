"""
Application logger with explicit initialization.

Usage:
    from common.logger import get_app_logger

    logger = get_app_logger(__name__)
    logger.info("Patient created", patient_id=42)
"""

from typing import Any, Optional
import structlog

from common.config.structlog_config import get_logger as _get_structlog_logger


class AppLogger:
    """
    Application logger wrapper.

    Resolves the structlog logger lazily so module-level instances can be
    created before configure_structlog() has run.
    """

    def __init__(self, name: str = "app", **context: Any) -> None:
        self._name = name
        self._context = context
        self._logger_instance: Optional[structlog.BoundLogger] = None

    @property
    def _logger(self) -> structlog.BoundLogger:
        if self._logger_instance is None:
            bound = _get_structlog_logger(self._name)
            if self._context:
                bound = bound.bind(**self._context)
            self._logger_instance = bound
        return self._logger_instance

    def debug(self, msg: str, **kwargs: Any) -> None:
        self._logger.debug(msg, **kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        self._logger.info(msg, **kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        self._logger.warning(msg, **kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        self._logger.error(msg, **kwargs)

    def exception(self, msg: str, **kwargs: Any) -> None:
        """Log at error level with the active exception attached."""
        self._logger.error(msg, exc_info=True, **kwargs)

    def critical(self, msg: str, **kwargs: Any) -> None:
        self._logger.critical(msg, **kwargs)


def get_app_logger(name: str = "app", **context: Any) -> AppLogger:
    """
    Get application logger instance.

    Args:
        name: Logger name
        **context: Key/values bound to every log line

    Returns:
        AppLogger instance
    """
    return AppLogger(name=name, **context)


# Convenience instance for simple usage
logger = get_app_logger()

__all__ = ["logger", "AppLogger", "get_app_logger"]
