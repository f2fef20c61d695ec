class ConfigurationError(RuntimeError):
    """
    Raised when application configuration is missing or invalid.
    Fatal at startup; never mapped to an HTTP response.
    """


__all__ = ["ConfigurationError"]
