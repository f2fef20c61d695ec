class AppError(Exception):
    """Base error for all application-specific issues."""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
    ):
        self.message = message
        self.code = code
        super().__init__(self.message)


class NotFoundError(AppError):
    """The requested entity does not exist."""

    def __init__(self, message: str, code: str = "NOT_FOUND"):
        super().__init__(message, code=code)


class MalformedInputError(AppError):
    """Request input could not be parsed into the expected shape."""

    def __init__(self, message: str, code: str = "MALFORMED_INPUT"):
        super().__init__(message, code=code)


__all__ = ["AppError", "NotFoundError", "MalformedInputError"]
