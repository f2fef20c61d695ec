from datetime import datetime
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body of every error response."""

    timestamp: datetime = Field(..., description="Server time when the error occurred")
    status: int = Field(..., description="HTTP status code")
    error: str = Field(..., description="HTTP reason phrase")
    message: str = Field(..., description="What went wrong")
    path: str = Field(..., description="Request path")


__all__ = ["ErrorResponse"]
