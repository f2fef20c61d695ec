# common/logger/logger_middleware/middleware_types.py
"""
Type definitions for request logging middleware.
"""

from typing import Optional, Dict, Any
from datetime import datetime, timezone
from pydantic import BaseModel, Field, computed_field


class RequestMetadata(BaseModel):
    """
    Core request metadata - always captured.
    """

    method: str = Field(..., description="HTTP method (GET, POST, etc.)")
    path: str = Field(..., description="Request path without query params")
    status_code: int = Field(..., ge=100, le=599, description="HTTP status code")
    duration_ms: float = Field(
        ..., ge=0, description="Request duration in milliseconds"
    )

    model_config = {"frozen": True}


class RequestDetails(BaseModel):
    """
    Extended request details - optional, configurable.
    """

    request_id: Optional[str] = Field(None, description="Unique request ID")
    client_host: Optional[str] = Field(None, description="Client IP address")
    user_agent: Optional[str] = Field(None, description="User-Agent header")
    path_params: Optional[Dict[str, Any]] = Field(None, description="Path parameters")
    content_length: Optional[int] = Field(
        None, ge=0, description="Response size in bytes"
    )

    model_config = {"frozen": True}


class RequestLogEntry(BaseModel):
    """
    Complete request log entry combining metadata and optional details.
    Serializes cleanly to JSON for structured logging.
    """

    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    metadata: RequestMetadata
    details: Optional[RequestDetails] = None
    slow_request_threshold_ms: float = Field(1000.0, exclude=True)

    model_config = {"frozen": True}

    @computed_field
    def is_slow(self) -> bool:
        return self.metadata.duration_ms > self.slow_request_threshold_ms

    @computed_field
    def is_error(self) -> bool:
        """Server-side failure (5xx)."""
        return self.metadata.status_code >= 500

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.metadata.status_code < 500


__all__ = [
    "RequestMetadata",
    "RequestDetails",
    "RequestLogEntry",
]
