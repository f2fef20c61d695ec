"""
Request logging middleware for FastAPI.
Provides structured logging of all HTTP requests with configurable detail levels.

Usage Example:
    from fastapi import FastAPI
    from common.logger.logger_middleware import RequestLoggingMiddleware

    app = FastAPI()
    app.add_middleware(
        RequestLoggingMiddleware,
        log_details=True,
        slow_request_threshold=500,
    )
"""

from typing import Callable, Awaitable, Optional
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
import time
import uuid

from ..logger import get_app_logger
from .middleware_types import (
    RequestMetadata,
    RequestDetails,
    RequestLogEntry,
)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for structured request logging.

    Every response carries an X-Request-ID header: the client's value when
    supplied, otherwise a fresh UUID4. The id is also exposed to handlers as
    `request.state.request_id`.

    Usage:
        app.add_middleware(RequestLoggingMiddleware)

        app.add_middleware(
            RequestLoggingMiddleware,
            log_details=True,
            slow_request_threshold=500,
        )
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        log_details: bool = True,
        slow_request_threshold: float = 1000.0,
        log_client_info: bool = True,
        logger_name: Optional[str] = None,
    ):
        """
        Initialize request logging middleware.

        Args:
            app: ASGI application
            log_details: Whether to log extended details (client IP, headers, etc.)
            slow_request_threshold: Duration in ms above which a request is flagged slow
            log_client_info: Whether to log client IP and User-Agent
            logger_name: Custom logger name (defaults to module name)
        """
        super().__init__(app)
        self.log_details = log_details
        self.slow_request_threshold = slow_request_threshold
        self.log_client_info = log_client_info
        self.logger = get_app_logger(name=logger_name or __name__)

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        start_time = time.perf_counter()

        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - start_time) * 1000
            self.logger.exception(
                "Request raised an unhandled exception",
                method=request.method,
                path=request.url.path,
                request_id=request_id,
                duration_ms=round(duration_ms, 2),
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        response.headers[REQUEST_ID_HEADER] = request_id

        log_entry = self._build_log_entry(
            request=request,
            response=response,
            duration_ms=duration_ms,
            request_id=request_id,
        )
        self._log_request(log_entry)
        return response

    def _build_log_entry(
        self,
        request: Request,
        response: Response,
        duration_ms: float,
        request_id: str,
    ) -> RequestLogEntry:
        metadata = RequestMetadata(
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
        )

        details = None
        if self.log_details:
            details = RequestDetails(
                request_id=request_id,
                client_host=(
                    request.client.host
                    if self.log_client_info and request.client
                    else None
                ),
                user_agent=(
                    request.headers.get("user-agent") if self.log_client_info else None
                ),
                path_params=request.path_params if request.path_params else None,
                content_length=int(response.headers.get("content-length", 0)) or None,
            )

        return RequestLogEntry(
            metadata=metadata,
            details=details,
            slow_request_threshold_ms=self.slow_request_threshold,
        )

    def _log_request(self, log_entry: RequestLogEntry) -> None:
        """
        Log request with appropriate level based on status and duration.

        Strategy:
        - ERROR: 5xx responses
        - WARNING: Slow requests or 4xx errors
        - INFO: Successful requests
        """
        log_data = log_entry.model_dump(mode="json", exclude_none=True)

        if log_entry.is_error:  # type: ignore[truthy-function]
            self.logger.error("Request failed with server error", **log_data)
        elif log_entry.is_slow:  # type: ignore[truthy-function]
            self.logger.warning(
                f"Slow request detected ({log_entry.metadata.duration_ms}ms)",
                **log_data,
            )
        elif log_entry.is_client_error:
            self.logger.warning("Request failed with client error", **log_data)
        else:
            self.logger.info("Request completed", **log_data)


__all__ = [
    "RequestLoggingMiddleware",
    "REQUEST_ID_HEADER",
]
