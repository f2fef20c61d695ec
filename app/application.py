"""
Explicit construction of the FastAPI application.

Nothing is created at import time: callers build a DbManager and hand it to
create_app(), which wires middleware, error handlers and routes around it.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from app.api.error_handlers import register_error_handlers
from app.api.v1 import patient_router
from app.db import DbManager
from common import Environment, get_app_logger
from common.logger.logger_middleware import RequestLoggingMiddleware

logger = get_app_logger(__name__)


class HealthCheckResponse(BaseModel):
    status: str = Field(..., description="Current system health status")
    timestamp: datetime = Field(..., description="Server time in ISO 8601 format")
    version: str = Field(..., description="Application version")
    database: dict = Field(..., description="Database health details")


def create_app(
    db_manager: DbManager,
    *,
    title: str = "Patient Service",
    version: str = "0.1.0",
    environment: Environment = Environment.DEVELOPMENT,
    create_schema: bool = False,
) -> FastAPI:
    """
    Build the application around an injected DbManager.

    Args:
        db_manager: Database manager owned by the app from now on
        title: OpenAPI title
        version: Application version reported by /health
        environment: Deployment environment
        create_schema: Create tables at startup instead of requiring migrations
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await db_manager.verify_connection()

        if create_schema:
            await db_manager.create_schema()
        else:
            try:
                await db_manager.verify_migrations_current()
            except RuntimeError as e:
                logger.error("Migration check failed", error=str(e))
                logger.error("Run 'alembic upgrade head'")
                raise

        logger.info("Application started", title=title, environment=str(environment))
        yield
        logger.info("shutting down")
        await db_manager.dispose()

    app = FastAPI(
        title=title,
        version=version,
        description=f"Running in {environment} environment",
        lifespan=lifespan,
    )
    app.state.db_manager = db_manager

    app.add_middleware(RequestLoggingMiddleware)
    register_error_handlers(app)
    app.include_router(patient_router)

    @app.get("/health", response_model=HealthCheckResponse, tags=["Health"])
    async def check_health(request: Request) -> JSONResponse:
        db_health = await request.app.state.db_manager.health_check()
        body = HealthCheckResponse(
            status="Healthy" if db_health["healthy"] else "Unhealthy",
            timestamp=datetime.now(timezone.utc),
            version=version,
            database=db_health,
        )
        return JSONResponse(
            status_code=200 if db_health["healthy"] else 503,
            content=body.model_dump(mode="json"),
        )

    return app


__all__ = ["create_app", "HealthCheckResponse"]
