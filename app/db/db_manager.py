"""
Database manager focused on connection management and session handling.
Schema migrations are handled separately via Alembic CLI; `create_schema`
exists for development databases and tests.

Design principles:
- Single responsibility: Connection/session management only
- Fail fast: Invalid configuration crashes on startup
- Explicit over implicit: No magic auto-migrations
"""

from sqlalchemy.ext.asyncio import (
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
    AsyncEngine,
)
from sqlalchemy import inspect, text
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Any, Optional, Union
from fastapi.exceptions import RequestValidationError
from common import AppError, DatabaseConfig, get_app_logger
from app.db.models import DbBaseModel

logger = get_app_logger(__name__)

# Expected request outcomes that unwind the session but are not storage faults
_CLIENT_ERRORS = (AppError, RequestValidationError)

_SUPPORTED_URL_PREFIXES = ("postgresql+asyncpg://", "sqlite+aiosqlite://")


class DbManager:
    """
    Database connection and session manager.

    Responsibilities:
    - Async engine/connection pool management
    - Session lifecycle management
    - Health checks

    NOT responsible for:
    - Schema migration (use Alembic CLI)

    Usage:
        # Startup
        db_manager = DbManager.from_config(config.database)
        await db_manager.verify_connection()

        # Runtime
        async with db_manager.session() as session:
            result = await session.execute(...)

        # Shutdown
        await db_manager.dispose()
    """

    def __init__(
        self,
        url: str,
        *,
        pool_size: int = 5,
        max_overflow: int = 10,
        pool_timeout: int = 30,
        pool_recycle: int = 3600,
        pool_pre_ping: bool = True,
        echo: bool = False,
        connect_args: Optional[dict[str, Any]] = None,
    ):
        """
        Initialize database manager.

        Args:
            url: Database URL (postgresql+asyncpg:// or sqlite+aiosqlite://)
            pool_size: Number of persistent connections (server databases only)
            max_overflow: Additional connections beyond pool_size
            pool_timeout: Seconds to wait for connection from pool
            pool_recycle: Recycle connections after N seconds
            pool_pre_ping: Test connections before using
            echo: Log all SQL statements (use for debugging)
            connect_args: Driver-specific connection arguments
        """
        self._validate_url(url)
        self._is_sqlite = url.startswith("sqlite")

        engine_kwargs: dict[str, Any] = {
            "echo": echo,
            "pool_pre_ping": pool_pre_ping,
            "connect_args": connect_args or {},
        }
        # SQLite pools reject sizing arguments
        if not self._is_sqlite:
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_timeout=pool_timeout,
                pool_recycle=pool_recycle,
            )

        self._config: dict[str, Union[str, int, bool]] = {
            "dialect": "sqlite" if self._is_sqlite else "postgresql",
            "pool_size": pool_size,
            "max_overflow": max_overflow,
            "pool_timeout": pool_timeout,
            "pool_recycle": pool_recycle,
        }

        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)

        self.session_maker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        logger.info(
            "DbManager initialized",
            dialect=self._config["dialect"],
            pool_size=pool_size if not self._is_sqlite else None,
            pre_ping=pool_pre_ping,
        )

    @classmethod
    def from_config(cls, config: DatabaseConfig, **kwargs: Any) -> "DbManager":
        """
        Create DbManager from DatabaseConfig.

        Example:
            db_manager = DbManager.from_config(config.database)
        """
        return cls(
            url=config.get_connection_url(include_password=True),
            pool_size=config.pool_size,
            max_overflow=config.max_overflow,
            pool_timeout=config.pool_timeout,
            pool_recycle=config.pool_recycle,
            **kwargs,
        )

    @staticmethod
    def _validate_url(url: str) -> None:
        """Validate database URL format."""
        if not url or not url.startswith(_SUPPORTED_URL_PREFIXES):
            raise ValueError(
                f"Invalid database URL. Expected postgresql+asyncpg:// or sqlite+aiosqlite://, got: {url[:20]}..."
            )

    async def verify_connection(self) -> None:
        """
        Verify database connection on startup.
        Fails fast if connection cannot be established.

        Raises:
            ConnectionError: If connection fails
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            logger.info("Database connection verified")
        except Exception as e:
            logger.error("Database connection failed", error=str(e))
            raise ConnectionError(f"Failed to connect to database: {e}") from e

    async def verify_migrations_current(self) -> str:
        """
        Check that Alembic migrations have been applied.

        Returns:
            The current migration revision

        Raises:
            RuntimeError: If the schema has not been migrated
        """
        async with self.engine.connect() as conn:
            table_names = await conn.run_sync(
                lambda sync_conn: inspect(sync_conn).get_table_names()
            )
            if "alembic_version" not in table_names:
                raise RuntimeError(
                    "alembic_version table not found. "
                    "Have you run 'alembic upgrade head'?"
                )

            result = await conn.execute(text("SELECT version_num FROM alembic_version"))
            current_version = result.scalar()

        if not current_version:
            raise RuntimeError("No migration has been applied. Run 'alembic upgrade head'.")

        logger.info("Current migration version", revision=current_version)
        return current_version

    async def create_schema(self) -> None:
        """Create all mapped tables that do not exist yet."""
        async with self.engine.begin() as conn:
            await conn.run_sync(DbBaseModel.metadata.create_all)
        logger.info("Database schema created", tables=sorted(DbBaseModel.metadata.tables))

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Provide a transactional database session.

        Automatically commits on success, rolls back on exception.

        Usage:
            async with db_manager.session() as session:
                patient = await session.get(Patient, patient_id)
                # Commits automatically on exit
        """
        session = self.session_maker()
        try:
            yield session
            await session.commit()
        except Exception as e:
            await session.rollback()
            log = logger.warning if isinstance(e, _CLIENT_ERRORS) else logger.error
            log("Session error, rolled back", error=str(e), error_type=type(e).__name__)
            raise
        finally:
            await session.close()

    async def health_check(self) -> dict[str, Any]:
        """
        Lightweight health check.

        Example:
            {"healthy": True, "dialect": "postgresql", "response_time_ms": 5.2}
        """
        import time

        start = time.perf_counter()

        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.warning("Database health check failed", error=str(e))
            return {
                "healthy": False,
                "dialect": self._config["dialect"],
                "error": type(e).__name__,
            }

        return {
            "healthy": True,
            "dialect": self._config["dialect"],
            "response_time_ms": round((time.perf_counter() - start) * 1000, 2),
        }

    async def dispose(self) -> None:
        """
        Dispose of all connections and cleanup resources.
        Call this on application shutdown.
        """
        await self.engine.dispose()
        logger.info("Database connections disposed")


__all__ = ["DbManager"]
