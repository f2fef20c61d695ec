from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession
from typing import AsyncGenerator


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Request-scoped transactional session.
    Pulls the manager that create_app() attached to app.state.
    """
    manager = getattr(request.app.state, "db_manager", None)

    if not manager:
        raise RuntimeError(
            "DbManager not found in app.state. Build the app with create_app()."
        )

    async with manager.session() as session:
        yield session


__all__ = ["get_db"]
