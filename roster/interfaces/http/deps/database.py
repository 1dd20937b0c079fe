"""Database session dependency."""

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from roster.core.container import ApplicationContainer
from roster.infrastructure.database import session_scope


def get_app_container(request: Request) -> ApplicationContainer:
    return request.app.state.container


async def get_db_session(
    container: ApplicationContainer = Depends(get_app_container),
) -> AsyncIterator[AsyncSession]:
    async with session_scope(container.session_factory) as session:
        yield session


__all__ = ["get_app_container", "get_db_session"]
