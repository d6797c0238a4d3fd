"""FastAPI dependency injection for database sessions, repository and admin access."""

from __future__ import annotations

import logging
import secrets
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from leaguebook.config import Settings
from leaguebook.db.engine import create_session_factory
from leaguebook.db.repository import Repository

logger = logging.getLogger(__name__)


async def get_engine(request: Request) -> AsyncEngine:
    """Get the database engine from app state."""
    return request.app.state.engine


async def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_session(
    engine: Annotated[AsyncEngine, Depends(get_engine)],
) -> AsyncGenerator[AsyncSession, None]:
    """Yield an async session."""
    factory = create_session_factory(engine)
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:  # Re-raise pattern: must catch all to ensure rollback on any error
            await session.rollback()
            raise


async def get_repo(session: Annotated[AsyncSession, Depends(get_session)]) -> Repository:
    """Get a repository instance bound to the current session."""
    return Repository(session)


RepoDep = Annotated[Repository, Depends(get_repo)]
SettingsDep = Annotated[Settings, Depends(get_settings)]


def token_matches(settings: Settings, token: str | None) -> bool:
    if not token or not settings.leaguebook_admin_token:
        return False
    return secrets.compare_digest(token, settings.leaguebook_admin_token)


async def get_is_admin(
    settings: SettingsDep,
    x_admin_token: Annotated[str | None, Header()] = None,
) -> bool:
    """Resolve the caller's admin capability into a plain boolean.

    Read-only deployments never grant it.
    """
    if settings.leaguebook_readonly:
        return False
    return token_matches(settings, x_admin_token)


async def require_admin(
    settings: SettingsDep,
    x_admin_token: Annotated[str | None, Header()] = None,
) -> None:
    """Gate admin writes: 403 when read-only, 401 on a missing or wrong token."""
    if settings.leaguebook_readonly:
        raise HTTPException(status_code=403, detail="This deployment is read-only")
    if not token_matches(settings, x_admin_token):
        logger.warning("admin_token_rejected present=%s", x_admin_token is not None)
        raise HTTPException(status_code=401, detail="Admin token required")


IsAdminDep = Annotated[bool, Depends(get_is_admin)]
AdminDep = Annotated[None, Depends(require_admin)]
