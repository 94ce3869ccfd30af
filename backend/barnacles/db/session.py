"""
Database session management

Provides the session context manager and the repository session decorator.
"""

import logging
from contextlib import asynccontextmanager
from functools import wraps
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from .base import AsyncSessionLocal

logger = logging.getLogger(__name__)


@asynccontextmanager
async def async_session_scope() -> AsyncGenerator[AsyncSession, None]:
    """
    Open a session that commits on success and rolls back on error

    Usage:
        async with async_session_scope() as session:
            result = await session.execute(stmt)
    """
    session = AsyncSessionLocal()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


def _bind_session(f, args, session):
    # Instance method: session goes right after self
    if args and hasattr(args[0].__class__, f.__name__):
        return (args[0], session) + args[1:]
    return (session,) + args


def async_with_session(f):
    """
    Inject a fresh session into a repository method and commit afterwards

    Usage:
        @async_with_session
        async def get_project_by_path(self, session, path):
            ...

    Callers omit the session argument: ``await repo.get_project_by_path(path=...)``.
    Inside ``async_session_scope`` pass ``session=`` to join that transaction;
    the enclosing scope then commits or rolls back.
    """
    @wraps(f)
    async def wrapper(*args, **kwargs):
        outer_session = kwargs.pop("session", None)
        if outer_session is not None:
            return await f(*_bind_session(f, args, outer_session), **kwargs)

        async with async_session_scope() as session:
            try:
                return await f(*_bind_session(f, args, session), **kwargs)
            except Exception as e:
                logger.error(f"Database operation failed in {f.__name__}: {e}")
                raise

    return wrapper
