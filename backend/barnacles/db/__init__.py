"""
Database Module

Provides database configuration, models, schemas, and repositories.
"""

from .base import Base, async_engine, AsyncSessionLocal, init_db, drop_db, dispose_db
from .session import (
    async_session_scope,
    async_with_session,
)

__all__ = [
    "Base",
    "async_engine",
    "AsyncSessionLocal",
    "init_db",
    "drop_db",
    "dispose_db",
    "async_session_scope",
    "async_with_session",
]
