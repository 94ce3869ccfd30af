"""
Database base configuration and models

Provides the SQLAlchemy async engine, session factory and the base model
classes shared by every table.
"""

from datetime import datetime

from sqlalchemy import Column, Integer, DateTime, event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base

from barnacles.config.settings import DatabaseConfig

ASYNC_DATABASE_URL = DatabaseConfig.get_async_database_url()
DatabaseConfig.ensure_data_dir()

# Create asynchronous database engine
async_engine = create_async_engine(
    ASYNC_DATABASE_URL,
    pool_pre_ping=True,
    echo=DatabaseConfig.ECHO,
)


@event.listens_for(async_engine.sync_engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite only enforces ON DELETE CASCADE with this pragma set per connection"""
    if ASYNC_DATABASE_URL.startswith("sqlite"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# Create asynchronous session factory
AsyncSessionLocal = async_sessionmaker(
    async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False
)

# Declarative base class
Base = declarative_base()


class BaseModel:
    """
    Base model - provides common fields and methods
    """

    id = Column(Integer, primary_key=True, index=True, autoincrement=True, comment="Primary Key ID")
    create_time = Column(DateTime, default=datetime.now, comment="Creation Time")
    update_time = Column(DateTime, default=datetime.now, onupdate=datetime.now, comment="Update Time")


async def init_db():
    """Initialize database tables."""
    # Register every model on Base.metadata before create_all
    from barnacles.db import models  # noqa: F401

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_db():
    """Drop all database tables."""
    from barnacles.db import models  # noqa: F401

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def dispose_db():
    """Dispose database engine."""
    await async_engine.dispose()
