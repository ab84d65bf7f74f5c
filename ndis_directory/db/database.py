"""
Async SQLAlchemy database setup and session management.
"""
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from ndis_directory.core.config import settings

# Create async engine (no connection is opened until first use)
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,
    poolclass=NullPool if settings.DEBUG else None,
)

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    expire_on_commit=False,
    autoflush=False,
)

# Base class for all models
Base = declarative_base()


async def init_db(bind: AsyncEngine = engine) -> None:
    """
    Initialize database tables.
    Called on application startup when the sql review backend is selected.
    """
    async with bind.begin() as conn:
        # Import models so they are registered on the metadata
        from ndis_directory.models import review  # noqa: F401

        await conn.run_sync(Base.metadata.create_all)


async def close_db(bind: AsyncEngine = engine) -> None:
    """
    Close database connections.
    This should be called on application shutdown.
    """
    await bind.dispose()
