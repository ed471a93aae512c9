"""
Archive database engine and sessions.

The archive is the only persistent state of the service. SQLite (aiosqlite)
by default; a PostgreSQL URL gets a sized connection pool.
"""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from abendlog.app.core.config import Settings, get_settings

settings = get_settings()


def create_archive_engine(settings: Settings) -> AsyncEngine:
    options = {"echo": settings.debug}
    if settings.database_url.startswith("sqlite"):
        # Requests and the lifespan share the file from different threads
        options["connect_args"] = {"check_same_thread": False}
    elif "postgresql" in settings.database_url:
        options.update({
            "pool_size": settings.database_pool_size,
            "max_overflow": settings.database_max_overflow,
            "pool_pre_ping": True,
        })
    return create_async_engine(settings.database_url, **options)


engine = create_archive_engine(settings)

archive_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for archive tables."""
    pass


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped archive session. Rolled back if the handler raises."""
    async with archive_session_maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
