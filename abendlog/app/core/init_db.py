"""
Database initialization script.

Creates the archive schema and, when SEED_SAMPLE_LOGS is on and the archive
is empty, seeds it with the sample abend logs.
Called from the application lifespan on startup.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from abendlog.app.core.config import get_settings
from abendlog.app.core.database import Base, engine
from abendlog.app.models.log_entry_orm import LogEntryORM  # noqa: F401
from abendlog.app.services.log_archive import LogArchiveRepository
from abendlog.app.services.sample_data import sample_log_entries

logger = logging.getLogger(__name__)
settings = get_settings()


async def init_database(db_engine: AsyncEngine = engine, seed: bool = settings.seed_sample_logs) -> None:
    """Create archive tables and seed them if empty."""
    logger.info(f"Initializing archive database at {db_engine.url}")
    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if not seed:
        return

    session_maker = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        repo = LogArchiveRepository(session)
        if await repo.count() == 0:
            seeded = await repo.replace_entries(sample_log_entries())
            await session.commit()
            logger.info(f"Seeded archive with {seeded} sample logs")


async def drop_all_tables(db_engine: AsyncEngine = engine) -> None:
    """Drop all tables (use with caution!)."""
    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.warning("All archive tables dropped")
