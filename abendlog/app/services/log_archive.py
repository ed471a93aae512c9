"""
Log Archive Repository - Database operations for the archived abend logs.

The archive is what this service hands out on GET /logs, so a LogLoader
pointed at the service itself restores the last published snapshot.
"""
from typing import Iterable, List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from abendlog.app.models.log_entry_orm import LogEntryORM
from abendlog.app.schemas.logs import LogEntry


class LogArchiveRepository:
    """Repository for archived log entries."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_entries(self) -> List[LogEntry]:
        """All archived entries in store order (newest first)."""
        result = await self.session.execute(
            select(LogEntryORM).order_by(LogEntryORM.position)
        )
        return [self._orm_to_pydantic(orm_obj) for orm_obj in result.scalars().all()]

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(LogEntryORM))
        return result.scalar_one()

    async def replace_entries(self, entries: Iterable[LogEntry]) -> int:
        """Overwrite the archive with the given entries, keeping their order."""
        existing = await self.session.execute(select(LogEntryORM))
        for orm_obj in existing.scalars().all():
            await self.session.delete(orm_obj)
        # Old rows must be gone before re-inserting the same ids
        await self.session.flush()

        orm_objs = [
            LogEntryORM(
                id=entry.id,
                position=position,
                subsystem=entry.subsystem,
                composite=entry.composite,
                program=entry.program,
                abend_code=entry.abend_code,
                jobname=entry.jobname,
                log_number=entry.log_number,
                category=entry.category.value,
                timestamp=entry.timestamp,
                description=entry.description,
                problem=entry.problem,
                resolution=entry.resolution,
                recovery=entry.recovery,
                results=entry.results,
                prevention=entry.prevention,
                created_by=entry.created_by,
            )
            for position, entry in enumerate(entries)
        ]
        self.session.add_all(orm_objs)
        await self.session.flush()
        return len(orm_objs)

    def _orm_to_pydantic(self, orm_obj: LogEntryORM) -> LogEntry:
        return LogEntry(
            id=orm_obj.id,
            subsystem=orm_obj.subsystem,
            composite=orm_obj.composite,
            program=orm_obj.program,
            abend_code=orm_obj.abend_code,
            jobname=orm_obj.jobname,
            log_number=orm_obj.log_number,
            category=orm_obj.category,
            timestamp=orm_obj.timestamp,
            description=orm_obj.description,
            problem=orm_obj.problem,
            resolution=orm_obj.resolution,
            recovery=orm_obj.recovery,
            results=orm_obj.results,
            prevention=orm_obj.prevention,
            created_by=orm_obj.created_by,
        )
