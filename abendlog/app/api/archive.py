"""
Log Archive Router.

GET /logs is the load endpoint the LogLoader consumes: a JSON array of log
entries with ISO-8601 timestamps. PUT /logs publishes the current in-memory
store into the archive so a later load can restore it.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from abendlog.app.core.database import get_db
from abendlog.app.core.dependencies import get_controller
from abendlog.app.schemas.logs import ArchiveResult, LogEntry
from abendlog.app.services.log_archive import LogArchiveRepository
from abendlog.app.services.view_controller import ViewController

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/logs", response_model=List[LogEntry])
async def list_archived_logs(db: AsyncSession = Depends(get_db)):
    """Archived logs, newest first."""
    return await LogArchiveRepository(db).list_entries()


@router.put("/logs", response_model=ArchiveResult)
async def publish_logs(
    db: AsyncSession = Depends(get_db),
    controller: ViewController = Depends(get_controller),
):
    """Overwrite the archive with the store's current contents."""
    archived = await LogArchiveRepository(db).replace_entries(controller.store.records)
    await db.commit()
    logger.info(f"Archived {archived} logs")
    return ArchiveResult(archived=archived)
