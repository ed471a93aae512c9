"""
Log Entries API Router.

Read access to the in-memory store plus the confirmed delete used by both
the scan table and the detail overlay.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from abendlog.app.core.dependencies import get_controller
from abendlog.app.schemas.logs import LogEntry
from abendlog.app.services.filter_engine import filter_logs
from abendlog.app.services.view_controller import StaticConfirmer, ViewController

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=List[LogEntry])
async def list_logs(
    q: str = Query("", description="Global search across all fields"),
    subsystem: str = Query(""),
    composite: str = Query(""),
    program: str = Query(""),
    abend_code: str = Query("", alias="abendCode"),
    jobname: str = Query(""),
    date: str = Query("", description="Substring of YYYYMMDD"),
    log_number: str = Query("", alias="logNumber"),
    category: str = Query(""),
    description: str = Query(""),
    created_by: str = Query("", alias="createdBy"),
    controller: ViewController = Depends(get_controller),
):
    """List logs, newest first, narrowed by the global query and column filters."""
    column_filters = {
        "subsystem": subsystem,
        "composite": composite,
        "program": program,
        "abendCode": abend_code,
        "jobname": jobname,
        "date": date,
        "logNumber": log_number,
        "category": category,
        "description": description,
        "createdBy": created_by,
    }
    return filter_logs(controller.store.records, q, column_filters)


@router.get("/{log_id}", response_model=LogEntry)
async def get_log(
    log_id: str,
    controller: ViewController = Depends(get_controller),
):
    entry = controller.store.get(log_id)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"Log {log_id} not found")
    return entry


@router.delete("/{log_id}", status_code=204)
async def delete_log(
    log_id: str,
    confirm: bool = Query(False, description="The user approved the delete prompt"),
    controller: ViewController = Depends(get_controller),
):
    """
    Delete a log once the user has confirmed.

    Without confirm=true nothing is deleted and the 409 carries the prompt to
    show. Unknown ids are ignored.
    """
    confirmer = StaticConfirmer(confirm)
    deleted = controller.delete(log_id, confirmer=confirmer)
    if not deleted and confirmer.prompts:
        raise HTTPException(
            status_code=409,
            detail={"prompt": confirmer.prompts[-1], "confirmed": False},
        )
    return Response(status_code=204)
