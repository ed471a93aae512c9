"""
View API Router.

Every user action on the single-page UI maps to one endpoint here. Each
returns the re-rendered page so the frontend can redraw from it.
"""
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from pydantic import BaseModel

from abendlog.app.core.dependencies import get_controller, get_log_loader
from abendlog.app.schemas.logs import FieldInput, SearchRequest
from abendlog.app.schemas.views import PageView
from abendlog.app.services.log_loader import LogLoader, LogLoadError
from abendlog.app.services.presentation import render_page
from abendlog.app.services.view_controller import (
    LogNotFoundError,
    LogValidationError,
    NoSelectionError,
    Screen,
    ViewController,
)

logger = logging.getLogger(__name__)
router = APIRouter()


class NavigateRequest(BaseModel):
    screen: Screen


@router.get("/", response_model=PageView)
async def get_page(controller: ViewController = Depends(get_controller)):
    """Render the current screen and overlay."""
    return render_page(controller)


@router.post("/navigate", response_model=PageView)
async def navigate(
    payload: NavigateRequest,
    controller: ViewController = Depends(get_controller),
):
    controller.navigate(payload.screen)
    return render_page(controller)


# --- scan table -------------------------------------------------------------

@router.put("/search", response_model=PageView)
async def set_search(
    payload: SearchRequest,
    controller: ViewController = Depends(get_controller),
):
    controller.set_search(payload.query)
    return render_page(controller)


@router.put("/filters", response_model=PageView)
async def set_filters(
    filters: Dict[str, str] = Body(...),
    controller: ViewController = Depends(get_controller),
):
    """Set one or more column filters. An empty value clears that column."""
    try:
        for column, value in filters.items():
            controller.set_column_filter(column, value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return render_page(controller)


@router.delete("/filters", response_model=PageView)
async def clear_filters(controller: ViewController = Depends(get_controller)):
    controller.clear_filters()
    return render_page(controller)


@router.post("/load", response_model=PageView)
async def load_logs(
    controller: ViewController = Depends(get_controller),
    loader: LogLoader = Depends(get_log_loader),
):
    """Replace the store from the log endpoint."""
    try:
        await controller.load(loader)
    except LogLoadError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return render_page(controller)


# --- add / copy form --------------------------------------------------------

@router.post("/add/input", response_model=PageView)
async def add_input(
    payload: FieldInput,
    controller: ViewController = Depends(get_controller),
):
    try:
        controller.input_add(payload.field, payload.value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return render_page(controller)


@router.post("/add/submit", response_model=PageView, status_code=201)
async def add_submit(controller: ViewController = Depends(get_controller)):
    """Validate the add form and create the log. 422 lists the field errors."""
    try:
        entry = controller.submit()
    except LogValidationError as e:
        raise HTTPException(status_code=422, detail={"errors": e.errors})
    logger.info(
        f"Log {entry.id} saved from add form",
        extra={"extra_data": {"log_id": entry.id, "created_by": entry.created_by}},
    )
    return render_page(controller)


@router.post("/add/cancel", response_model=PageView)
async def add_cancel(controller: ViewController = Depends(get_controller)):
    controller.cancel_add()
    return render_page(controller)


# --- detail overlay ---------------------------------------------------------

@router.post("/select/{log_id}", response_model=PageView)
async def select_log(
    log_id: str,
    controller: ViewController = Depends(get_controller),
):
    try:
        controller.view(log_id)
    except LogNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return render_page(controller)


@router.post("/edit", response_model=PageView)
async def edit_log(controller: ViewController = Depends(get_controller)):
    try:
        controller.edit()
    except NoSelectionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return render_page(controller)


@router.post("/detail/input", response_model=PageView)
async def detail_input(
    payload: FieldInput,
    controller: ViewController = Depends(get_controller),
):
    try:
        controller.input_edit(payload.field, payload.value)
    except NoSelectionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return render_page(controller)


@router.post("/detail/save", response_model=PageView)
async def detail_save(
    values: Optional[Dict[str, Any]] = Body(None),
    controller: ViewController = Depends(get_controller),
):
    """Save the edit form. Required fields are not enforced on edits."""
    try:
        controller.save(values)
    except NoSelectionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return render_page(controller)


@router.post("/detail/cancel", response_model=PageView)
async def detail_cancel(controller: ViewController = Depends(get_controller)):
    controller.cancel_edit()
    return render_page(controller)


@router.post("/close", response_model=PageView)
async def close_detail(controller: ViewController = Depends(get_controller)):
    controller.close()
    return render_page(controller)


@router.post("/copy", response_model=PageView)
async def copy_log(
    log_id: Optional[str] = Query(None, description="Defaults to the selected log"),
    controller: ViewController = Depends(get_controller),
):
    try:
        controller.copy(log_id)
    except LogNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except NoSelectionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return render_page(controller)
