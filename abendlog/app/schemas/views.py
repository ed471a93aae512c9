"""
View models for the presentation surfaces.

The frontend renders these as-is: landing menu, add/copy form, scan table
and the detail/edit overlay. No styling information is carried.
"""
from typing import Dict, List, Optional
from pydantic import BaseModel

from abendlog.app.services.view_controller import Screen


class NavItem(BaseModel):
    id: Screen
    label: str
    active: bool = False


class LandingAction(BaseModel):
    label: str
    description: str
    target: Screen


class LandingView(BaseModel):
    title: str
    tagline: str
    actions: List[LandingAction]


class FormField(BaseModel):
    """One input of the add or edit form."""
    name: str  # wire name, e.g. abendCode
    label: str
    kind: str  # text | textarea | select
    section: str
    required: bool
    max_length: Optional[int] = None
    placeholder: Optional[str] = None
    options: Optional[List[str]] = None
    value: str = ""
    error: Optional[str] = None


class AddFormView(BaseModel):
    title: str
    subtitle: str
    copy_mode: bool
    fields: List[FormField]
    submit_label: str = "Save Log"
    cancel_label: str = "Cancel"


class ColumnFilterView(BaseModel):
    column: str
    header: str
    placeholder: str
    value: str = ""


class ScanRow(BaseModel):
    id: str
    cells: Dict[str, str]  # column -> displayed text


class ScanTableView(BaseModel):
    query: str
    search_placeholder: str
    filters: List[ColumnFilterView]
    rows: List[ScanRow]
    count: int
    empty_message: Optional[str] = None
    load_error: Optional[str] = None


class DetailField(BaseModel):
    name: str
    label: str
    value: str


class DetailOverlayView(BaseModel):
    visible: bool
    log_id: Optional[str] = None
    title: str = "Log Details"
    breadcrumb: List[str] = []
    created: Optional[str] = None
    edit_mode: bool = False
    fields: List[DetailField] = []
    inputs: List[FormField] = []
    actions: List[str] = []


class PageView(BaseModel):
    """Everything the frontend needs to draw the current state."""
    screen: Screen
    navigation: List[NavItem]
    landing: Optional[LandingView] = None
    add_form: Optional[AddFormView] = None
    scan_table: Optional[ScanTableView] = None
    detail: DetailOverlayView
