"""
Presentation Surfaces.

Pure functions turning ViewController state into view models. Nothing here
mutates the controller.
"""
from typing import Any, Dict, List, Mapping, Optional

from abendlog.app.schemas.logs import CATEGORY_UNSET, LogCategory, LogEntry
from abendlog.app.schemas.views import (
    AddFormView,
    ColumnFilterView,
    DetailField,
    DetailOverlayView,
    FormField,
    LandingAction,
    LandingView,
    NavItem,
    PageView,
    ScanRow,
    ScanTableView,
)
from abendlog.app.services.filter_engine import FILTER_COLUMNS, column_value
from abendlog.app.services.normalizer import FIELD_MAX_LENGTHS, wire_field_name
from abendlog.app.services.validator import REQUIRED_FIELDS
from abendlog.app.services.view_controller import DRAFT_FIELDS, Screen, ViewController

NAVIGATION = (
    (Screen.LANDING, "Home"),
    (Screen.ADD, "Add Log"),
    (Screen.SCAN, "Search"),
)

# field -> (label, kind, section, placeholder)
FORM_LAYOUT: Dict[str, tuple] = {
    "subsystem": ("Subsystem (2)", "text", "Basic Information", "CI"),
    "composite": ("Composite (8)", "text", "Basic Information", "PROD"),
    "program": ("Program (8)", "text", "Basic Information", "CUSTMGR"),
    "abend_code": ("Abend Code (8)", "text", "Basic Information", "ASRA"),
    "jobname": ("Job Name (8)", "text", "Basic Information", "BATCH01"),
    "log_number": ("Log Number (4)", "text", "Basic Information", "0001"),
    "category": ("Category", "select", "Basic Information", "Select category"),
    "created_by": ("Created By", "text", "Basic Information", "Your name"),
    "description": ("Description", "textarea", "Basic Information", "Brief description of the abend incident"),
    "problem": ("Problem", "textarea", "Detailed Analysis", "Describe the problem that occurred..."),
    "resolution": ("Resolution", "textarea", "Detailed Analysis", "How was the problem resolved..."),
    "recovery": ("Recovery", "textarea", "Detailed Analysis", "What recovery actions were taken..."),
    "results": ("Results", "textarea", "Detailed Analysis", "What were the results of the resolution..."),
    "prevention": ("Prevention", "textarea", "Detailed Analysis", "How can this be prevented in the future..."),
}

# column -> (header, placeholder)
COLUMN_LAYOUT: Dict[str, tuple] = {
    "subsystem": ("Sub", "Filter..."),
    "composite": ("Composite", "Filter..."),
    "program": ("Program", "Filter..."),
    "abendCode": ("Abend", "Filter..."),
    "jobname": ("Job", "Filter..."),
    "date": ("Date", "YYYYMMDD"),
    "logNumber": ("Log#", "Filter..."),
    "category": ("Category", "Filter..."),
    "description": ("Description", "Filter description..."),
    "createdBy": ("Created By", "Filter..."),
}

EMPTY_SCAN_MESSAGE = "No logs found matching your criteria."


def format_created(entry: LogEntry) -> str:
    return entry.timestamp.strftime("%Y-%m-%d %H:%M:%S")


def _display(value: Any) -> str:
    if isinstance(value, LogCategory):
        return value.value
    return "" if value is None else str(value)


def render_navigation(screen: Screen) -> List[NavItem]:
    return [NavItem(id=target, label=label, active=target == screen) for target, label in NAVIGATION]


def render_landing() -> LandingView:
    return LandingView(
        title="Abend Log",
        tagline="Track, analyze, and resolve system abends efficiently",
        actions=[
            LandingAction(label="Add New Log", description="Document a new abend incident", target=Screen.ADD),
            LandingAction(label="Search Logs", description="Find and analyze existing logs", target=Screen.SCAN),
        ],
    )


def render_form_fields(values: Mapping[str, Any], errors: Optional[Mapping[str, str]] = None) -> List[FormField]:
    """The fourteen inputs shared by the add form and the edit overlay."""
    errors = errors or {}
    fields = []
    for name in DRAFT_FIELDS:
        label, kind, section, placeholder = FORM_LAYOUT[name]
        wire_name = wire_field_name(name)
        value = _display(values.get(name, ""))
        fields.append(FormField(
            name=wire_name,
            label=label,
            kind=kind,
            section=section,
            required=name in REQUIRED_FIELDS,
            max_length=FIELD_MAX_LENGTHS.get(name),
            placeholder=placeholder,
            options=[c.value for c in LogCategory] if kind == "select" else None,
            value="" if name == "category" and value == CATEGORY_UNSET else value,
            error=errors.get(wire_name) or None,
        ))
    return fields


def render_add_form(controller: ViewController) -> AddFormView:
    if controller.copy_mode:
        title = "Copy Log Entry"
        subtitle = "Creating a new log based on existing entry"
    else:
        title = "Add New Log Entry"
        subtitle = "Document a new abend incident with detailed information"
    return AddFormView(
        title=title,
        subtitle=subtitle,
        copy_mode=controller.copy_mode,
        fields=render_form_fields(controller.add_draft, controller.add_errors),
        submit_label="Save Copy" if controller.copy_mode else "Save Log",
    )


def render_scan_table(controller: ViewController) -> ScanTableView:
    logs = controller.visible_logs()
    return ScanTableView(
        query=controller.search_query,
        search_placeholder="Global search across all fields...",
        filters=[
            ColumnFilterView(
                column=column,
                header=COLUMN_LAYOUT[column][0],
                placeholder=COLUMN_LAYOUT[column][1],
                value=controller.column_filters.get(column, ""),
            )
            for column in FILTER_COLUMNS
        ],
        rows=[
            ScanRow(id=entry.id, cells={column: column_value(entry, column) for column in FILTER_COLUMNS})
            for entry in logs
        ],
        count=len(logs),
        empty_message=None if logs else EMPTY_SCAN_MESSAGE,
        load_error=controller.last_load_error,
    )


def render_detail(controller: ViewController) -> DetailOverlayView:
    if not controller.overlay_visible:
        return DetailOverlayView(visible=False)

    entry = controller.selected
    detail = DetailOverlayView(
        visible=True,
        log_id=entry.id,
        breadcrumb=[entry.subsystem, entry.program, entry.abend_code, f"#{entry.log_number}"],
        created=format_created(entry),
        edit_mode=controller.edit_mode,
    )
    if controller.edit_mode:
        detail.inputs = render_form_fields(controller.edit_draft)
        detail.actions = ["save", "cancel", "close"]
    else:
        values = entry.model_dump()
        detail.fields = [
            DetailField(name=wire_field_name(name), label=FORM_LAYOUT[name][0], value=_display(values[name]))
            for name in DRAFT_FIELDS
        ]
        detail.actions = ["copy", "edit", "delete", "close"]
    return detail


def render_page(controller: ViewController) -> PageView:
    page = PageView(
        screen=controller.screen,
        navigation=render_navigation(controller.screen),
        detail=render_detail(controller),
    )
    if controller.screen == Screen.LANDING:
        page.landing = render_landing()
    elif controller.screen == Screen.ADD:
        page.add_form = render_add_form(controller)
    else:
        page.scan_table = render_scan_table(controller)
    return page
