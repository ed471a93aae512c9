"""
View Controller.

Tracks which screen is active (landing / add / scan), the detail overlay
(selected record, edit mode, copy mode), the form drafts and the scan
filters, and routes user actions to the LogStore.

The store and the delete confirmation capability are injected; the
controller owns no global state.

Edits saved from the detail overlay are NOT validated, only new and copied
entries are. Saving an edit with empty required fields is allowed and logged.
"""
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from abendlog.app.schemas.logs import CATEGORY_UNSET, LogCategory, LogEntry
from abendlog.app.services.filter_engine import FilterEngine, filter_column_name
from abendlog.app.services.log_loader import LogLoader, LogLoadError
from abendlog.app.services.log_store import LogStore
from abendlog.app.services.normalizer import canonical_field_name, normalize_field, wire_field_name
from abendlog.app.services.validator import validate

logger = logging.getLogger(__name__)


class Screen(str, Enum):
    LANDING = "landing"
    ADD = "add"
    SCAN = "scan"


# Every user-editable field, in form order
DRAFT_FIELDS = (
    "subsystem",
    "composite",
    "program",
    "abend_code",
    "jobname",
    "log_number",
    "category",
    "created_by",
    "description",
    "problem",
    "resolution",
    "recovery",
    "results",
    "prevention",
)


class ViewControllerError(Exception):
    """Base class for rejected user actions."""
    pass


class NoSelectionError(ViewControllerError):
    """The action needs a selected record and there is none."""
    pass


class LogNotFoundError(ViewControllerError, LookupError):
    pass


class LogValidationError(ViewControllerError):
    """An add/copy submit failed required-field validation."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = errors
        super().__init__(f"Log entry is invalid: {', '.join(sorted(errors))}")


class Confirmer(ABC):
    """Asks the user to approve a destructive action."""

    @abstractmethod
    def confirm(self, prompt: str) -> bool:
        ...


class StaticConfirmer(Confirmer):
    """Answers every prompt the same way and remembers what it was asked."""

    def __init__(self, answer: bool):
        self.answer = answer
        self.prompts: List[str] = []

    def confirm(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        return self.answer


def blank_draft() -> Dict[str, Any]:
    draft: Dict[str, Any] = {name: "" for name in DRAFT_FIELDS}
    draft["category"] = CATEGORY_UNSET
    return draft


def draft_from_entry(entry: LogEntry) -> Dict[str, Any]:
    values = entry.model_dump()
    draft = {name: values[name] for name in DRAFT_FIELDS}
    draft["category"] = entry.category.value
    return draft


def delete_prompt(entry: LogEntry) -> str:
    """Confirmation text shown before a log entry is deleted."""
    identity = f"{entry.subsystem}-{entry.program}-{entry.abend_code}-{entry.log_number}"
    created = entry.timestamp.strftime("%Y-%m-%d %H:%M:%S")
    return (
        "Are you sure you want to delete this log entry?\n\n"
        f"Log: {identity}\n"
        f"Created: {created}\n\n"
        "This action cannot be undone."
    )


def _normalize_input(field: str, value: Any) -> tuple:
    name = canonical_field_name(field)
    if name not in DRAFT_FIELDS:
        raise ValueError(f"Unknown field: {field}")
    if name == "category" and value not in (CATEGORY_UNSET, "") and value not in {
        c.value for c in LogCategory
    }:
        raise ValueError(f"Unknown category: {value}")
    return name, normalize_field(name, value)


class ViewController:
    """Single-user screen and overlay state machine over a LogStore."""

    def __init__(self, store: LogStore, confirmer: Optional[Confirmer] = None):
        self.store = store
        self.filter_engine = FilterEngine(store)
        # Without an interactive confirmer nothing gets deleted by accident
        self.confirmer = confirmer or StaticConfirmer(False)

        self.screen = Screen.LANDING
        self.selected: Optional[LogEntry] = None
        self.edit_mode = False
        self.copy_mode = False
        self.copy_source: Optional[LogEntry] = None

        self.add_draft: Dict[str, Any] = blank_draft()
        self.add_errors: Dict[str, str] = {}
        self.edit_draft: Dict[str, Any] = {}

        self.search_query = ""
        self.column_filters: Dict[str, str] = {}
        self.last_load_error: Optional[str] = None

    # --- navigation -------------------------------------------------------

    def navigate(self, screen: Screen) -> None:
        screen = Screen(screen)
        if screen == Screen.ADD and not self.copy_mode and self.screen != Screen.ADD:
            self.add_draft = blank_draft()
            self.add_errors = {}
        self.screen = screen

    # --- detail overlay ---------------------------------------------------

    def _require(self, log_id: str) -> LogEntry:
        entry = self.store.get(log_id)
        if entry is None:
            raise LogNotFoundError(f"Log {log_id} not found")
        return entry

    @property
    def overlay_visible(self) -> bool:
        return self.selected is not None and not self.copy_mode

    def view(self, log_id: str) -> LogEntry:
        self.selected = self._require(log_id)
        self.edit_mode = False
        self.copy_mode = False
        self.edit_draft = {}
        return self.selected

    def edit(self) -> None:
        if self.selected is None:
            raise NoSelectionError("No log selected to edit")
        self.edit_mode = True
        self.edit_draft = draft_from_entry(self.selected)

    def input_edit(self, field: str, value: Any) -> Any:
        """Apply one edit-form change. Returns the normalized value."""
        if not self.edit_mode:
            raise NoSelectionError("Detail panel is not in edit mode")
        name, normalized = _normalize_input(field, value)
        self.edit_draft[name] = normalized
        return normalized

    def save(self, values: Optional[Mapping[str, Any]] = None) -> Optional[LogEntry]:
        """Save the edit draft over the selected record and go back to read-only."""
        if self.selected is None:
            raise NoSelectionError("No log selected to save")
        if not self.edit_mode:
            self.edit_draft = draft_from_entry(self.selected)
        for field, value in (values or {}).items():
            name, normalized = _normalize_input(field, value)
            self.edit_draft[name] = normalized

        draft = dict(self.edit_draft)
        if draft.get("category") in (CATEGORY_UNSET, ""):
            draft.pop("category")
        missing = validate(self.edit_draft)
        if missing:
            logger.warning(
                f"Log {self.selected.id} saved with empty required fields: {', '.join(sorted(missing))}"
            )

        log_id = self.selected.id
        self.store.update(log_id, draft)
        updated = self.store.get(log_id)
        if updated is None:
            self.close()
            return None

        self.selected = updated
        self.edit_mode = False
        self.edit_draft = {}
        return updated

    def cancel_edit(self) -> None:
        self.edit_mode = False
        self.edit_draft = {}

    def close(self) -> None:
        self.selected = None
        self.edit_mode = False
        self.copy_mode = False
        self.edit_draft = {}

    def copy(self, log_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Start the copy flow: prefill the add form from a record with a blank
        log number, clear the selection, go to the add screen.
        """
        if log_id is not None:
            source = self._require(log_id)
        elif self.selected is not None:
            source = self.selected
        else:
            raise NoSelectionError("No log selected to copy")

        self.copy_source = source
        self.selected = None
        self.edit_mode = False
        self.edit_draft = {}
        self.copy_mode = True

        self.add_draft = draft_from_entry(source)
        self.add_draft["log_number"] = ""
        self.add_errors = {}
        self.screen = Screen.ADD
        return dict(self.add_draft)

    def delete(self, log_id: str, confirmer: Optional[Confirmer] = None) -> bool:
        """
        Ask for confirmation, then delete. Returns True if the record was removed.
        Unknown ids are ignored.
        """
        entry = self.store.get(log_id)
        if entry is None:
            logger.debug(f"Delete requested for unknown log {log_id}")
            return False

        if not (confirmer or self.confirmer).confirm(delete_prompt(entry)):
            logger.info(f"Delete of log {log_id} not confirmed")
            return False

        self.store.delete(log_id)
        if self.selected is not None and self.selected.id == log_id:
            self.close()
        return True

    # --- add form ---------------------------------------------------------

    def input_add(self, field: str, value: Any) -> Any:
        """Apply one add-form change and clear that field's error."""
        name, normalized = _normalize_input(field, value)
        self.add_draft[name] = normalized
        self.add_errors.pop(wire_field_name(name), None)
        return normalized

    def submit(self) -> LogEntry:
        """Validate the add draft and create the record."""
        errors = validate(self.add_draft)
        if errors:
            self.add_errors = errors
            raise LogValidationError(errors)

        entry = self.store.create(self.add_draft)
        if self.copy_mode and self.copy_source is not None:
            logger.info(f"Log {entry.id} copied from {self.copy_source.id}")
        self.copy_mode = False
        self.copy_source = None
        self.add_draft = blank_draft()
        self.add_errors = {}
        self.screen = Screen.SCAN
        return entry

    def cancel_add(self) -> None:
        self.copy_mode = False
        self.copy_source = None
        self.add_draft = blank_draft()
        self.add_errors = {}
        self.screen = Screen.LANDING

    # --- scan table -------------------------------------------------------

    def set_search(self, query: str) -> None:
        self.search_query = query or ""

    def set_column_filter(self, column: str, value: str) -> None:
        name = filter_column_name(column)
        if value:
            self.column_filters[name] = value
        else:
            self.column_filters.pop(name, None)

    def clear_filters(self) -> None:
        self.search_query = ""
        self.column_filters = {}

    def visible_logs(self) -> List[LogEntry]:
        return self.filter_engine.results(self.search_query, self.column_filters)

    # --- load -------------------------------------------------------------

    async def load(self, loader: LogLoader) -> int:
        """
        Replace the store from the load endpoint. On failure the store is
        untouched and the error is kept for the scan table.
        """
        try:
            count = await loader.load_into(self.store)
        except LogLoadError as e:
            self.last_load_error = str(e)
            raise
        self.last_load_error = None
        return count
