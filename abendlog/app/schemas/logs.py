"""
Abend Log Schemas and Enums.

Shared contract used by the store, the view controller, the archive and the
GET /logs load endpoint. Attribute names are snake_case; the JSON wire format
is camelCase (abendCode, logNumber, createdBy) to match the load endpoint.
"""
from enum import Enum
from typing import Any
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from abendlog.app.services.normalizer import normalize_field


class LogCategory(str, Enum):
    """Who or what caused the abend."""
    USER = "User"
    JCL = "JCL"
    SYSTEM = "System"
    PROGRAM = "Program"


# Placeholder the forms carry until a category is picked. Never stored.
CATEGORY_UNSET = "none"


class LogEntryFields(BaseModel):
    """The user-entered part of a log entry (everything except id and timestamp)."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    subsystem: str = ""
    composite: str = ""
    program: str = ""
    abend_code: str = Field("", alias="abendCode")
    jobname: str = ""
    log_number: str = Field("", alias="logNumber")
    category: LogCategory
    description: str = ""
    problem: str = ""
    resolution: str = ""
    recovery: str = ""
    results: str = ""
    prevention: str = ""
    created_by: str = Field("", alias="createdBy")

    @field_validator(
        "subsystem", "composite", "program", "abend_code", "jobname", "log_number",
        mode="before",
    )
    @classmethod
    def _apply_field_width(cls, value: Any, info) -> Any:
        return normalize_field(info.field_name, value)


class LogEntry(LogEntryFields):
    """A stored abend log entry."""
    id: str
    timestamp: datetime


class LogEntryCreate(LogEntryFields):
    """Candidate for Store.create; id and timestamp are assigned by the store."""
    pass


class FieldInput(BaseModel):
    """One keystroke-level change to a form field."""
    field: str
    value: str


class SearchRequest(BaseModel):
    query: str = ""


class ArchiveResult(BaseModel):
    archived: int
