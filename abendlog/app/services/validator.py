"""
Log Entry Validator.

Required-field checks run before a new or copied entry is accepted into the
store. Edits made through the detail overlay are not validated.
"""
from typing import Any, Dict, Mapping, Union

from pydantic import BaseModel

from abendlog.app.schemas.logs import CATEGORY_UNSET
from abendlog.app.services.normalizer import canonical_field_name, wire_field_name

# attribute name -> message shown next to the input
REQUIRED_FIELDS: Dict[str, str] = {
    "subsystem": "Subsystem is required (2 chars)",
    "composite": "Composite is required (max 8 chars)",
    "program": "Program is required (max 8 chars)",
    "abend_code": "Abend code is required (max 8 chars)",
    "jobname": "Job name is required (max 8 chars)",
    "log_number": "Log number is required (4 chars)",
    "category": "Category is required",
    "description": "Description is required",
    "problem": "Problem description is required",
    "created_by": "Created by is required",
}


def _as_mapping(candidate: Union[BaseModel, Mapping[str, Any]]) -> Dict[str, Any]:
    if isinstance(candidate, BaseModel):
        return candidate.model_dump()
    return {canonical_field_name(name): value for name, value in candidate.items()}


def _is_missing(field: str, value: Any) -> bool:
    if field == "category":
        return value is None or value == "" or value == CATEGORY_UNSET
    return not value


def validate(candidate: Union[BaseModel, Mapping[str, Any]]) -> Dict[str, str]:
    """
    Return field errors keyed by wire name. An empty dict means the candidate
    may be created.
    """
    values = _as_mapping(candidate)
    return {
        wire_field_name(field): message
        for field, message in REQUIRED_FIELDS.items()
        if _is_missing(field, values.get(field))
    }
