"""
Field Normalizer

Applies the fixed-width rules of the abend log record to raw input:
identifier fields are truncated to their maximum width and upper-cased,
the log number is truncated only, everything else passes through.

Used by both the add form and the detail edit form, and by the LogEntry
schema so that records arriving from the load endpoint obey the same bounds.
"""

from typing import Any, Dict, Mapping, Tuple

# field -> (max length, upper-case?)
FIXED_WIDTH_FIELDS: Dict[str, Tuple[int, bool]] = {
    "subsystem": (2, True),
    "composite": (8, True),
    "program": (8, True),
    "abend_code": (8, True),
    "jobname": (8, True),
    "log_number": (4, False),
}

FIELD_MAX_LENGTHS: Dict[str, int] = {
    name: max_length for name, (max_length, _) in FIXED_WIDTH_FIELDS.items()
}

# Python attribute name -> JSON wire name, for the fields where they differ
WIRE_NAMES: Dict[str, str] = {
    "abend_code": "abendCode",
    "log_number": "logNumber",
    "created_by": "createdBy",
}
PYTHON_NAMES: Dict[str, str] = {wire: name for name, wire in WIRE_NAMES.items()}


def canonical_field_name(field_name: str) -> str:
    """Map a wire name (``abendCode``) to its attribute name (``abend_code``)."""
    return PYTHON_NAMES.get(field_name, field_name)


def wire_field_name(field_name: str) -> str:
    """Map an attribute name (``abend_code``) to its wire name (``abendCode``)."""
    return WIRE_NAMES.get(canonical_field_name(field_name), field_name)


def normalize_field(field_name: str, raw_value: Any) -> Any:
    """
    Normalize a single field value.

    Pure and idempotent: normalize_field(f, normalize_field(f, x)) == normalize_field(f, x).
    """
    rule = FIXED_WIDTH_FIELDS.get(canonical_field_name(field_name))
    if rule is None or not isinstance(raw_value, str):
        return raw_value

    max_length, upper = rule
    value = raw_value[:max_length]
    if upper:
        # upper() can lengthen text (ß -> SS), so cut again
        value = value.upper()[:max_length]
    return value


def normalize_fields(values: Mapping[str, Any]) -> Dict[str, Any]:
    """Normalize every entry of a mapping, keyed by attribute name."""
    return {
        canonical_field_name(name): normalize_field(name, value)
        for name, value in values.items()
    }
