"""
Filter Engine for the scan table.

A record is shown when it passes the global search AND every column filter.
Matching is substring based; text columns compare case-insensitively, the
date column compares as typed. Output keeps store order.
"""
import logging
from datetime import datetime
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from abendlog.app.schemas.logs import LogEntry
from abendlog.app.services.normalizer import canonical_field_name, wire_field_name

logger = logging.getLogger(__name__)

# Scan table columns, in display order
FILTER_COLUMNS: Tuple[str, ...] = (
    "subsystem",
    "composite",
    "program",
    "abendCode",
    "jobname",
    "date",
    "logNumber",
    "category",
    "description",
    "createdBy",
)

CASE_SENSITIVE_COLUMNS = frozenset({"date"})


def date_key(timestamp: datetime) -> str:
    """Render a timestamp as the 8-digit YYYYMMDD key the date column filters on."""
    return f"{timestamp.year:04d}{timestamp.month:02d}{timestamp.day:02d}"


def _as_text(value) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def column_value(entry: LogEntry, column: str) -> str:
    """Text shown in (and filtered on for) a scan table column."""
    if column == "date":
        return date_key(entry.timestamp)
    return _as_text(getattr(entry, canonical_field_name(column)))


def _field_texts(entry: LogEntry) -> Iterator[str]:
    for name in type(entry).model_fields:
        yield _as_text(getattr(entry, name))


def filter_column_name(name: str) -> str:
    """Accept ``abend_code`` or ``abendCode``; raise ValueError for anything else."""
    column = wire_field_name(name)
    if column not in FILTER_COLUMNS:
        raise ValueError(f"Unknown filter column: {name}")
    return column


def normalize_column_filters(column_filters: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """Key filters by column name and drop empty ones."""
    active: Dict[str, str] = {}
    for name, value in (column_filters or {}).items():
        column = filter_column_name(name)
        if value:
            active[column] = value
    return active


def matches_global(entry: LogEntry, global_query: str) -> bool:
    if not global_query:
        return True
    needle = global_query.lower()
    return any(needle in text.lower() for text in _field_texts(entry))


def matches_columns(entry: LogEntry, column_filters: Mapping[str, str]) -> bool:
    for column, wanted in column_filters.items():
        if not wanted:
            continue
        haystack = column_value(entry, column)
        if column in CASE_SENSITIVE_COLUMNS:
            if wanted not in haystack:
                return False
        elif wanted.lower() not in haystack.lower():
            return False
    return True


def filter_logs(
    records: Iterable[LogEntry],
    global_query: str = "",
    column_filters: Optional[Mapping[str, str]] = None,
) -> List[LogEntry]:
    """Return the records passing the global query and all column filters."""
    active = normalize_column_filters(column_filters)
    return [
        entry for entry in records
        if matches_global(entry, global_query) and matches_columns(entry, active)
    ]


class FilterEngine:
    """
    Memoizes the last filter result of a store.

    The result is recomputed whenever the store revision, the global query or
    any column filter differs from the previous call.
    """

    def __init__(self, store):
        self.store = store
        self._key: Optional[tuple] = None
        self._result: List[LogEntry] = []
        self.recompute_count = 0

    def results(
        self,
        global_query: str = "",
        column_filters: Optional[Mapping[str, str]] = None,
    ) -> List[LogEntry]:
        active = normalize_column_filters(column_filters)
        key = (self.store.revision, global_query, tuple(sorted(active.items())))
        if key != self._key:
            self._result = filter_logs(self.store.records, global_query, active)
            self._key = key
            self.recompute_count += 1
            logger.debug(
                f"Filter recomputed: {len(self._result)}/{len(self.store)} logs "
                f"(query={global_query!r}, filters={active})"
            )
        return list(self._result)
