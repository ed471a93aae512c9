"""
In-Memory Log Store.

Owned, ordered collection of abend log entries, newest first. A single
instance is held by the ViewController; nothing reaches it through module
globals. Mutations swap in a new tuple and return it so callers always hold
the full updated collection.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel

from abendlog.app.schemas.logs import LogEntry
from abendlog.app.services.normalizer import normalize_fields

logger = logging.getLogger(__name__)

Records = Tuple[LogEntry, ...]

# Never taken from caller-supplied values
_IMMUTABLE_FIELDS = ("id", "timestamp")


def _values(candidate: Union[BaseModel, Mapping[str, Any]]) -> dict:
    if isinstance(candidate, BaseModel):
        values = candidate.model_dump()
    else:
        values = normalize_fields(candidate)
    for name in _IMMUTABLE_FIELDS:
        values.pop(name, None)
    return values


def duplicate_ids(entries: Iterable[LogEntry]) -> List[str]:
    """Ids that occur more than once, in order of first repeat."""
    seen = set()
    repeated = []
    for entry in entries:
        if entry.id in seen and entry.id not in repeated:
            repeated.append(entry.id)
        seen.add(entry.id)
    return repeated


class LogStore:
    """Process-local store of LogEntry records."""

    def __init__(self, records: Iterable[LogEntry] = ()):
        self._records: Records = tuple(records)
        # Bumped on every mutation; the filter engine memoizes on it
        self.revision = 0

    @property
    def records(self) -> Records:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self._records)

    def get(self, log_id: str) -> Optional[LogEntry]:
        for entry in self._records:
            if entry.id == log_id:
                return entry
        return None

    def _commit(self, records: Records) -> Records:
        self._records = records
        self.revision += 1
        return self._records

    def create(self, candidate: Union[BaseModel, Mapping[str, Any]]) -> LogEntry:
        """
        Assign a fresh id and the current time, then prepend.

        Expects a candidate that already passed validation.
        """
        entry = LogEntry(
            id=str(uuid.uuid4()),
            timestamp=datetime.now(timezone.utc),
            **_values(candidate),
        )
        self._commit((entry,) + self._records)
        logger.info(
            f"Log created: {entry.id} ({entry.subsystem}-{entry.program}-{entry.abend_code})"
        )
        return entry

    def update(self, log_id: str, new_values: Union[BaseModel, Mapping[str, Any]]) -> Records:
        """Replace the matching record in place, keeping its id and timestamp."""
        changes = _values(new_values)
        for index, current in enumerate(self._records):
            if current.id != log_id:
                continue
            updated = LogEntry.model_validate({**current.model_dump(), **changes})
            records = self._records[:index] + (updated,) + self._records[index + 1:]
            logger.info(f"Log updated: {log_id}")
            return self._commit(records)

        logger.debug(f"Update ignored, log {log_id} not in store")
        return self._records

    def delete(self, log_id: str) -> Records:
        remaining = tuple(entry for entry in self._records if entry.id != log_id)
        if len(remaining) == len(self._records):
            logger.debug(f"Delete ignored, log {log_id} not in store")
            return self._records
        logger.info(f"Log deleted: {log_id}")
        return self._commit(remaining)

    def replace_all(self, records: Iterable[Union[LogEntry, Mapping[str, Any]]]) -> Records:
        """
        Swap the whole collection, e.g. after a load from the log endpoint.

        Mappings are parsed as LogEntry, so ISO-8601 timestamp strings become
        datetimes. Parsing happens before anything is replaced.
        Raises ValueError if two records share an id.
        """
        parsed = tuple(
            record if isinstance(record, LogEntry) else LogEntry.model_validate(record)
            for record in records
        )
        repeated = duplicate_ids(parsed)
        if repeated:
            raise ValueError(f"Duplicate log ids: {', '.join(repeated)}")
        logger.info(f"Store replaced with {len(parsed)} logs")
        return self._commit(parsed)
