"""Models package."""

from abendlog.app.models.log_entry_orm import LogEntryORM

__all__ = [
    "LogEntryORM",
]
