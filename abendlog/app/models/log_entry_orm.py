"""
ORM Model for the Abend Log Archive.

Backs the GET /logs load endpoint. The archive is a snapshot of the
in-memory store; `position` keeps the store's newest-first order.
SQLite-compatible: ids stored as String, no FK constraints.
"""
from sqlalchemy import Column, String, Text, DateTime, Integer

from abendlog.app.core.database import Base


class LogEntryORM(Base):
    __tablename__ = "abend_logs"

    # Loaded ids are not necessarily UUIDs
    id = Column(String(255), primary_key=True)
    position = Column(Integer, nullable=False, index=True)

    # Fixed-width identifiers
    subsystem = Column(String(2), nullable=False, default="", index=True)
    composite = Column(String(8), nullable=False, default="")
    program = Column(String(8), nullable=False, default="", index=True)
    abend_code = Column(String(8), nullable=False, default="", index=True)
    jobname = Column(String(8), nullable=False, default="")
    log_number = Column(String(4), nullable=False, default="")
    category = Column(String(10), nullable=False)  # LogCategory values

    timestamp = Column(DateTime(timezone=True), nullable=False)

    # Narrative
    description = Column(Text, nullable=False, default="")
    problem = Column(Text, nullable=False, default="")
    resolution = Column(Text, nullable=False, default="")
    recovery = Column(Text, nullable=False, default="")
    results = Column(Text, nullable=False, default="")
    prevention = Column(Text, nullable=False, default="")

    created_by = Column(String(255), nullable=False, default="")
