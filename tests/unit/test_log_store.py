"""
Unit tests for the in-memory LogStore.
"""
from datetime import datetime

import pytest

from abendlog.app.schemas.logs import LogCategory, LogEntry
from abendlog.app.services.log_store import LogStore


def test_create_assigns_id_and_timestamp(valid_draft):
    store = LogStore()
    entry = store.create(valid_draft)
    assert entry.id
    assert entry.timestamp.tzinfo is not None
    assert entry.abend_code == "S0C7"
    assert entry.category == LogCategory.PROGRAM
    assert store.records == (entry,)


def test_create_ignores_caller_supplied_identity(valid_draft):
    store = LogStore()
    entry = store.create({**valid_draft, "id": "mine", "timestamp": "1999-01-01T00:00:00"})
    assert entry.id != "mine"
    assert entry.timestamp.year != 1999


def test_newest_first_ordering(store, valid_draft):
    a = store.create(valid_draft)
    b = store.create({**valid_draft, "logNumber": "0043"})
    assert [e.id for e in store.records[:2]] == [b.id, a.id]
    assert [e.id for e in store.records[2:]] == ["1", "2", "3"]


def test_ids_are_unique(valid_draft):
    store = LogStore()
    ids = {store.create(valid_draft).id for _ in range(20)}
    assert len(ids) == 20


def test_create_truncates_fixed_width_fields(valid_draft):
    store = LogStore()
    entry = store.create({**valid_draft, "subsystem": "cics", "jobname": "orderjob99"})
    assert entry.subsystem == "CI"
    assert entry.jobname == "ORDERJOB"


def test_update_preserves_identity_and_position(store):
    before = store.get("2")
    records = store.update("2", {"description": "x"})
    after = store.get("2")

    assert records is store.records
    assert [e.id for e in records] == ["1", "2", "3"]
    assert after.description == "x"
    assert after.id == before.id
    assert after.timestamp == before.timestamp
    assert after.problem == before.problem
    assert after.program == before.program


def test_update_cannot_change_id_or_timestamp(store):
    store.update("1", {"id": "99", "timestamp": datetime(2000, 1, 1), "program": "newprog"})
    entry = store.get("1")
    assert entry.program == "NEWPROG"
    assert entry.timestamp == datetime(2024, 12, 15, 14, 30)
    assert store.get("99") is None


def test_update_unknown_id_is_noop(store):
    revision = store.revision
    records = store.update("missing", {"description": "x"})
    assert records == tuple(store)
    assert store.revision == revision


def test_delete(store):
    records = store.delete("2")
    assert [e.id for e in records] == ["1", "3"]
    assert store.get("2") is None


def test_delete_unknown_id_is_noop(store):
    revision = store.revision
    store.delete("missing")
    assert len(store) == 3
    assert store.revision == revision


def test_replace_all_parses_string_timestamps(store):
    records = store.replace_all([
        {
            "id": "a1",
            "subsystem": "db",
            "program": "invmgmt",
            "abendCode": "sql904",
            "category": "System",
            "timestamp": "2024-12-13T16:45:00",
            "description": "d",
            "problem": "p",
            "createdBy": "m",
        }
    ])
    assert len(records) == 1
    entry = records[0]
    assert isinstance(entry, LogEntry)
    assert entry.timestamp == datetime(2024, 12, 13, 16, 45)
    assert entry.subsystem == "DB"
    assert entry.abend_code == "SQL904"
    assert entry.resolution == ""


def test_replace_all_is_all_or_nothing(store):
    with pytest.raises(ValueError):
        store.replace_all([
            {"id": "ok", "category": "User", "timestamp": "2024-01-01T00:00:00"},
            {"id": "bad", "category": "Nope", "timestamp": "2024-01-01T00:00:00"},
        ])
    assert [e.id for e in store] == ["1", "2", "3"]


def test_revision_bumps_on_every_mutation(store, valid_draft):
    start = store.revision
    entry = store.create(valid_draft)
    store.update(entry.id, {"problem": "y"})
    store.delete(entry.id)
    store.replace_all([])
    assert store.revision == start + 4


def test_replace_all_rejects_duplicate_ids(store):
    revision = store.revision
    with pytest.raises(ValueError, match="dup"):
        store.replace_all([
            {"id": "dup", "category": "User", "timestamp": "2024-01-01T00:00:00"},
            {"id": "dup", "category": "JCL", "timestamp": "2024-01-02T00:00:00"},
        ])
    assert [e.id for e in store] == ["1", "2", "3"]
    assert store.revision == revision
