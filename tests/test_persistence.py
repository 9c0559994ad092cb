"""Tests for studenthub.data.persistence — SnapshotStore."""

import json
import logging

from unittest.mock import MagicMock

from studenthub.data.models import Goal, HabitLog, Snapshot, Task
from studenthub.data.persistence import SnapshotStore, dump_snapshot, parse_snapshot
from studenthub.ports.storage_port import StorageError

STAMP = "2026-02-07T09:00:00+00:00"


def _sample_snapshot() -> Snapshot:
    return Snapshot(
        goals=[Goal(
            id="g1", user_id="u1", title="Bench 100kg", category="fitness",
            initial_value=60, target_value=100, current_value=80,
            status="in_progress", created_at=STAMP, updated_at=STAMP,
        )],
        tasks=[Task(
            id="t1", user_id="u1", title="Essay", tags=["english", "urgent"],
            due_date="2026-02-07", created_at=STAMP, updated_at=STAMP,
        )],
        habit_logs=[HabitLog(
            id="l1", user_id="u1", habit_id="default-habit-1",
            date="2026-02-07", completed=True, created_at=STAMP,
        )],
    )


class TestSnapshotStoreLoadSave:
    def test_load_missing_key_returns_empty(self, snapshots):
        assert snapshots.load("nobody") == Snapshot()

    def test_save_then_load_roundtrip(self, snapshots):
        snapshot = _sample_snapshot()
        assert snapshots.save("u1", snapshot) is True
        assert snapshots.load("u1") == snapshot

    def test_key_includes_namespace_and_user(self, storage, snapshots):
        snapshots.save("u1", Snapshot())
        assert storage.get_item("studentHub_u1") is not None
        assert snapshots.key_for("u1") == "studentHub_u1"

    def test_save_overwrites_whole_blob(self, snapshots):
        snapshots.save("u1", _sample_snapshot())
        snapshots.save("u1", Snapshot())
        assert snapshots.load("u1") == Snapshot()

    def test_users_are_isolated(self, snapshots):
        snapshots.save("u1", _sample_snapshot())
        assert snapshots.load("u2") == Snapshot()

    def test_stored_blob_uses_camel_case(self, storage, snapshots):
        snapshots.save("u1", _sample_snapshot())
        data = json.loads(storage.get_item("studentHub_u1"))
        assert "habitLogs" in data
        assert data["tasks"][0]["dueDate"] == "2026-02-07"
        assert data["habitLogs"][0]["habitId"] == "default-habit-1"


class TestSnapshotStoreFailures:
    def test_load_storage_error_returns_empty(self, caplog):
        storage = MagicMock()
        storage.get_item.side_effect = StorageError("unreadable")
        store = SnapshotStore(storage, namespace="studentHub")
        with caplog.at_level(logging.ERROR):
            assert store.load("u1") == Snapshot()
        assert "Failed to load snapshot" in caplog.text

    def test_save_storage_error_returns_false(self, caplog):
        storage = MagicMock()
        storage.set_item.side_effect = StorageError("disk full")
        store = SnapshotStore(storage, namespace="studentHub")
        with caplog.at_level(logging.ERROR):
            assert store.save("u1", Snapshot()) is False
        assert "Failed to save snapshot" in caplog.text

    def test_save_is_a_single_write(self):
        storage = MagicMock()
        store = SnapshotStore(storage, namespace="studentHub")
        store.save("u1", _sample_snapshot())
        storage.set_item.assert_called_once()


class TestParseSnapshot:
    def test_invalid_json_gives_empty(self):
        assert parse_snapshot("{not json") == Snapshot()

    def test_non_object_gives_empty(self):
        assert parse_snapshot("[1, 2, 3]") == Snapshot()

    def test_missing_keys_default_to_empty(self):
        snapshot = parse_snapshot('{"goals": []}')
        assert snapshot.tasks == []
        assert snapshot.habit_logs == []

    def test_non_list_key_is_ignored(self):
        raw = json.loads(dump_snapshot(_sample_snapshot()))
        raw["goals"] = {"oops": True}
        snapshot = parse_snapshot(json.dumps(raw))
        assert snapshot.goals == []
        assert len(snapshot.tasks) == 1

    def test_malformed_record_is_dropped(self):
        raw = json.loads(dump_snapshot(_sample_snapshot()))
        raw["tasks"].append({"id": "broken"})
        snapshot = parse_snapshot(json.dumps(raw))
        assert [t.id for t in snapshot.tasks] == ["t1"]

    def test_unknown_keys_are_ignored(self):
        snapshot = parse_snapshot('{"settings": {"theme": "dark"}, "tasks": []}')
        assert snapshot == Snapshot()

    def test_null_collection_defaults_to_empty(self):
        assert parse_snapshot('{"reviews": null}').reviews == []
