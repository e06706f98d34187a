# tests/test_snapshot_store.py

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from focuslist.errors import PersistenceError
from focuslist.storage.snapshot_store import JsonSnapshotStore
from focuslist.tasks.task_models import TaskRole
from focuslist.tasks.task_store import TaskStore

from .fakes import make_task


def test_missing_file_loads_as_absent(tmp_path: Path) -> None:
    assert JsonSnapshotStore(tmp_path / "tasks.json").load() is None


def test_save_load_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "tasks.json"
    snap = JsonSnapshotStore(path)
    tasks = [
        make_task("a", "Today #x", role=TaskRole.TODAY, completed=True, created_at=1),
        make_task("b", "Template #y", role=TaskRole.TEMPLATE, created_at=2),
        make_task("c", "Explicit", tags=("kept",), created_at=3),
    ]

    snap.save(tasks)

    assert snap.load() == tasks
    raw = json.loads(path.read_text("utf-8"))
    assert raw[0] == {
        "id": "a",
        "text": "Today #x",
        "completed": True,
        "createdAt": 1,
        "isForToday": True,
        "isRecurring": False,
        "tags": ["x"],
    }
    assert not path.with_suffix(".tmp").exists()


def test_missing_optional_fields_are_defaulted(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_text(
        json.dumps([{"id": "old1", "text": "Legacy #imported", "completed": False, "createdAt": 10}]),
        "utf-8",
    )

    tasks = JsonSnapshotStore(path).load()

    assert tasks is not None
    assert tasks[0].role is TaskRole.BACKLOG
    assert tasks[0].tags == ("imported",)


@pytest.mark.parametrize(
    "payload",
    [
        "{not json",
        json.dumps({"id": "a"}),
        json.dumps([{"id": "a", "text": "no completed", "createdAt": 1}]),
        json.dumps([{"id": "a", "text": "bad ts", "completed": False, "createdAt": "soon"}]),
        json.dumps(["just a string"]),
    ],
)
def test_invalid_snapshot_loads_as_absent(tmp_path: Path, payload: str) -> None:
    path = tmp_path / "tasks.json"
    path.write_text(payload, "utf-8")
    assert JsonSnapshotStore(path).load() is None


def test_store_starts_empty_on_corrupt_snapshot(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_text("[[[", "utf-8")
    store = TaskStore.open(JsonSnapshotStore(path))
    assert store.count() == 0


def test_store_persists_every_mutation(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    store = TaskStore.open(JsonSnapshotStore(path))
    task = store.add("Persist me #now")
    store.toggle_is_for_today(task.id)

    reopened = TaskStore.open(JsonSnapshotStore(path))
    assert reopened.tasks == store.tasks
    assert reopened.tasks[0].is_for_today


def test_save_failure_raises_persistence_error(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x", "utf-8")
    snap = JsonSnapshotStore(blocker / "tasks.json")

    with pytest.raises(PersistenceError):
        snap.save([make_task("a", "a")])


def test_completed_template_survives_save_and_load(tmp_path: Path) -> None:
    snap = JsonSnapshotStore(tmp_path / "tasks.json")
    template = make_task("t", "Journal", role=TaskRole.TEMPLATE, completed=True, created_at=1)

    snap.save([template])

    assert snap.load() == [template]


def test_record_with_both_flags_loads_as_today(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "tasks.json"
    record = {"id": "x", "text": "Both", "completed": False, "createdAt": 1, "isForToday": True, "isRecurring": True}
    path.write_text(json.dumps([record]), "utf-8")

    with caplog.at_level(logging.WARNING, logger="focuslist.storage.snapshot_store"):
        tasks = JsonSnapshotStore(path).load()

    assert tasks is not None
    assert tasks[0].role is TaskRole.TODAY
    assert any("'x'" in r.getMessage() for r in caplog.records)
