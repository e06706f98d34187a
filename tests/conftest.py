# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from focuslist.core.state import AppState
from focuslist.tasks.task_store import TaskStore

from .fakes import FakeClock, FakeSnapshotRepo, SequentialIds


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the command handlers.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any .env file.
    """
    return SimpleNamespace(
        app_name="focuslist-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        snapshot_path=tmp_path / "tasks.json",
        export_dir=tmp_path / "exports",
        save_on_mutation=True,
    )


@pytest.fixture()
def ids() -> SequentialIds:
    return SequentialIds()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def repo() -> FakeSnapshotRepo:
    return FakeSnapshotRepo()


@pytest.fixture()
def store(repo: FakeSnapshotRepo, ids: SequentialIds, clock: FakeClock) -> TaskStore:
    return TaskStore.open(repo, new_id=ids, clock=clock)


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    return AppState(settings=settings, store=store)
