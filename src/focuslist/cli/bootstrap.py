# src/focuslist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the composition root:
- loads settings once,
- ensures the local data directory exists,
- wires the JSON snapshot adapter into the task store and AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..storage.snapshot_store import JsonSnapshotStore
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.snapshot_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    repo = JsonSnapshotStore(settings.snapshot_path)
    store = TaskStore.open(repo, autosave=bool(getattr(settings, "save_on_mutation", True)))
    return AppState(settings=settings, store=store)


def shutdown(state: AppState) -> None:
    """Final save (covers save_on_mutation=false). Errors are logged, not raised."""
    try:
        if state.store.repo is not None:
            state.store.repo.save(state.store.tasks)
    except Exception:
        logger.exception("Failed to save tasks on shutdown.")
