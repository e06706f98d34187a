# src/focuslist/storage/snapshot_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from ..errors import PersistenceError
from ..tasks.tags import extract_tags
from ..tasks.task_models import Task, TaskRole

logger = logging.getLogger(__name__)

_REQUIRED_KEYS = ("id", "text", "completed", "createdAt")


class InvalidSnapshot(ValueError):
    """Snapshot payload is structurally invalid; treated as "no snapshot"."""


def task_to_record(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "text": task.text,
        "completed": task.completed,
        "createdAt": task.created_at,
        "isForToday": task.is_for_today,
        "isRecurring": task.is_recurring,
        "tags": list(task.tags),
    }


def record_to_task(raw: Any) -> Task:
    if not isinstance(raw, dict) or any(k not in raw for k in _REQUIRED_KEYS):
        raise InvalidSnapshot(f"task record missing one of {_REQUIRED_KEYS}")

    text = str(raw["text"])
    tags_raw = raw.get("tags")
    if isinstance(tags_raw, list):
        tags = tuple(str(t) for t in tags_raw)
    else:
        tags = extract_tags(text)

    try:
        created_at = int(raw["createdAt"])
    except (TypeError, ValueError) as e:
        raise InvalidSnapshot(f"bad createdAt for task {raw['id']!r}") from e

    is_for_today = bool(raw.get("isForToday"))
    is_recurring = bool(raw.get("isRecurring"))
    if is_for_today and is_recurring:
        logger.warning("Task %r has isForToday and isRecurring set; loading it as a today task.", raw["id"])

    return Task(
        id=str(raw["id"]),
        text=text,
        role=TaskRole.from_flags(is_for_today, is_recurring),
        completed=bool(raw["completed"]),
        created_at=created_at,
        tags=tags,
    )


class JsonSnapshotStore:
    """
    Whole-collection snapshot in a single JSON file.

    - load(): None if the file is missing or unusable (never raises)
    - save(): atomic write via temp file + os.replace
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[Task] | None:
        if not self._path.exists():
            logger.info("No task snapshot at %s; starting empty.", self._path)
            return None
        try:
            data = json.loads(self._path.read_text("utf-8"))
            if not isinstance(data, list):
                raise InvalidSnapshot("snapshot root is not a list")
            tasks = [record_to_task(item) for item in data]
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, InvalidSnapshot) as e:
            logger.warning("Ignoring invalid task snapshot %s: %s", self._path, e)
            return None

        logger.info("Loaded %d tasks from %s", len(tasks), self._path)
        return tasks

    def save(self, tasks: Sequence[Task]) -> None:
        payload = [task_to_record(t) for t in tasks]
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self._path.with_suffix(".tmp")
            tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), "utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            logger.exception("Failed to save task snapshot to %s", self._path)
            raise PersistenceError(f"could not save tasks to {self._path}: {e}") from e

        with contextlib.suppress(OSError):
            os.chmod(self._path, 0o600)
        logger.debug("Saved %d tasks to %s", len(payload), self._path)
