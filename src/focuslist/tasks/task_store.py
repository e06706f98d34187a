# src/focuslist/tasks/task_store.py

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Iterable, Sequence
from dataclasses import replace

from ..core.ports import Clock, IdFactory, SnapshotRepo
from .tags import extract_tags
from .task_models import Task, TaskRole

logger = logging.getLogger(__name__)

Tasks = tuple[Task, ...]


def new_task_id() -> str:
    return uuid.uuid4().hex


def now_ms() -> int:
    return int(time.time() * 1000)


def _index_of(tasks: Tasks, task_id: str) -> int:
    for i, t in enumerate(tasks):
        if t.id == task_id:
            return i
    return -1


def _swap(tasks: Tasks, idx: int, task: Task) -> Tasks:
    return tasks[:idx] + (task,) + tasks[idx + 1 :]


# ---- pure transitions (tuple in -> new tuple out) ----


def add_task(tasks: Tasks, text: str, *, new_id: IdFactory = new_task_id, clock: Clock = now_ms) -> Tasks:
    text = (text or "").strip()
    if not text:
        raise ValueError("task text is required")

    task = Task(
        id=new_id(),
        text=text,
        role=TaskRole.BACKLOG,
        completed=False,
        created_at=clock(),
        tags=extract_tags(text),
    )
    return (task, *tasks)


def edit_task(tasks: Tasks, task_id: str, new_text: str) -> Tasks:
    """Replace text and recompute tags. Blank text leaves the task as it was."""
    idx = _index_of(tasks, task_id)
    new_text = (new_text or "").strip()
    if idx < 0 or not new_text:
        return tasks
    task = tasks[idx]
    return _swap(tasks, idx, replace(task, text=new_text, tags=extract_tags(new_text)))


def delete_task(tasks: Tasks, task_id: str) -> Tasks:
    if _index_of(tasks, task_id) < 0:
        return tasks
    return tuple(t for t in tasks if t.id != task_id)


def toggle_complete(tasks: Tasks, task_id: str) -> Tasks:
    idx = _index_of(tasks, task_id)
    if idx < 0:
        return tasks
    task = tasks[idx]

    if task.is_template:
        # Templates are instantiated, never completed. Reset instead of corrupting state.
        logger.warning("toggle_complete on recurring template id=%s; resetting it", task_id)
        return _swap(tasks, idx, replace(task, completed=False)) if task.completed else tasks

    return _swap(tasks, idx, replace(task, completed=not task.completed))


def toggle_is_for_today(
    tasks: Tasks,
    task_id: str,
    *,
    new_id: IdFactory = new_task_id,
    clock: Clock = now_ms,
) -> Tasks:
    """
    Template -> append a fresh TODAY instance (the template itself is untouched).
    Instance -> flip between TODAY and BACKLOG in place.
    """
    idx = _index_of(tasks, task_id)
    if idx < 0:
        return tasks
    task = tasks[idx]

    if task.is_template:
        instance = Task(
            id=new_id(),
            text=task.text,
            role=TaskRole.TODAY,
            completed=False,
            created_at=clock(),
            tags=tuple(task.tags),
        )
        return (*tasks, instance)

    role = TaskRole.BACKLOG if task.role is TaskRole.TODAY else TaskRole.TODAY
    return _swap(tasks, idx, replace(task, role=role))


def toggle_is_recurring(tasks: Tasks, task_id: str) -> Tasks:
    """Becoming a template forces the task out of today; `completed` is left as it is."""
    idx = _index_of(tasks, task_id)
    if idx < 0:
        return tasks
    task = tasks[idx]

    if task.is_template:
        return _swap(tasks, idx, replace(task, role=TaskRole.BACKLOG))
    return _swap(tasks, idx, replace(task, role=TaskRole.TEMPLATE))


def append_tasks(tasks: Tasks, new_tasks: Iterable[Task]) -> Tasks:
    return (*tasks, *new_tasks)


class TaskStore:
    """
    Holder of the current task collection.

    The collection is an immutable tuple that is replaced wholesale on every
    mutation, so a reader holding `store.tasks` always sees a complete snapshot.

    Persistence:
    - load once at startup via TaskStore.open(repo)
    - save after every mutation that actually changed the collection
    """

    def __init__(
        self,
        tasks: Iterable[Task] = (),
        *,
        repo: SnapshotRepo | None = None,
        new_id: IdFactory = new_task_id,
        clock: Clock = now_ms,
        autosave: bool = True,
    ) -> None:
        self._tasks: Tasks = tuple(tasks)
        self._repo = repo
        self._new_id = new_id
        self._clock = clock
        self._autosave = autosave

    @classmethod
    def open(
        cls,
        repo: SnapshotRepo,
        *,
        new_id: IdFactory = new_task_id,
        clock: Clock = now_ms,
        autosave: bool = True,
    ) -> TaskStore:
        loaded = repo.load()
        store = cls(loaded or (), repo=repo, new_id=new_id, clock=clock, autosave=autosave)
        logger.info("TaskStore ready total=%s", store.count())
        return store

    # ---- queries ----

    @property
    def tasks(self) -> Tasks:
        return self._tasks

    @property
    def repo(self) -> SnapshotRepo | None:
        return self._repo

    @property
    def new_id(self) -> IdFactory:
        return self._new_id

    @property
    def clock(self) -> Clock:
        return self._clock

    def count(self) -> int:
        return len(self._tasks)

    def get(self, task_id: str) -> Task | None:
        idx = _index_of(self._tasks, task_id)
        return self._tasks[idx] if idx >= 0 else None

    def resolve_id(self, prefix: str) -> str | None:
        """Exact id, or the single id starting with prefix; None if absent or ambiguous."""
        prefix = (prefix or "").strip()
        if not prefix:
            return None
        if self.get(prefix) is not None:
            return prefix
        matches = [t.id for t in self._tasks if t.id.startswith(prefix)]
        return matches[0] if len(matches) == 1 else None

    # ---- mutations ----

    def _commit(self, new_tasks: Tasks, action: str, task_id: str | None = None) -> bool:
        if new_tasks is self._tasks:
            logger.debug("%s: no-op id=%s", action, task_id)
            return False
        self._tasks = new_tasks
        logger.debug("%s id=%s total=%d", action, task_id, len(new_tasks))
        self.flush()
        return True

    def flush(self) -> None:
        if self._repo is None or not self._autosave:
            return
        self._repo.save(self._tasks)

    def add(self, text: str) -> Task:
        self._commit(add_task(self._tasks, text, new_id=self._new_id, clock=self._clock), "add")
        task = self._tasks[0]
        logger.info("Task added id=%s tags=%s", task.id, ",".join(task.tags))
        return task

    def edit(self, task_id: str, new_text: str) -> bool:
        return self._commit(edit_task(self._tasks, task_id, new_text), "edit", task_id)

    def delete(self, task_id: str) -> bool:
        return self._commit(delete_task(self._tasks, task_id), "delete", task_id)

    def toggle_complete(self, task_id: str) -> bool:
        return self._commit(toggle_complete(self._tasks, task_id), "toggle_complete", task_id)

    def toggle_is_for_today(self, task_id: str) -> bool:
        new_tasks = toggle_is_for_today(self._tasks, task_id, new_id=self._new_id, clock=self._clock)
        return self._commit(new_tasks, "toggle_is_for_today", task_id)

    def toggle_is_recurring(self, task_id: str) -> bool:
        return self._commit(toggle_is_recurring(self._tasks, task_id), "toggle_is_recurring", task_id)

    def replace_all(self, new_tasks: Sequence[Task]) -> None:
        self._commit(tuple(new_tasks), "replace_all")

    def append(self, new_tasks: Sequence[Task]) -> None:
        if not new_tasks:
            return
        self._commit(append_tasks(self._tasks, new_tasks), "append")
