# src/focuslist/tasks/task_views.py

"""
Derived views over the task collection.

Nothing here is stored: every view is recomputed from the current tuple of
tasks. Pipeline order matters:
  sort -> tag filter -> today/backlog split -> completed grouping -> counts.
The tag bar is computed over the unfiltered collection.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .task_models import Task, TaskRole


@dataclass(frozen=True, slots=True)
class CompletedGroup:
    """Completed today tasks sharing the exact same text."""

    representative: Task
    task_ids: tuple[str, ...]
    first_completed_at: int

    @property
    def count(self) -> int:
        return len(self.task_ids)

    @property
    def text(self) -> str:
        return self.representative.text

    @property
    def delete_target(self) -> str:
        # Deleting a group removes one member only; the count drops by one.
        return self.representative.id


@dataclass(frozen=True, slots=True)
class TaskViews:
    active_tag: str | None
    today: tuple[Task, ...]
    today_active: tuple[Task, ...]
    completed_groups: tuple[CompletedGroup, ...]
    backlog: tuple[Task, ...]
    total_today: int
    completed_today: int
    all_tags: tuple[str, ...]


def sort_tasks(tasks: Iterable[Task]) -> list[Task]:
    """Incomplete first, then newest first. Stable for ties."""
    return sorted(tasks, key=lambda t: (t.completed, -t.created_at))


def filter_by_tag(tasks: Iterable[Task], tag: str | None) -> list[Task]:
    if not tag:
        return list(tasks)
    return [t for t in tasks if tag in t.tags]


def group_completed(tasks: Iterable[Task]) -> list[CompletedGroup]:
    groups: dict[str, tuple[Task, list[str]]] = {}
    for t in tasks:
        if not t.completed:
            continue
        entry = groups.get(t.text)
        if entry is None:
            groups[t.text] = (t, [t.id])
        else:
            entry[1].append(t.id)

    out = [
        CompletedGroup(representative=rep, task_ids=tuple(ids), first_completed_at=rep.created_at)
        for rep, ids in groups.values()
    ]
    out.sort(key=lambda g: g.first_completed_at, reverse=True)
    return out


def unique_tags(tasks: Iterable[Task]) -> tuple[str, ...]:
    return tuple(sorted({tag for t in tasks for tag in t.tags}))


def project_views(tasks: Sequence[Task], active_tag: str | None = None) -> TaskViews:
    visible = filter_by_tag(sort_tasks(tasks), active_tag)

    today = [t for t in visible if t.role is TaskRole.TODAY]
    backlog = [t for t in visible if t.role is not TaskRole.TODAY]

    return TaskViews(
        active_tag=active_tag or None,
        today=tuple(today),
        today_active=tuple(t for t in today if not t.completed),
        completed_groups=tuple(group_completed(today)),
        backlog=tuple(backlog),
        total_today=len(today),
        completed_today=sum(1 for t in today if t.completed),
        all_tags=unique_tags(tasks),
    )
