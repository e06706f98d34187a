# src/focuslist/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class TaskRole(StrEnum):
    """
    Task lifecycle role.

    Notes:
    - Persisted/exported formats only know two booleans (isForToday, isRecurring);
      the role is derived from them at the boundary and back again.
    - A TEMPLATE stays in the backlog and is instantiated into TODAY copies.
      Its `completed` flag is carried through unchanged but is never toggled.
    """

    BACKLOG = "backlog"
    TODAY = "today"
    TEMPLATE = "template"

    @classmethod
    def from_flags(cls, is_for_today: bool, is_recurring: bool) -> TaskRole:
        if is_recurring and not is_for_today:
            return cls.TEMPLATE
        if is_for_today:
            # Both flags set has no role of its own; callers warn and read it as an instance.
            return cls.TODAY
        return cls.BACKLOG


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    text: str
    role: TaskRole
    completed: bool
    created_at: int  # ms since epoch
    tags: tuple[str, ...] = ()

    @property
    def is_for_today(self) -> bool:
        return self.role is TaskRole.TODAY

    @property
    def is_recurring(self) -> bool:
        return self.role is TaskRole.TEMPLATE

    @property
    def is_template(self) -> bool:
        return self.role is TaskRole.TEMPLATE
