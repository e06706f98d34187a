# src/focuslist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task store depends on a Protocol instead of a concrete storage backend.
This keeps persistence swappable and lets tests use an in-memory fake.
"""

from collections.abc import Callable, Sequence
from typing import Protocol

from ..tasks.task_models import Task

IdFactory = Callable[[], str]
Clock = Callable[[], int]
# Clock returns milliseconds since the epoch.


class SnapshotRepo(Protocol):
    """
    Load/save of the whole task collection as one opaque snapshot.

    load() returns None when there is no usable snapshot (missing or corrupt);
    the caller then starts from an empty collection.
    """

    def load(self) -> list[Task] | None: ...

    def save(self, tasks: Sequence[Task]) -> None: ...
