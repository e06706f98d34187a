# src/focuslist/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_store import TaskStore
from ..tasks.task_views import TaskViews, project_views


@dataclass
class AppState:
    # Settings are kept on the state so command handlers can read paths without globals.
    settings: object

    store: TaskStore
    active_tag: str | None = None

    def set_tag_filter(self, tag: str | None) -> None:
        tag = (tag or "").strip().lstrip("#")
        self.active_tag = tag or None

    def clear_tag_filter(self) -> None:
        self.active_tag = None

    def views(self) -> TaskViews:
        return project_views(self.store.tasks, self.active_tag)
