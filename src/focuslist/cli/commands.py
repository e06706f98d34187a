# src/focuslist/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from pathlib import Path
from typing import cast

from ..core.state import AppState
from ..errors import FocuslistError
from ..tasks.csv_codec import ImportMode
from ..tasks.tags import tags_as_text
from ..tasks.task_io import default_export_path, export_to_file, import_from_file
from ..tasks.task_models import Task
from ..tasks.task_views import TaskViews

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

SHORT_ID_LEN = 8

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str, emit: CommandEmitter | None = None) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return h3(state, args, emit)
            h2 = cast(CommandHandler2, handler)
            return h2(state, args)
        except FocuslistError as e:
            logger.info("/%s failed: %s", name, e)
            return str(e)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- formatting ----


def short_id(task: Task) -> str:
    return task.id[:SHORT_ID_LEN]


def _task_line(task: Task, *, count: int = 1) -> str:
    if task.is_template:
        box = "[R]"
    else:
        box = "[x]" if task.completed else "[ ]"
    suffix = f"  (x{count})" if count > 1 else ""
    return f"  {box} {short_id(task)}  {task.text}{suffix}"


def format_views(views: TaskViews) -> str:
    lines: list[str] = []

    header = "Today's Focus"
    if views.total_today:
        header += f" ({views.completed_today}/{views.total_today} completed)"
    if views.active_tag:
        header += f" [filtered by #{views.active_tag}]"
    lines.append(header)

    if not views.today_active and not views.completed_groups:
        lines.append("  (nothing for today)")
    lines.extend(_task_line(t) for t in views.today_active)
    lines.extend(_task_line(g.representative, count=g.count) for g in views.completed_groups)

    lines.append("")
    lines.append("Upcoming & Backlog")
    if not views.backlog:
        lines.append("  (backlog is clear)")
    lines.extend(_task_line(t) for t in views.backlog)

    if views.all_tags:
        lines.append("")
        lines.append("Tags: " + tags_as_text(views.all_tags))
    return "\n".join(lines)


def _resolve(state: AppState, args: list[str]) -> str | None:
    if not args:
        return None
    return state.store.resolve_id(args[0])


def _not_found(args: list[str]) -> str:
    if not args:
        return "Task id required."
    return f"No task matches id {args[0]!r}."


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    return format_views(state.views())


def cmd_add(state: AppState, args: list[str]) -> str:
    text = " ".join(args).strip()
    if not text:
        return "Usage: /add <text> (use #tags to organize)"
    task = state.store.add(text)
    return f"Added {short_id(task)} to backlog."


def cmd_edit(state: AppState, args: list[str]) -> str:
    task_id = _resolve(state, args)
    if task_id is None:
        return _not_found(args)
    text = " ".join(args[1:]).strip()
    if not text:
        return "Usage: /edit <id> <new text>"
    state.store.edit(task_id, text)
    return f"Edited {task_id[:SHORT_ID_LEN]}."


def cmd_done(state: AppState, args: list[str]) -> str:
    task_id = _resolve(state, args)
    task = state.store.get(task_id) if task_id else None
    if task is None:
        return _not_found(args)
    if task.is_template:
        return "Recurring templates cannot be completed. Use /today to add an instance for today."
    if not task.is_for_today:
        return "Tasks in the backlog must be moved to Today's Focus before they can be completed."
    state.store.toggle_complete(task.id)
    return f"{'Reopened' if task.completed else 'Completed'} {short_id(task)}."


def cmd_today(state: AppState, args: list[str]) -> str:
    task_id = _resolve(state, args)
    task = state.store.get(task_id) if task_id else None
    if task is None:
        return _not_found(args)
    state.store.toggle_is_for_today(task.id)
    if task.is_template:
        return f"Added today's instance of template {short_id(task)}."
    target = "backlog" if task.is_for_today else "Today's Focus"
    return f"Moved {short_id(task)} to {target}."


def cmd_recur(state: AppState, args: list[str]) -> str:
    task_id = _resolve(state, args)
    task = state.store.get(task_id) if task_id else None
    if task is None:
        return _not_found(args)
    state.store.toggle_is_recurring(task.id)
    if task.is_template:
        return f"{short_id(task)} is no longer a recurring template."
    return f"{short_id(task)} is now a recurring template in the backlog."


def cmd_rm(state: AppState, args: list[str]) -> str:
    task_id = _resolve(state, args)
    if task_id is None:
        return _not_found(args)
    state.store.delete(task_id)
    return f"Deleted {task_id[:SHORT_ID_LEN]}."


def cmd_tag(state: AppState, args: list[str]) -> str:
    if not args:
        views = state.views()
        if not views.all_tags:
            return "No tags found. Add tasks with #tags to filter."
        return "Tags: " + tags_as_text(views.all_tags)
    state.set_tag_filter(args[0])
    return f"Filtering by #{state.active_tag}."


def cmd_all(state: AppState, args: list[str]) -> str:
    state.clear_tag_filter()
    return "Showing all tasks."


def _export(state: AppState, args: list[str], *, recurring_only: bool) -> str:
    if args:
        path = Path(args[0]).expanduser()
    else:
        export_dir = getattr(state.settings, "export_dir", Path("."))
        path = default_export_path(export_dir, recurring_only=recurring_only)
    try:
        rows = export_to_file(state.store, path, recurring_only=recurring_only)
    except OSError as e:
        logger.warning("Export to %s failed: %s", path, e)
        return f"Export failed: {e}"
    kind = "recurring templates" if recurring_only else "tasks"
    return f"Exported {rows} {kind} to {path}."


def cmd_export(state: AppState, args: list[str]) -> str:
    return _export(state, args, recurring_only=False)


def cmd_export_recurring(state: AppState, args: list[str]) -> str:
    return _export(state, args, recurring_only=True)


def _import(state: AppState, args: list[str], emit: CommandEmitter | None, mode: ImportMode) -> str:
    if not args:
        return f"Usage: /{'import-recurring' if mode is ImportMode.RECURRING else 'import'} <file.csv>"
    path = Path(args[0]).expanduser()
    if emit is not None:
        emit(f"Importing {path} ...")
    report = import_from_file(state.store, path, mode)
    return report.describe()


def cmd_import(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """Replaces ALL current tasks."""
    return _import(state, args, emit, ImportMode.REPLACE)


def cmd_import_recurring(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """Adds templates to the current tasks."""
    return _import(state, args, emit, ImportMode.RECURRING)


def cmd_status(state: AppState, args: list[str]) -> str:
    views = state.views()
    templates = sum(1 for t in state.store.tasks if t.is_template)
    snapshot = getattr(state.settings, "snapshot_path", "(in memory)")
    return (
        "Status:\n"
        f"  Tasks: {state.store.count()} (templates: {templates})\n"
        f"  Today: {views.completed_today}/{views.total_today} completed\n"
        f"  Filter: {('#' + state.active_tag) if state.active_tag else 'none'}\n"
        f"  Snapshot: {snapshot}"
    )


registry.register("help", cmd_help, "show this help", aliases=["h", "?"])
registry.register("list", cmd_list, "show today's focus and the backlog", aliases=["ls"])
registry.register("add", cmd_add, "add a backlog task (/add <text>)")
registry.register("edit", cmd_edit, "change a task's text (/edit <id> <text>)")
registry.register("done", cmd_done, "toggle completion of a today task (/done <id>)")
registry.register("today", cmd_today, "move to/from today; on a template adds a today instance")
registry.register("recur", cmd_recur, "toggle recurring template (/recur <id>)")
registry.register("rm", cmd_rm, "delete a task (/rm <id>)", aliases=["delete"])
registry.register("tag", cmd_tag, "filter by tag (/tag <name>) or list tags")
registry.register("all", cmd_all, "clear the tag filter")
registry.register("export", cmd_export, "export all tasks to CSV (/export [path])")
registry.register("export-recurring", cmd_export_recurring, "export recurring templates to CSV")
registry.register("import", cmd_import, "import CSV, REPLACING all tasks (/import <path>)")
registry.register("import-recurring", cmd_import_recurring, "import CSV as recurring templates (adds)")
registry.register("status", cmd_status, "show counts and paths")
