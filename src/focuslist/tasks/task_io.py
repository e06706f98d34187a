# src/focuslist/tasks/task_io.py

"""
File-level CSV import/export actions.

An import either fully applies or leaves the store untouched:
read -> parse -> (replace_all | append), with every failure raised before the swap.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

from ..errors import ReadFailureError
from .csv_codec import ImportMode, ParseResult, export_csv, export_recurring_csv, parse_csv
from .task_store import TaskStore

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_NAME = "todos.csv"
DEFAULT_RECURRING_EXPORT_NAME = "recurring_templates.csv"


@dataclass(frozen=True, slots=True)
class ImportReport:
    mode: ImportMode
    imported: int
    skipped: int

    def describe(self) -> str:
        if self.mode is ImportMode.RECURRING:
            msg = (
                f"Successfully imported {self.imported} recurring templates. "
                "They have been added to your backlog."
            )
        else:
            msg = f"Successfully imported {self.imported} tasks. All previous tasks have been replaced."
        if self.skipped:
            msg += f" Skipped {self.skipped} rows without text."
        return msg


def default_export_path(directory: str | Path, *, recurring_only: bool = False) -> Path:
    name = DEFAULT_RECURRING_EXPORT_NAME if recurring_only else DEFAULT_EXPORT_NAME
    return Path(directory) / name


def export_to_file(store: TaskStore, path: str | Path, *, recurring_only: bool = False) -> int:
    """Write the collection (or its templates) as CSV. Returns the number of rows written."""
    tasks = store.tasks
    if recurring_only:
        rows = sum(1 for t in tasks if t.is_template)
        text = export_recurring_csv(tasks)
    else:
        rows = len(tasks)
        text = export_csv(tasks)

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, "utf-8")
    logger.info("Exported %d tasks to %s (recurring_only=%s)", rows, path, recurring_only)
    return rows


def read_import_file(path: str | Path) -> str:
    path = Path(path)
    try:
        text = path.read_text("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read import file %s: %s", path, e)
        raise ReadFailureError(f"Failed to read the file {path}.") from e
    if not text:
        raise ReadFailureError(f"Failed to read file or file is empty: {path}.")
    return text


def apply_import(store: TaskStore, text: str, mode: ImportMode) -> ImportReport:
    """Parse CSV text and apply it to the store in one step (MalformedInputError aborts)."""
    result: ParseResult = parse_csv(text, mode=mode, new_id=store.new_id, clock=store.clock)

    if mode is ImportMode.RECURRING:
        store.append(result.tasks)
    else:
        store.replace_all(result.tasks)

    report = ImportReport(mode=mode, imported=len(result.tasks), skipped=result.skipped)
    logger.info("CSV import mode=%s imported=%d skipped=%d", mode.value, report.imported, report.skipped)
    return report


def import_from_file(store: TaskStore, path: str | Path, mode: ImportMode = ImportMode.REPLACE) -> ImportReport:
    return apply_import(store, read_import_file(path), mode)


async def import_from_file_async(
    store: TaskStore,
    path: str | Path,
    mode: ImportMode = ImportMode.REPLACE,
) -> ImportReport:
    """
    Read the file off the event loop, then parse and apply synchronously.

    The apply step has no await points, so it cannot interleave with other mutations.
    """
    text = await asyncio.to_thread(read_import_file, path)
    return apply_import(store, text, mode)
