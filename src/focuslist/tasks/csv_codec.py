# src/focuslist/tasks/csv_codec.py

"""
CSV export/import of the task collection.

Wire format (header row first):
    id,text,completed,createdAt,isForToday,isRecurring,tags

- booleans are the literals true/false
- tags are joined with ';'
- fields with a comma, double quote or newline are quoted, inner quotes doubled

Import is line-oriented: each line is split on commas outside quoted spans, then
each field is trimmed and unquoted. A quoted field cannot span lines, so a stray
quote only affects its own row. Import never trusts the id column: every
imported task gets a fresh id.
"""

from __future__ import annotations

import csv
import io
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from ..core.ports import Clock, IdFactory
from ..errors import MalformedInputError
from .tags import extract_tags
from .task_models import Task, TaskRole
from .task_store import new_task_id, now_ms

logger = logging.getLogger(__name__)

CSV_COLUMNS: tuple[str, ...] = (
    "id",
    "text",
    "completed",
    "createdAt",
    "isForToday",
    "isRecurring",
    "tags",
)
REQUIRED_COLUMNS: tuple[str, ...] = ("text",)
TAG_SEPARATOR = ";"

_LEADING_INT_RE = re.compile(r"[+-]?\d+")


class ImportMode(StrEnum):
    REPLACE = "replace"  # parsed tasks replace the whole collection
    RECURRING = "recurring"  # parsed rows become templates appended to the collection


@dataclass(frozen=True, slots=True)
class ParseResult:
    tasks: tuple[Task, ...]
    skipped: int = 0


# ---- export ----


def _bool_text(value: bool) -> str:
    return "true" if value else "false"


def _task_row(task: Task) -> dict[str, str]:
    return {
        "id": task.id,
        "text": task.text,
        "completed": _bool_text(task.completed),
        "createdAt": str(task.created_at),
        "isForToday": _bool_text(task.is_for_today),
        "isRecurring": _bool_text(task.is_recurring),
        "tags": TAG_SEPARATOR.join(task.tags),
    }


def export_csv(tasks: Iterable[Task]) -> str:
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=CSV_COLUMNS, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writeheader()
    for task in tasks:
        writer.writerow(_task_row(task))
    return buf.getvalue()


def export_recurring_csv(tasks: Iterable[Task]) -> str:
    """Same format, templates only."""
    return export_csv(t for t in tasks if t.is_template)


# ---- import ----

_LINE_SPLIT_RE = re.compile(r"\r?\n")
# A comma followed by an even number of quotes up to the end of the line, i.e. not inside a quoted span.
_FIELD_SPLIT_RE = re.compile(r',(?=(?:(?:[^"]*"){2})*[^"]*$)')


def _parse_bool(raw: str) -> bool:
    return raw.strip().lower() == "true"


def _parse_created_at(raw: str, clock: Clock) -> int:
    # Leading-integer parse; missing, invalid or zero falls back to "now".
    m = _LEADING_INT_RE.match(raw.strip())
    value = int(m.group(0)) if m else 0
    return value or clock()


def _parse_tags(raw: str, text: str) -> tuple[str, ...]:
    """A non-empty tags cell is authoritative, even if it holds only separators."""
    if raw:
        return tuple(t for t in (part.strip() for part in raw.split(TAG_SEPARATOR)) if t)
    return extract_tags(text)


def _unquote(field: str) -> str:
    """Trim, then drop surrounding quotes and undouble inner ones."""
    field = field.strip()
    if field.startswith('"') and field.endswith('"'):
        field = field[1:-1].replace('""', '"')
    return field


def split_row(line: str) -> list[str]:
    """One CSV line -> field values. A stray quote never spills into the next line."""
    return [_unquote(f) for f in _FIELD_SPLIT_RE.split(line)]


def _read_header(line: str) -> list[str]:
    names = [h.strip().lower() for h in line.split(",")]
    missing = [c for c in REQUIRED_COLUMNS if c not in names]
    if missing:
        raise MalformedInputError(
            f"CSV file is missing required headers: {', '.join(missing)}. "
            f"Expected at least: {', '.join(REQUIRED_COLUMNS)}."
        )
    return names


def _role_for_row(row: dict[str, str], line_no: int) -> TaskRole:
    is_for_today = _parse_bool(row.get("isfortoday", ""))
    is_recurring = _parse_bool(row.get("isrecurring", ""))
    if is_for_today and is_recurring:
        logger.warning("CSV line %d: isForToday and isRecurring both true; importing as a today task.", line_no)
    return TaskRole.from_flags(is_for_today, is_recurring)


def parse_csv(
    text: str,
    *,
    mode: ImportMode = ImportMode.REPLACE,
    new_id: IdFactory = new_task_id,
    clock: Clock = now_ms,
) -> ParseResult:
    """
    Parse CSV text into new Task records, one line per row.

    Raises MalformedInputError if the text is empty or the header has no `text`
    column. Rows without a usable `text` value are skipped, not fatal.
    """
    if not (text or "").strip():
        raise MalformedInputError("CSV file is empty or has no header.")

    lines = _LINE_SPLIT_RE.split(text)
    names = _read_header(lines[0])

    tasks: list[Task] = []
    skipped = 0

    for line_no, raw_line in enumerate(lines[1:], start=2):
        line = raw_line.strip()
        if not line:
            continue

        fields = split_row(line)
        row = {name: (fields[i] if i < len(fields) else "") for i, name in enumerate(names)}
        task_text = row.get("text", "")
        if not task_text:
            skipped += 1
            logger.warning("Skipping CSV line %d: missing text field.", line_no)
            continue

        if mode is ImportMode.RECURRING:
            role = TaskRole.TEMPLATE
            completed = False
        else:
            role = _role_for_row(row, line_no)
            completed = _parse_bool(row.get("completed", ""))

        tasks.append(
            Task(
                id=new_id(),
                text=task_text,
                role=role,
                completed=completed,
                created_at=_parse_created_at(row.get("createdat", ""), clock),
                tags=_parse_tags(row.get("tags", ""), task_text),
            )
        )

    logger.debug("Parsed CSV mode=%s tasks=%d skipped=%d", mode.value, len(tasks), skipped)
    return ParseResult(tasks=tuple(tasks), skipped=skipped)
