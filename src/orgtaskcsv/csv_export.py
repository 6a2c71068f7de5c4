"""CSV rendering of task records."""

from __future__ import annotations

from collections.abc import Iterable

from orgtaskcsv.tasks.model import TaskRecord

COLUMNS: tuple[str, ...] = (
    "task",
    "parents",
    "level",
    "priority",
    "todo",
    "status",
    "scheduled_start",
    "scheduled_end",
    "deadline_start",
    "deadline_end",
    "closed",
    "tags",
)

DEFAULT_HEADER = ",".join(COLUMNS)

_NEEDS_QUOTES = (",", '"', "\n")


def escape_field(value: str | None) -> str:
    """Quote *value* if it contains a comma, a double quote or a newline."""
    if not value:
        return ""
    if any(ch in value for ch in _NEEDS_QUOTES):
        return '"' + value.replace('"', '""') + '"'
    return value


def _text(value: object | None) -> str:
    return "" if value is None else str(value)


def render_row(record: TaskRecord) -> str:
    """Render *record* as one CSV line without its terminator.

    The todo keyword is written as-is; only task, parents and tags are escaped.
    """
    fields = [
        escape_field(record.task),
        escape_field(record.parents),
        _text(record.level),
        _text(record.priority),
        record.todo_keyword,
        record.status.value,
        _text(record.scheduled_start),
        _text(record.scheduled_end),
        _text(record.deadline_start),
        _text(record.deadline_end),
        _text(record.closed),
        escape_field(record.tags),
    ]
    return ",".join(fields)


def render_csv(records: Iterable[TaskRecord], header: str = DEFAULT_HEADER) -> str:
    """Return the header line followed by one line per record, each ending in ``\\n``."""
    lines = [header]
    lines.extend(render_row(record) for record in records)
    return "".join(f"{line}\n" for line in lines)
