"""Extract task records from parsed outline documents."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor

from orgtaskcsv import log
from orgtaskcsv.errors import MalformedTimestampError
from orgtaskcsv.org.model import Node, OrgDocument, TimeRange
from orgtaskcsv.tasks.model import TaskRecord, TodoStatus
from orgtaskcsv.timefmt import format_end, format_start


def _positive(value: int | None) -> int | None:
    if value is None or value < 1:
        return None
    return value


def _status(node: Node) -> TodoStatus:
    if node.todo_type == TodoStatus.DONE.value:
        return TodoStatus.DONE
    return TodoStatus.TODO


def _safe_format(
    fmt: Callable[[TimeRange | None], str | None],
    value: TimeRange | None,
    node: Node,
    field_name: str,
) -> str | None:
    """Format *value*, treating a malformed timestamp as absent."""
    try:
        return fmt(value)
    except MalformedTimestampError as exc:
        log.debug(f"Dropping {field_name} of {node.title!r}: {exc}")
        return None


def build_record(
    doc: OrgDocument,
    index: int,
    *,
    scheduled_end_from_start: bool = False,
) -> TaskRecord | None:
    """Return the record for headline *index*, or ``None`` if it is not a task."""
    node = doc.nodes[index]
    if not node.is_headline or not node.todo_keyword:
        return None

    parent = doc.nearest_headline(index)
    scheduled_end_fmt = format_start if scheduled_end_from_start else format_end

    return TaskRecord(
        task=node.title,
        parents=parent.title if parent is not None else None,
        level=_positive(node.level),
        priority=_positive(node.priority),
        tags=":".join(node.tags),
        todo_keyword=node.todo_keyword,
        status=_status(node),
        scheduled_start=_safe_format(format_start, node.scheduled, node, "scheduled_start"),
        scheduled_end=_safe_format(scheduled_end_fmt, node.scheduled, node, "scheduled_end"),
        deadline_start=_safe_format(format_start, node.deadline, node, "deadline_start"),
        deadline_end=_safe_format(format_end, node.deadline, node, "deadline_end"),
        closed=_safe_format(format_start, node.closed, node, "closed"),
    )


def extract_tasks(
    doc: OrgDocument,
    *,
    scheduled_end_from_start: bool = False,
) -> list[TaskRecord]:
    """Return one record per todo headline of *doc*, in document order.

    Headlines without a todo keyword are skipped but their subtrees are
    still visited.
    """
    records: list[TaskRecord] = []
    for index, _node in doc.walk():
        record = build_record(
            doc, index, scheduled_end_from_start=scheduled_end_from_start
        )
        if record is not None:
            records.append(record)
    log.debug(f"{doc.source or '<document>'}: {len(records)} task(s)")
    return records


def extract_all(
    docs: Sequence[OrgDocument],
    *,
    max_workers: int = 1,
    scheduled_end_from_start: bool = False,
) -> list[TaskRecord]:
    """Extract every document and concatenate in the order given.

    With ``max_workers > 1`` documents are extracted concurrently; results
    are still merged by source position.
    """

    def _one(doc: OrgDocument) -> list[TaskRecord]:
        return extract_tasks(doc, scheduled_end_from_start=scheduled_end_from_start)

    if max_workers > 1 and len(docs) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            per_source = list(pool.map(_one, docs))
    else:
        per_source = [_one(doc) for doc in docs]

    return [record for records in per_source for record in records]
