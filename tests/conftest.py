"""Shared fixtures for org-task-csv tests.

File handling in tests:
- Use tmp_path for any file creation so tests are isolated and cleaned up.
- Use orgtaskcsv.io_utils read_text/write_text for consistent UTF-8 I/O.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from orgtaskcsv import log
from orgtaskcsv.config import CURRENT_ENV, SOURCES_ENV
from orgtaskcsv.io_utils import write_text
from orgtaskcsv.org.model import Bound, Node, NodeKind, OrgDocument, TimeRange


TRIP_ORG = """\
#+TITLE: Holidays
#+CATEGORY: personal

* TODO Plan trip :travel:
SCHEDULED: <2024-01-10 Wed>
** DONE Book flight
CLOSED: [2024-01-09 Tue 18:30]
"""

TRIP_CSV = (
    "task,parents,level,priority,todo,status,scheduled_start,scheduled_end,"
    "deadline_start,deadline_end,closed,tags\n"
    "Plan trip,,1,,TODO,todo,2024-01-10,2024-01-10,,,,travel\n"
    "Book flight,Plan trip,2,,DONE,done,,,,,2024-01-09 18:30:00,\n"
)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch):
    """Keep user configuration and logger state out of tests."""
    monkeypatch.delenv(SOURCES_ENV, raising=False)
    monkeypatch.delenv(CURRENT_ENV, raising=False)
    yield
    log.set_verbose(False)
    log.use_stderr(False)


def _stamp(
    year: int | None = None,
    month: int | None = None,
    day: int | None = None,
    hour: int | None = None,
    minute: int | None = None,
) -> TimeRange:
    bound = Bound(year, month, day, hour, minute)
    return TimeRange(start=bound, end=bound)


def _headline(
    title: str,
    todo: str = "",
    level: int = 1,
    todo_type: str | None = None,
    tags: list[str] | None = None,
    priority: int | None = None,
    scheduled: TimeRange | None = None,
    deadline: TimeRange | None = None,
    closed: TimeRange | None = None,
) -> Node:
    if todo and todo_type is None:
        todo_type = "done" if todo == "DONE" else "todo"
    return Node(
        kind=NodeKind.HEADLINE,
        title=title,
        level=level,
        todo_keyword=todo,
        todo_type=todo_type,
        tags=tags or [],
        priority=priority,
        scheduled=scheduled,
        deadline=deadline,
        closed=closed,
    )


@pytest.fixture
def make_stamp():
    """Factory fixture for single-stamp TimeRange values."""
    return _stamp


@pytest.fixture
def make_headline():
    """Factory fixture that creates headline Node instances."""
    return _headline


@pytest.fixture
def make_document():
    """Build an OrgDocument from ``(parent_index, node)`` pairs."""

    def _build(entries: list[tuple[int, Node]], source: str = "doc.org") -> OrgDocument:
        doc = OrgDocument(source=source)
        for parent, node in entries:
            doc.add(node, parent)
        return doc

    return _build


@pytest.fixture
def org_file(tmp_path: Path):
    """Write an Org file under tmp_path and return its path."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        write_text(path, text)
        return path

    return _write


@pytest.fixture
def trip_org() -> str:
    """Two-task document: a scheduled top-level task and a closed subtask."""
    return TRIP_ORG


@pytest.fixture
def trip_csv() -> str:
    """Expected export of :func:`trip_org`."""
    return TRIP_CSV
