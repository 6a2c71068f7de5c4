"""Task record produced for each todo headline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TodoStatus(str, Enum):
    TODO = "todo"
    DONE = "done"


@dataclass(frozen=True)
class TaskRecord:
    task: str
    todo_keyword: str
    status: TodoStatus = TodoStatus.TODO
    parents: str | None = None
    level: int | None = None
    priority: int | None = None
    tags: str = ""
    scheduled_start: str | None = None
    scheduled_end: str | None = None
    deadline_start: str | None = None
    deadline_end: str | None = None
    closed: str | None = None
