"""Configuration defaults, env vars, and runtime options for org-task-csv."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from orgtaskcsv.csv_export import DEFAULT_HEADER


VERSION = "0.3.0"

SOURCES_ENV = "ORG_TASK_CSV_FILES"
CURRENT_ENV = "ORG_TASK_CSV_CURRENT"


def _sources_from_env() -> list[str]:
    raw = os.environ.get(SOURCES_ENV, "")
    return [item.strip() for item in raw.split(os.pathsep) if item.strip()]


@dataclass
class Config:
    """Runtime configuration passed explicitly into the pipeline.

    ``sources`` and ``current_source`` fall back to the ``ORG_TASK_CSV_FILES``
    (``os.pathsep``-separated) and ``ORG_TASK_CSV_CURRENT`` environment
    variables when left empty.
    """

    # Sources
    sources: list[str] = field(default_factory=list)
    current_source: str = ""

    # Output
    header: str = DEFAULT_HEADER
    scheduled_end_from_start: bool = False

    # Execution
    max_workers: int = 1

    # Misc
    verbose: bool = False

    def __post_init__(self) -> None:
        if not self.sources:
            self.sources = _sources_from_env()
        if not self.current_source:
            self.current_source = os.environ.get(CURRENT_ENV, "").strip()
        if self.max_workers < 1:
            self.max_workers = 1
