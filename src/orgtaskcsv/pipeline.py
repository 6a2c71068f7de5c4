"""Pipeline entry points: resolve sources, export CSV text, persist it."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from orgtaskcsv import log
from orgtaskcsv.config import Config
from orgtaskcsv.csv_export import render_csv
from orgtaskcsv.errors import OutputPathError, SourceReadError, SourceResolutionError
from orgtaskcsv.io_utils import read_text, write_text
from orgtaskcsv.org.model import OrgDocument
from orgtaskcsv.org.parser import parse_document
from orgtaskcsv.tasks.extract import extract_all
from orgtaskcsv.tasks.model import TaskRecord


def resolve_sources(
    cfg: Config,
    files: Sequence[str | Path] = (),
    *,
    current: bool = False,
) -> list[Path]:
    """Return the ordered list of documents to export.

    Explicit *files* win, then the current document when *current* is set,
    then the configured default list.
    """
    if files:
        return [Path(f) for f in files]

    if current:
        if not cfg.current_source:
            raise SourceResolutionError(
                "No current document configured (set ORG_TASK_CSV_CURRENT)."
            )
        return [Path(cfg.current_source)]

    if not cfg.sources:
        raise SourceResolutionError(
            "No source documents given and none configured (set ORG_TASK_CSV_FILES)."
        )
    return [Path(s) for s in cfg.sources]


def load_document(path: Path) -> OrgDocument:
    """Read and parse one source. Read failures abort with :class:`SourceReadError`."""
    try:
        text = read_text(path)
    except FileNotFoundError:
        raise SourceReadError(path, "file not found") from None
    except IsADirectoryError:
        raise SourceReadError(path, "is a directory") from None
    except UnicodeDecodeError as exc:
        raise SourceReadError(path, f"not valid UTF-8 ({exc.reason})") from exc
    except OSError as exc:
        raise SourceReadError(path, exc.strerror or str(exc)) from exc
    log.debug(f"Parsing {path}")
    return parse_document(text, source=str(path))


def collect_records(cfg: Config, sources: Sequence[Path]) -> list[TaskRecord]:
    """Load every source in order and return the task records of all of them."""
    docs = [load_document(path) for path in sources]
    records = extract_all(
        docs,
        max_workers=cfg.max_workers,
        scheduled_end_from_start=cfg.scheduled_end_from_start,
    )
    log.debug(f"Collected {len(records)} task(s) from {len(docs)} document(s)")
    return records


def export_csv(cfg: Config, sources: Sequence[Path]) -> str:
    """Return the CSV text for all tasks of *sources*."""
    return render_csv(collect_records(cfg, sources), header=cfg.header)


def write_csv(text: str, path: str | Path) -> Path:
    """Write *text* to *path* byte-for-byte and return the path."""
    target = Path(path)
    try:
        write_text(target, text, newline="")
    except OSError as exc:
        raise OutputPathError(target, exc.strerror or str(exc)) from exc
    return target
