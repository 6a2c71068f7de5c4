"""org-task-csv CLI: export outline tasks as CSV.

Installed as the ``org-task-csv`` console_script.
"""

from __future__ import annotations

import sys

import click
from rich.table import Table
from rich.text import Text

from orgtaskcsv import __version__
from orgtaskcsv import log as glog
from orgtaskcsv.config import Config
from orgtaskcsv.csv_export import COLUMNS, render_csv
from orgtaskcsv.errors import OrgCsvError
from orgtaskcsv.pipeline import collect_records, resolve_sources, write_csv
from orgtaskcsv.tasks.model import TaskRecord


CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


def _record_cells(record: TaskRecord) -> list[Text]:
    values = [
        record.task,
        record.parents,
        record.level,
        record.priority,
        record.todo_keyword,
        record.status.value,
        record.scheduled_start,
        record.scheduled_end,
        record.deadline_start,
        record.deadline_end,
        record.closed,
        record.tags,
    ]
    return [Text("" if v is None else str(v)) for v in values]


def _show_table(records: list[TaskRecord]) -> None:
    """Render *records* as a table on the log console."""
    table = Table(show_lines=False, header_style="bold")
    for name in COLUMNS:
        table.add_column(name, overflow="fold")
    for record in records:
        table.add_row(*_record_cells(record))
    glog.console.print(table)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.argument("files", nargs=-1, type=click.Path())
@click.option("--current", is_flag=True, help="Export only the current document (ORG_TASK_CSV_CURRENT)")
@click.option("-o", "--output", default="", help="Write CSV to this path instead of stdout")
@click.option("--view", is_flag=True, help="Show the tasks as a table")
@click.option("--header", default="", help="Override the CSV header line")
@click.option("-j", "--jobs", type=int, default=1, help="Extract documents in N worker threads")
@click.option(
    "--legacy-scheduled-end/--fix-scheduled-end",
    default=False,
    help="Fill scheduled_end from the start of the scheduled range (old behavior)",
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug output")
@click.version_option(__version__, prog_name="org-task-csv")
def main(
    files: tuple[str, ...],
    current: bool,
    output: str,
    view: bool,
    header: str,
    jobs: int,
    legacy_scheduled_end: bool,
    verbose: bool,
) -> None:
    """Export TODO headlines of Org files as CSV.

    With no FILES, the files listed in ORG_TASK_CSV_FILES are used.

    \b
    EXAMPLES:
      org-task-csv plan.org work.org           # CSV on stdout
      org-task-csv -o tasks.csv                # configured files to tasks.csv
      org-task-csv --current --view            # table view of one file
    """
    glog.set_verbose(verbose)
    to_stdout = not output and not view
    glog.use_stderr(to_stdout)

    cfg = Config(
        max_workers=jobs,
        scheduled_end_from_start=legacy_scheduled_end,
        verbose=verbose,
    )
    if header:
        cfg.header = header

    try:
        sources = resolve_sources(cfg, files, current=current)
        glog.debug(f"Sources: {', '.join(str(s) for s in sources)}")
        records = collect_records(cfg, sources)
        text = render_csv(records, header=cfg.header)

        if output:
            path = write_csv(text, output)
            glog.success(f"Wrote {len(records)} task(s) to {path}")
        if view:
            _show_table(records)
        if to_stdout:
            click.echo(text, nl=False)
    except OrgCsvError as exc:
        glog.error(str(exc))
        sys.exit(1)
