"""CLI tests: every flag runs and routes output where it should."""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import pytest
from rich.console import Console

from orgtaskcsv import log
from orgtaskcsv.cli import main
from orgtaskcsv.config import CURRENT_ENV, SOURCES_ENV


@pytest.fixture
def cli_runner():
    """Click CliRunner for invoking the CLI in-process."""
    from click.testing import CliRunner
    return CliRunner()


@pytest.fixture
def wide_console(monkeypatch):
    """Render tables wide enough that cells are not folded."""
    wide = Console(highlight=False, width=300)
    monkeypatch.setattr(log, "_stdout_console", wide)
    monkeypatch.setattr(log, "console", wide)
    return wide


# ── Help and version ──────────────────────────────────────────────────


class TestCliHelpAndVersion:
    def test_help_long(self, cli_runner):
        r = cli_runner.invoke(main, ["--help"])
        assert r.exit_code == 0
        assert "Export TODO headlines" in r.output

    def test_help_short(self, cli_runner):
        r = cli_runner.invoke(main, ["-h"])
        assert r.exit_code == 0

    def test_version(self, cli_runner):
        r = cli_runner.invoke(main, ["--version"])
        assert r.exit_code == 0
        assert "org-task-csv" in r.output


# ── Export to stdout / file ───────────────────────────────────────────


class TestCliExport:
    def test_files_to_stdout(self, cli_runner, org_file, trip_org, trip_csv):
        path = org_file("trip.org", trip_org)
        r = cli_runner.invoke(main, [str(path)])
        assert r.exit_code == 0, r.output
        assert r.output == trip_csv

    def test_configured_sources(self, cli_runner, org_file, monkeypatch):
        a = org_file("a.org", "* TODO a1\n")
        b = org_file("b.org", "* TODO b1\n")
        monkeypatch.setenv(SOURCES_ENV, f"{a}{os.pathsep}{b}")
        r = cli_runner.invoke(main, [])
        assert r.exit_code == 0, r.output
        assert [line.split(",")[0] for line in r.output.splitlines()[1:]] == ["a1", "b1"]

    def test_current_document(self, cli_runner, org_file, monkeypatch):
        org_file("other.org", "* TODO other\n")
        cur = org_file("cur.org", "* TODO here\n")
        monkeypatch.setenv(CURRENT_ENV, str(cur))
        r = cli_runner.invoke(main, ["--current"])
        assert r.exit_code == 0, r.output
        assert r.output.splitlines()[1].startswith("here,")

    def test_output_file_matches_stdout(self, cli_runner, org_file, trip_org, trip_csv, tmp_path: Path):
        path = org_file("trip.org", trip_org)
        out = tmp_path / "tasks.csv"
        r = cli_runner.invoke(main, [str(path), "-o", str(out)])
        assert r.exit_code == 0, r.output
        assert out.read_bytes() == trip_csv.encode("utf-8")
        assert "Wrote 2 task(s)" in r.output

    def test_header_override(self, cli_runner, org_file):
        path = org_file("x.org", "* TODO x\n")
        r = cli_runner.invoke(main, [str(path), "--header", "A,B"])
        assert r.exit_code == 0
        assert r.output.splitlines()[0] == "A,B"

    def test_jobs_keep_order(self, cli_runner, org_file):
        paths = [org_file(f"{n}.org", f"* TODO {n}\n") for n in ("p", "q", "r", "s")]
        r = cli_runner.invoke(main, ["-j", "4", *map(str, paths)])
        assert r.exit_code == 0
        assert [line[0] for line in r.output.splitlines()[1:]] == ["p", "q", "r", "s"]

    def test_legacy_scheduled_end_flag(self, cli_runner, org_file):
        path = org_file("m.org", "* TODO Meet\nSCHEDULED: <2024-01-10 Wed 10:00-12:00>\n")
        r = cli_runner.invoke(main, [str(path), "--legacy-scheduled-end"])
        assert r.exit_code == 0
        assert "2024-01-10 10:00:00,2024-01-10 10:00:00" in r.output


class TestCliView:
    def test_view_shows_table(self, cli_runner, org_file, trip_org, wide_console):
        path = org_file("trip.org", trip_org)
        r = cli_runner.invoke(main, [str(path), "--view"])
        assert r.exit_code == 0, r.output
        assert "Plan trip" in r.output
        assert "Book flight" in r.output
        assert "scheduled_start" in r.output
        assert "task,parents" not in r.output


# ── Errors ────────────────────────────────────────────────────────────


class TestCliErrors:
    def test_no_sources(self, cli_runner):
        r = cli_runner.invoke(main, [])
        assert r.exit_code == 1
        assert "No source documents" in r.output

    def test_current_without_config(self, cli_runner):
        r = cli_runner.invoke(main, ["--current"])
        assert r.exit_code == 1
        assert "ORG_TASK_CSV_CURRENT" in r.output

    def test_missing_file(self, cli_runner, tmp_path: Path):
        missing = tmp_path / "gone.org"
        r = cli_runner.invoke(main, [str(missing)])
        assert r.exit_code == 1
        assert "Cannot read" in r.output
        assert "gone.org" in r.output

    def test_bad_output_path_keeps_exit_code(self, cli_runner, org_file, tmp_path: Path):
        path = org_file("x.org", "* TODO x\n")
        r = cli_runner.invoke(main, [str(path), "-o", str(tmp_path / "no" / "dir" / "x.csv")])
        assert r.exit_code == 1
        assert "Cannot write" in r.output


def test_module_entry_point_help():
    r = subprocess.run(
        [sys.executable, "-m", "orgtaskcsv", "--help"],
        capture_output=True,
        text=True,
        timeout=30,
    )
    assert r.returncode == 0
    assert "org-task-csv" in r.stdout or "Export TODO headlines" in r.stdout
