"""Logging utilities with colored output via Rich."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

console = Console(highlight=False)
_err_console = Console(highlight=False, stderr=True)

_verbose = False
_stdout_console = console


def set_verbose(enabled: bool) -> None:
    global _verbose
    _verbose = enabled


def use_stderr(enabled: bool = True) -> None:
    """Send status output to stderr so stdout carries only CSV."""
    global console
    console = _err_console if enabled else _stdout_console


def info(msg: str) -> None:
    console.print(f"[blue]\\[INFO][/blue] {escape(msg)}")


def success(msg: str) -> None:
    console.print(f"[green]\\[OK][/green] {escape(msg)}")


def warn(msg: str) -> None:
    console.print(f"[yellow]\\[WARN][/yellow] {escape(msg)}")


def error(msg: str) -> None:
    _err_console.print(f"[red]\\[ERROR][/red] {escape(msg)}", soft_wrap=True)


def debug(msg: str) -> None:
    if _verbose:
        console.print(f"[dim]\\[DEBUG] {escape(msg)}[/dim]")
