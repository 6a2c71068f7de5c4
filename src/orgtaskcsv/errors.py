"""Error types raised by the export pipeline."""

from __future__ import annotations

from pathlib import Path


class OrgCsvError(RuntimeError):
    """Base class for failures the CLI reports to the user."""


class SourceResolutionError(OrgCsvError):
    """Raised when no source documents could be resolved."""


class SourceReadError(OrgCsvError):
    """Raised when a source document cannot be read."""

    def __init__(self, source: Path | str, reason: str) -> None:
        self.source = str(source)
        self.reason = reason
        super().__init__(f"Cannot read {self.source}: {reason}")


class OutputPathError(OrgCsvError):
    """Raised when the CSV text cannot be written to the target path."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot write {self.path}: {reason}")


class MalformedTimestampError(ValueError):
    """Raised when a timestamp bound cannot be rendered canonically."""
