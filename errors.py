"""
Exceptions raised while listing sheets.

File-scoped errors (``InputFileNotFoundError``, ``WorkbookReadError``) are
turned into ``Diagnostic`` entries by the pipeline and never abort a batch.
``HostStartError`` is the only batch-level failure.
"""

from __future__ import annotations

from typing import Optional

from dto.output import Diagnostic


class SheetListerError(Exception):
    """Base class for all sheet-lister errors."""


class HostStartError(SheetListerError):
    """The spreadsheet host could not be started."""


class InputFileNotFoundError(SheetListerError):
    def __init__(self, path: str):
        super().__init__(f"File not found: {path}")
        self.path = path

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(kind="file_not_found", path=self.path, message=str(self))


class WorkbookReadError(SheetListerError):
    """The host failed to open the workbook, or a sheet could not be read."""

    def __init__(self, path: str, detail: str, trace: Optional[str] = None):
        super().__init__(f"Failed to read {path}: {detail}")
        self.path = path
        self.detail = detail
        self.trace = trace

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(
            kind="read_failure",
            path=self.path,
            message=str(self),
            trace=self.trace,
        )
