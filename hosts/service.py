from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List, Optional

from dto.coordinate import CellCoordinate, UsedRange
from utils.navigation import Direction, extend_to_run_end, find_label


class SheetView(ABC):
    """
    Read access to one worksheet of an open workbook.

    Subclasses implement the four read methods; ``find_label`` and
    ``run_end`` fall back to the generic navigation primitives and may be
    overridden when the host has a native equivalent.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def used_range(self) -> UsedRange:
        """Rectangle bounded by the outermost formatted or valued cells."""
        ...

    @abstractmethod
    def cell_value(self, coord: CellCoordinate) -> Any:
        """Raw value of one cell; ``None`` when empty."""
        ...

    @abstractmethod
    def row_values(self, row: int, first_column: int, last_column: int) -> List[Any]:
        ...

    @abstractmethod
    def column_values(self, column: int, first_row: int, last_row: int) -> List[Any]:
        ...

    def find_label(self, text: str) -> Optional[CellCoordinate]:
        return find_label(self, text)

    def run_end(self, start: CellCoordinate, direction: Direction) -> CellCoordinate:
        return extend_to_run_end(self, start, direction)


class OpenWorkbook(ABC):
    """A workbook opened read-only by a host.  Always ``close()`` it."""

    @abstractmethod
    def sheets(self) -> List[SheetView]:
        """Sheets in the host's native order."""
        ...

    @abstractmethod
    def close(self) -> None:
        ...

    def __enter__(self) -> "OpenWorkbook":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class SpreadsheetHost(ABC):
    """
    Base class for spreadsheet hosts.

    A host is started once per batch (by constructing it), opens one
    workbook at a time and is released with ``quit()``.
    """

    name: str = "host"

    @abstractmethod
    def open_workbook(self, path: Path, password: Optional[str] = None) -> OpenWorkbook:
        """
        Open *path* read-only, without updating external links and without
        stopping on a "read-only recommended" prompt.  *password* is only
        used when the file is protected.
        """
        ...

    @abstractmethod
    def quit(self) -> None:
        ...
