from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

import openpyxl
import pytest
from openpyxl.styles import Font

from dto.coordinate import CellCoordinate, UsedRange
from hosts.openpyxl_host import OpenpyxlHost
from hosts.service import SheetView


class DictSheet(SheetView):
    """In-memory sheet: ``{"C3": "BY"}`` plus optional formatted-only cells."""

    def __init__(
        self,
        cells: Dict[str, Any],
        name: str = "Sheet1",
        formatted: Iterable[str] = (),
    ):
        self._name = name
        self._cells: Dict[Tuple[int, int], Any] = {}
        for a1, value in cells.items():
            coord = CellCoordinate.from_a1(a1)
            self._cells[(coord.row, coord.column)] = value
        self._extent = set(self._cells)
        for a1 in formatted:
            coord = CellCoordinate.from_a1(a1)
            self._extent.add((coord.row, coord.column))
        self.reads: List[CellCoordinate] = []

    @property
    def name(self) -> str:
        return self._name

    def used_range(self) -> UsedRange:
        if not self._extent:
            return UsedRange(first_row=1, first_column=1, row_count=1, column_count=1)
        rows = [r for r, _ in self._extent]
        cols = [c for _, c in self._extent]
        return UsedRange(
            first_row=min(rows),
            first_column=min(cols),
            row_count=max(rows) - min(rows) + 1,
            column_count=max(cols) - min(cols) + 1,
        )

    def cell_value(self, coord: CellCoordinate) -> Any:
        self.reads.append(coord)
        return self._cells.get((coord.row, coord.column))

    def row_values(self, row: int, first_column: int, last_column: int) -> List[Any]:
        return [self._cells.get((row, c)) for c in range(first_column, last_column + 1)]

    def column_values(self, column: int, first_row: int, last_row: int) -> List[Any]:
        return [self._cells.get((r, column)) for r in range(first_row, last_row + 1)]


class CountingHost(OpenpyxlHost):
    """openpyxl host that records its lifecycle calls."""

    instances: List["CountingHost"] = []

    def __init__(self) -> None:
        super().__init__()
        self.opened: List[Tuple[Path, Optional[str]]] = []
        self.quit_calls = 0
        CountingHost.instances.append(self)

    def open_workbook(self, path, password=None):
        self.opened.append((path, password))
        return super().open_workbook(path, password)

    def quit(self) -> None:
        self.quit_calls += 1
        super().quit()


@pytest.fixture
def counting_host_factory() -> Callable[[Optional[str]], CountingHost]:
    CountingHost.instances = []

    def factory(kind: Optional[str] = None) -> CountingHost:
        return CountingHost()

    return factory


@pytest.fixture
def make_workbook(tmp_path: Path) -> Callable[..., Path]:
    """
    Write an .xlsx file and return its path.

    ``sheets`` maps sheet name → ``{"A1": value}``; ``formatted`` maps
    sheet name → cells that only get a bold font.
    """

    def _make(
        name: str,
        sheets: Dict[str, Dict[str, Any]],
        formatted: Optional[Dict[str, Iterable[str]]] = None,
    ) -> Path:
        wb = openpyxl.Workbook()
        wb.remove(wb.active)
        for sheet_name, cells in sheets.items():
            ws = wb.create_sheet(sheet_name)
            for a1, value in cells.items():
                ws[a1] = value
            for a1 in (formatted or {}).get(sheet_name, ()):
                ws[a1].font = Font(bold=True)
        path = tmp_path / name
        wb.save(path)
        return path

    return _make


@pytest.fixture
def report_workbook(make_workbook) -> Path:
    """Three sheets; 'Data' has values to C7 and formatting out to E10."""
    return make_workbook(
        "report.xlsx",
        {
            "Summary": {"A1": "Title", "B1": "Hello", "C3": "BY", "E3": "Zono"},
            "Data": {"A1": "id", "B1": "amount", "C7": 42, "A7": 7},
            "Empty": {},
        },
        formatted={"Data": ["E10"]},
    )
