"""
Spreadsheet host driving a desktop Excel instance through xlwings.

One hidden Excel application is started per batch, with alerts and screen
updating switched off.  Workbooks are opened read-only, without updating
links and ignoring the "read-only recommended" prompt, so nothing blocks
on a dialog.  Protected workbooks are opened with the batch password.

Used ranges and Ctrl+Arrow navigation come straight from Excel
(``Sheet.used_range`` / ``Range.end``); row and column reads are done in
one call each to keep COM round-trips down.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Optional

import xlwings as xw

from dto.coordinate import CellCoordinate, UsedRange
from hosts.constants import excel_visible
from hosts.service import OpenWorkbook, SheetView, SpreadsheetHost
from utils.navigation import Direction

logger = logging.getLogger(__name__)


class ExcelSheet(SheetView):
    def __init__(self, sheet: "xw.Sheet"):
        self._sheet = sheet

    @property
    def name(self) -> str:
        return self._sheet.name

    def used_range(self) -> UsedRange:
        rng = self._sheet.used_range
        rows, cols = rng.shape
        return UsedRange(
            first_row=rng.row,
            first_column=rng.column,
            row_count=rows,
            column_count=cols,
        )

    def cell_value(self, coord: CellCoordinate) -> Any:
        return self._sheet.range((coord.row, coord.column)).value

    def row_values(self, row: int, first_column: int, last_column: int) -> List[Any]:
        rng = self._sheet.range((row, first_column), (row, last_column))
        return rng.options(ndim=1).value

    def column_values(self, column: int, first_row: int, last_row: int) -> List[Any]:
        rng = self._sheet.range((first_row, column), (last_row, column))
        return rng.options(ndim=1).value

    def run_end(self, start: CellCoordinate, direction: Direction) -> CellCoordinate:
        target = self._sheet.range((start.row, start.column)).end(direction)
        return CellCoordinate(row=target.row, column=target.column)


class ExcelWorkbook(OpenWorkbook):
    def __init__(self, book: "xw.Book", path: Path):
        self._book = book
        self.path = path

    def sheets(self) -> List[SheetView]:
        return [ExcelSheet(sheet) for sheet in self._book.sheets]

    def close(self) -> None:
        if self._book is not None:
            self._book.close()
            self._book = None
            logger.debug("Closed workbook %s", self.path)


class ExcelHost(SpreadsheetHost):
    name = "excel"

    def __init__(self, visible: Optional[bool] = None):
        if visible is None:
            visible = excel_visible()
        logger.info("Starting Excel application (visible=%s)", visible)
        self._app = xw.App(visible=visible, add_book=False)
        try:
            self._app.display_alerts = False
            self._app.screen_updating = False
        except Exception:
            self._app.quit()
            raise

    def open_workbook(self, path: Path, password: Optional[str] = None) -> OpenWorkbook:
        logger.info("Opening workbook: %s", path)
        book = self._app.books.open(
            str(path),
            update_links=False,
            read_only=True,
            ignore_read_only_recommended=True,
            password=password,
        )
        return ExcelWorkbook(book, path)

    def quit(self) -> None:
        if self._app is None:
            return
        logger.info("Quitting Excel application")
        try:
            self._app.quit()
        finally:
            self._app = None
