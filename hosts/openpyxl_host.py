"""
In-process spreadsheet host backed by openpyxl.

Workbooks are loaded with cached values (``data_only=True``) and without
external links; nothing is ever saved back, which makes every open
effectively read-only.  openpyxl cannot decrypt password-protected files:
those fail to load and are reported as read failures.
"""

from __future__ import annotations

import logging
import warnings
from pathlib import Path
from typing import Any, List, Optional

import openpyxl
from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from dto.coordinate import CellCoordinate, UsedRange
from hosts.service import OpenWorkbook, SheetView, SpreadsheetHost

logger = logging.getLogger(__name__)


class OpenpyxlSheet(SheetView):
    def __init__(self, ws: Worksheet):
        self._ws = ws

    @property
    def name(self) -> str:
        return self._ws.title

    def used_range(self) -> UsedRange:
        # openpyxl's dimension covers every cell present in the file,
        # including cells that only carry formatting.
        ws = self._ws
        return UsedRange(
            first_row=ws.min_row,
            first_column=ws.min_column,
            row_count=ws.max_row - ws.min_row + 1,
            column_count=ws.max_column - ws.min_column + 1,
        )

    def _in_bounds(self, row: int, column: int) -> bool:
        ws = self._ws
        return (
            ws.min_row <= row <= ws.max_row
            and ws.min_column <= column <= ws.max_column
        )

    def cell_value(self, coord: CellCoordinate) -> Any:
        # ws.cell() creates missing cells, which would grow the dimension.
        if not self._in_bounds(coord.row, coord.column):
            return None
        return self._ws.cell(row=coord.row, column=coord.column).value

    def row_values(self, row: int, first_column: int, last_column: int) -> List[Any]:
        return [
            self.cell_value(CellCoordinate(row=row, column=col))
            for col in range(first_column, last_column + 1)
        ]

    def column_values(self, column: int, first_row: int, last_row: int) -> List[Any]:
        return [
            self.cell_value(CellCoordinate(row=row, column=column))
            for row in range(first_row, last_row + 1)
        ]


class OpenpyxlWorkbook(OpenWorkbook):
    def __init__(self, workbook: Workbook, path: Path):
        self._workbook = workbook
        self.path = path

    def sheets(self) -> List[SheetView]:
        return [OpenpyxlSheet(ws) for ws in self._workbook.worksheets]

    def close(self) -> None:
        if self._workbook is not None:
            self._workbook.close()
            self._workbook = None
            logger.debug("Closed workbook %s", self.path)


class OpenpyxlHost(SpreadsheetHost):
    name = "openpyxl"

    def __init__(self) -> None:
        logger.info("Using in-process openpyxl host")

    def open_workbook(self, path: Path, password: Optional[str] = None) -> OpenWorkbook:
        if password:
            logger.debug(
                "openpyxl cannot decrypt workbooks; password ignored for %s", path
            )
        logger.info("Opening workbook: %s", path)
        with warnings.catch_warnings():
            # Unsupported-extension and read-only-recommended notices.
            warnings.simplefilter("ignore", UserWarning)
            workbook = openpyxl.load_workbook(
                str(path),
                data_only=True,
                keep_links=False,
            )
        return OpenpyxlWorkbook(workbook, path)

    def quit(self) -> None:
        logger.debug("openpyxl host released")
