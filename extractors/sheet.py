"""
SheetInspector — builds one ``SheetRecord`` per worksheet.

Enrichment steps, applied in this order (which is also the order of the
record's optional fields):
  1. Last used cell: formatted-or-valued, or value-only (value-only wins
     when both are requested).
  2. Direct cell lookups by A1 coordinate.
  3. Label lookups reading to the right of the label.
  4. Label lookups reading below the label.

Nothing here catches exceptions: a failing sheet aborts its workbook, and
the caller reports that as a read failure.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from dto.coordinate import CellCoordinate
from dto.file_ref import FileReference
from dto.options import LAST_CELL_FIELDS, InspectOptions
from dto.output import SheetRecord
from hosts.service import SheetView
from utils.navigation import Direction, is_blank, last_value_column, last_value_row

logger = logging.getLogger(__name__)

LAST_ROW_FIELD, LAST_COLUMN_FIELD = LAST_CELL_FIELDS


def _value_or_none(value: Any) -> Any:
    return None if is_blank(value) else value


# =====================================================================
# SheetInspector
# =====================================================================


class SheetInspector:
    """
    Applies the requested enrichment steps to a worksheet.

    Usage::

        inspector = SheetInspector(options)
        record = inspector.inspect(sheet, file_ref)
    """

    def __init__(self, options: InspectOptions):
        self.options = options
        self._positions = options.positions()
        if options.find_last_cell and options.find_last_cell_ignoring_formatted:
            logger.warning(
                "Both last-cell modes requested; using the value-only scan"
            )

    def inspect(self, sheet: SheetView, file_ref: FileReference) -> SheetRecord:
        fields: Dict[str, Any] = {}

        if self.options.find_last_cell_ignoring_formatted:
            fields.update(self.find_last_cell_ignoring_formatted(sheet))
        elif self.options.find_last_cell:
            fields.update(self.find_last_cell(sheet))

        for field_name, coord in self._positions.items():
            fields[field_name] = self.cell_by_position(sheet, coord)

        for field_name, label in self.options.cell_by_left_title.items():
            fields[field_name] = self.cell_by_title(sheet, label, "right")

        for field_name, label in self.options.cell_by_top_title.items():
            fields[field_name] = self.cell_by_title(sheet, label, "down")

        logger.debug("Sheet %r: %d field(s)", sheet.name, len(fields))
        return SheetRecord(sheet_name=sheet.name, file=file_ref, fields=fields)

    # ------------------------------------------------------------------
    # 1.  Last used cell
    # ------------------------------------------------------------------

    @staticmethod
    def find_last_cell(sheet: SheetView) -> Dict[str, int]:
        """Bottom-right of the used range, formatting included."""
        bottom_right = sheet.used_range().bottom_right
        return {LAST_ROW_FIELD: bottom_right.row, LAST_COLUMN_FIELD: bottom_right.column}

    @staticmethod
    def find_last_cell_ignoring_formatted(sheet: SheetView) -> Dict[str, int]:
        """
        Bottom-right of the cells that actually hold values.

        Rows are scanned upward and columns leftward from the edges of the
        used range; an axis with no value at all reports 1.
        """
        used = sheet.used_range()
        return {
            LAST_ROW_FIELD: last_value_row(sheet, used),
            LAST_COLUMN_FIELD: last_value_column(sheet, used),
        }

    # ------------------------------------------------------------------
    # 2.  Cell lookups
    # ------------------------------------------------------------------

    @staticmethod
    def cell_by_position(sheet: SheetView, coord: CellCoordinate) -> Any:
        return _value_or_none(sheet.cell_value(coord))

    @staticmethod
    def cell_by_title(sheet: SheetView, label: str, direction: Direction) -> Optional[Any]:
        """
        Value of the cell reached by Ctrl+Arrow from the cell holding
        *label*.  ``None`` when the label is not on the sheet.
        """
        found = sheet.find_label(label)
        if found is None:
            logger.debug("Label %r not found on sheet %r", label, sheet.name)
            return None
        target = sheet.run_end(found, direction)
        return _value_or_none(sheet.cell_value(target))
