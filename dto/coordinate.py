"""
Cell coordinates and used-range extents.

All indices are 1-based, matching both Excel and openpyxl.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from openpyxl.utils import get_column_letter, column_index_from_string
from openpyxl.utils.cell import coordinate_from_string
from openpyxl.utils.exceptions import CellCoordinatesException

# Sheet limits of the xlsx format (Excel 2007+).
MAX_ROWS = 1_048_576
MAX_COLUMNS = 16_384


class CellCoordinate(BaseModel):
    row: int = Field(ge=1)
    column: int = Field(ge=1)

    model_config = {"frozen": True}

    @classmethod
    def from_a1(cls, text: str) -> "CellCoordinate":
        """Parse 'AB12' (or '$AB$12') → CellCoordinate(row=12, column=28)."""
        cleaned = (text or "").replace("$", "").strip().upper()
        try:
            col_str, row = coordinate_from_string(cleaned)
        except CellCoordinatesException:
            raise ValueError(f"Invalid cell coordinate: {text!r}") from None
        column = column_index_from_string(col_str)
        if row > MAX_ROWS or column > MAX_COLUMNS:
            raise ValueError(f"Cell coordinate out of sheet bounds: {text!r}")
        return cls(row=row, column=column)

    @property
    def a1(self) -> str:
        return f"{get_column_letter(self.column)}{self.row}"

    def __str__(self) -> str:
        return self.a1


class UsedRange(BaseModel):
    """The rectangle bounded by the outermost formatted or valued cells."""

    first_row: int = Field(ge=1)
    first_column: int = Field(ge=1)
    row_count: int = Field(ge=1)
    column_count: int = Field(ge=1)

    @property
    def last_row(self) -> int:
        return self.first_row + self.row_count - 1

    @property
    def last_column(self) -> int:
        return self.first_column + self.column_count - 1

    @property
    def bottom_right(self) -> CellCoordinate:
        return CellCoordinate(row=self.last_row, column=self.last_column)

    def contains(self, coord: CellCoordinate) -> bool:
        return (
            self.first_row <= coord.row <= self.last_row
            and self.first_column <= coord.column <= self.last_column
        )
