"""
Sheet navigation primitives shared by every host.

They only rely on the read methods of ``SheetView`` (``used_range``,
``cell_value``, ``row_values``, ``column_values``), so a host without a
native equivalent gets them for free and a host with one (Excel's
``Range.End``) can override them on its sheet class.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Literal, Optional, Tuple

from dto.coordinate import MAX_COLUMNS, MAX_ROWS, CellCoordinate, UsedRange

if TYPE_CHECKING:
    from hosts.service import SheetView

logger = logging.getLogger(__name__)

Direction = Literal["right", "down", "left", "up"]

# (row step, column step)
_STEPS: Dict[str, Tuple[int, int]] = {
    "right": (0, 1),
    "down": (1, 0),
    "left": (0, -1),
    "up": (-1, 0),
}


def is_blank(value: Any) -> bool:
    """``None`` and empty strings are blank; 0 and False are values."""
    return value is None or (isinstance(value, str) and value == "")


def _row_text(values) -> str:
    return "".join("" if is_blank(v) else str(v) for v in values)


# ------------------------------------------------------------------
# Label search
# ------------------------------------------------------------------

def find_label(sheet: "SheetView", text: str) -> Optional[CellCoordinate]:
    """
    Return the first cell of the used range (row-major) whose trimmed
    text equals *text*, ignoring case.  ``None`` if there is none.
    """
    wanted = (text or "").strip().casefold()
    if not wanted:
        return None

    used = sheet.used_range()
    for row in range(used.first_row, used.last_row + 1):
        values = sheet.row_values(row, used.first_column, used.last_column)
        for offset, value in enumerate(values):
            if is_blank(value):
                continue
            if str(value).strip().casefold() == wanted:
                found = CellCoordinate(row=row, column=used.first_column + offset)
                logger.debug("Label %r found at %s", text, found.a1)
                return found
    return None


# ------------------------------------------------------------------
# Ctrl+Arrow navigation
# ------------------------------------------------------------------

def _edge(direction: str) -> int:
    if direction == "right":
        return MAX_COLUMNS
    if direction == "down":
        return MAX_ROWS
    return 1


def extend_to_run_end(
    sheet: "SheetView",
    start: CellCoordinate,
    direction: Direction,
) -> CellCoordinate:
    """
    Move from *start* the way Excel's Ctrl+Arrow does.

    * start and its neighbour are both filled → last filled cell of the run
    * otherwise → next filled cell in *direction*, or the sheet edge when
      there is none
    """
    if direction not in _STEPS:
        raise ValueError(f"Unknown direction: {direction!r}")

    d_row, d_col = _STEPS[direction]
    horizontal = d_col != 0
    edge = _edge(direction)
    used = sheet.used_range()
    # Past this index every cell is blank, so the scan can jump to the edge.
    data_limit = used.last_column if horizontal else used.last_row
    forward = (d_row + d_col) > 0

    def position(coord: CellCoordinate) -> int:
        return coord.column if horizontal else coord.row

    def step(coord: CellCoordinate) -> CellCoordinate:
        return CellCoordinate(row=coord.row + d_row, column=coord.column + d_col)

    def at_edge(coord: CellCoordinate) -> bool:
        return position(coord) == edge

    def filled(coord: CellCoordinate) -> bool:
        if forward and position(coord) > data_limit:
            return False
        return not is_blank(sheet.cell_value(coord))

    def jump_to_edge(coord: CellCoordinate) -> CellCoordinate:
        if horizontal:
            return CellCoordinate(row=coord.row, column=edge)
        return CellCoordinate(row=edge, column=coord.column)

    if at_edge(start):
        return start

    current = start
    if filled(current) and filled(step(current)):
        current = step(current)
        while not at_edge(current) and filled(step(current)):
            current = step(current)
        return current

    current = step(current)
    while not filled(current):
        if at_edge(current):
            return current
        if forward and position(current) >= data_limit:
            return jump_to_edge(current)
        current = step(current)
    return current


# ------------------------------------------------------------------
# Value-only extents
# ------------------------------------------------------------------

def last_value_row(sheet: "SheetView", used: UsedRange) -> int:
    """Scan upward from the bottom of *used*; 1 when every row is blank."""
    for row in range(used.last_row, used.first_row - 1, -1):
        values = sheet.row_values(row, used.first_column, used.last_column)
        if _row_text(values):
            return row
    return 1


def last_value_column(sheet: "SheetView", used: UsedRange) -> int:
    """Scan leftward from the right edge of *used*; 1 when every column is blank."""
    for column in range(used.last_column, used.first_column - 1, -1):
        values = sheet.column_values(column, used.first_row, used.last_row)
        if _row_text(values):
            return column
    return 1
