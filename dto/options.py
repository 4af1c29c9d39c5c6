from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, field_validator, model_validator

from dto.coordinate import CellCoordinate

# Field names written by the last-cell steps.
LAST_CELL_FIELDS = ("LastRow", "LastColumn")


class InspectOptions(BaseModel):
    """Per-invocation options; every enrichment step is off by default."""

    # Prompt once at batch start; the answer is used for every file.
    prompt_password: bool = False

    # Formatted-or-valued used range → LastRow / LastColumn
    find_last_cell: bool = False
    # Values only; wins over find_last_cell when both are set
    find_last_cell_ignoring_formatted: bool = False

    # field name → A1 coordinate
    cell_by_position: Dict[str, str] = {}
    # field name → label text; value read right of / below the label
    cell_by_left_title: Dict[str, str] = {}
    cell_by_top_title: Dict[str, str] = {}

    @field_validator("cell_by_position")
    @classmethod
    def _check_coordinates(cls, value: Dict[str, str]) -> Dict[str, str]:
        for field_name, text in value.items():
            try:
                CellCoordinate.from_a1(text)
            except ValueError as exc:
                raise ValueError(f"{field_name}: {exc}") from exc
        return value

    @model_validator(mode="after")
    def _check_unique_field_names(self) -> "InspectOptions":
        # Records hold one flat mapping, so a name may only be produced once.
        seen = set()
        if self.find_last_cell or self.find_last_cell_ignoring_formatted:
            seen.update(LAST_CELL_FIELDS)
        for mapping in (self.cell_by_position, self.cell_by_left_title, self.cell_by_top_title):
            for field_name in mapping:
                if field_name in seen:
                    raise ValueError(f"Duplicate field name: {field_name!r}")
                seen.add(field_name)
        return self

    def positions(self) -> Dict[str, CellCoordinate]:
        return {
            field_name: CellCoordinate.from_a1(text)
            for field_name, text in self.cell_by_position.items()
        }
