"""
Top-level output DTOs.

    SheetRecord
      ├─ sheet_name
      ├─ file: FileReference
      └─ fields: ordered {caller field name: value}
           e.g. {"LastRow": 10, "LastColumn": 5, "Title": "Hello"}

    Diagnostic: one entry on the error channel (never a record)
"""

from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel

from dto.file_ref import FileReference


class SheetRecord(BaseModel):
    """Structured output for a single worksheet."""

    sheet_name: str
    file: FileReference
    # Insertion order is significant: last-cell fields first, then each
    # lookup group in request order.
    fields: Dict[str, Any] = {}

    def as_row(self) -> Dict[str, Any]:
        """Flatten into a single-level mapping for tabular consumers."""
        row: Dict[str, Any] = {"SheetName": self.sheet_name, "File": self.file.path}
        row.update(self.fields)
        return row


class Diagnostic(BaseModel):
    kind: Literal["file_not_found", "read_failure"]
    path: str
    message: str
    trace: Optional[str] = None
