"""
WorkbookInspector — turns one input item into the records of its sheets.

The workbook is the only resource owned here: it is opened per call and
closed on every exit path before ``process`` returns.
"""

from __future__ import annotations

import logging
import traceback
from pathlib import Path
from typing import Any, List, Optional

from dto.file_ref import resolve_input
from dto.options import InspectOptions
from dto.output import SheetRecord
from errors import InputFileNotFoundError, WorkbookReadError
from extractors.sheet import SheetInspector
from hosts.service import OpenWorkbook, SpreadsheetHost

logger = logging.getLogger(__name__)


class WorkbookInspector:
    def __init__(
        self,
        host: SpreadsheetHost,
        options: InspectOptions,
        password: Optional[str] = None,
    ):
        self._host = host
        self._password = password
        self._sheet_inspector = SheetInspector(options)

    def process(self, item: Any) -> List[SheetRecord]:
        """
        Return one record per sheet of *item*, in the workbook's sheet order.

        Raises ``InputFileNotFoundError`` for a path that does not exist and
        ``WorkbookReadError`` when the host cannot open or read the file.
        Items that are not file references yield an empty list.
        """
        resolved = resolve_input(item)
        if resolved.kind == "ignored":
            logger.debug("Skipping non-file input: %r", item)
            return []
        if resolved.kind == "missing":
            raise InputFileNotFoundError(resolved.path)

        file_ref = resolved.file
        workbook: Optional[OpenWorkbook] = None
        try:
            workbook = self._host.open_workbook(Path(file_ref.path), password=self._password)
            records = [
                self._sheet_inspector.inspect(sheet, file_ref)
                for sheet in workbook.sheets()
            ]
        except Exception as exc:
            raise WorkbookReadError(
                file_ref.path, str(exc) or type(exc).__name__, traceback.format_exc()
            ) from exc
        finally:
            if workbook is not None:
                self._close(workbook, file_ref.path)

        logger.info("  -> %d sheet(s) in %s", len(records), file_ref.name)
        return records

    @staticmethod
    def _close(workbook: OpenWorkbook, path: str) -> None:
        try:
            workbook.close()
        except Exception:
            logger.warning("Failed to close workbook %s", path, exc_info=True)
