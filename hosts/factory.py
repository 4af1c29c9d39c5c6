from typing import Optional

from hosts.constants import sheet_host
from hosts.service import SpreadsheetHost


def get_spreadsheet_host(kind: Optional[str] = None) -> SpreadsheetHost:
    """
    Start and return a SpreadsheetHost.

    The backend is chosen by *kind*, or by the SHEET_HOST env var:
      - "openpyxl"          → OpenpyxlHost  (default)
      - "excel" / "xlwings" → ExcelHost     (desktop Excel, Windows/macOS)
    """
    kind = (kind or sheet_host()).lower().strip()
    if kind == "openpyxl":
        from hosts.openpyxl_host import OpenpyxlHost

        return OpenpyxlHost()
    if kind in ("excel", "xlwings"):
        # Imported lazily: xlwings only drives Excel on Windows and macOS.
        from hosts.excel_host import ExcelHost

        return ExcelHost()
    raise ValueError(f"Unknown spreadsheet host: {kind!r}")
