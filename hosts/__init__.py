from hosts.service import OpenWorkbook, SheetView, SpreadsheetHost
from hosts.factory import get_spreadsheet_host

__all__ = [
    "OpenWorkbook",
    "SheetView",
    "SpreadsheetHost",
    "get_spreadsheet_host",
]
