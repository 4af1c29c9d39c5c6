import os

from typing import Literal

# Read on every call so values loaded from a .env file after import apply.


def sheet_host() -> Literal["openpyxl", "excel"]:
    return os.getenv("SHEET_HOST", "openpyxl").lower()


def excel_visible() -> bool:
    """Show the Excel window while a batch runs (debugging only)."""
    return os.getenv("EXCEL_VISIBLE", "0").lower() in ("1", "true", "yes")
