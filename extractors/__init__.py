from extractors.sheet import SheetInspector
from extractors.workbook import WorkbookInspector

__all__ = [
    "SheetInspector",
    "WorkbookInspector",
]
