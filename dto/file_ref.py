"""
Input file references.

Raw input items (path strings, ``Path`` objects, ``FileReference``s, or
anything a caller happens to feed in) are classified into a
``ResolvedInput`` before any host is touched:

    file     → an existing regular file, ready to open
    missing  → a path that does not exist (reported as "file not found")
    ignored  → not a file reference at all; produces no records, no error
"""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel


class FileReference(BaseModel):
    """An existing file on disk plus the metadata reported with each record."""

    path: str
    name: str
    size: int
    last_modified: datetime

    @classmethod
    def from_path(cls, path: Path) -> "FileReference":
        resolved = path.resolve()
        stat = resolved.stat()
        return cls(
            path=str(resolved),
            name=resolved.name,
            size=stat.st_size,
            last_modified=datetime.fromtimestamp(stat.st_mtime),
        )


class ResolvedInput(BaseModel):
    kind: Literal["file", "missing", "ignored"]
    file: Optional[FileReference] = None
    path: Optional[str] = None


def resolve_input(item: Any) -> ResolvedInput:
    """Classify one raw input item."""
    if isinstance(item, FileReference):
        item = item.path

    if isinstance(item, (str, os.PathLike)):
        path = Path(item).expanduser()
        if not path.exists():
            return ResolvedInput(kind="missing", path=str(path))
        if not path.is_file():
            # Directories and other non-file entries are skipped silently.
            return ResolvedInput(kind="ignored", path=str(path))
        return ResolvedInput(kind="file", file=FileReference.from_path(path))

    return ResolvedInput(kind="ignored")
