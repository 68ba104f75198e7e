from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path

from .annotated_row import AnnotatedRow

"""WorkbookFile model and FileStatus enum.

A WorkbookFile is the processing context of one uploaded attendance
workbook: read -> annotate -> export. Failure at any step fails the whole
workbook and no partial export is kept.
"""

__all__ = [
    "FileStatus",
    "WorkbookFile",
]


class FileStatus(Enum):
    """pending → (success | failed)"""
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class WorkbookFile:
    """Result of processing one attendance workbook."""
    path: Path                           # source workbook
    name: str                            # file name
    headers: list[str] = field(default_factory=list)  # 原始欄位順序
    rows: list[AnnotatedRow] = field(default_factory=list)
    output_path: Path | None = None      # None: failed or nothing exported
    start_time: datetime | None = None
    end_time: datetime | None = None
    status: FileStatus = FileStatus.PENDING
    error: str | None = None
