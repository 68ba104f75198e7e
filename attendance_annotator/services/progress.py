from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

from ..models.workbook_file import FileStatus, WorkbookFile

"""Workbook progress bar (tqdm, TTY only).

The tracker also tallies per-run outcomes (success / failed / annotated
rows) and shows them as the bar postfix. Without a TTY no bar is drawn, the
tallies are still kept.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class ProgressTracker:
    """Progress over the workbooks of one annotator run."""

    def __init__(self, total_files: int, *, description: str = "考勤標註") -> None:
        self.total_files = total_files
        self.description = description
        self.succeeded = 0
        self.failed = 0
        self.rows = 0
        self.pbar: TqdmType[Any] | None = None
        if total_files and is_tty_enabled():
            self.pbar = tqdm(total=total_files, desc=description, unit="wb", leave=False, ascii=True)

    @property
    def done(self) -> int:
        return self.succeeded + self.failed

    def start_file(self, file_path: Path) -> None:
        if self.pbar is not None:
            self.pbar.set_description_str(f"{self.description} {file_path.name}")

    def finish_file(self, workbook: WorkbookFile) -> None:
        if workbook.status == FileStatus.SUCCESS:
            self.succeeded += 1
            self.rows += len(workbook.rows)
        else:
            self.failed += 1
        if self.pbar is not None:
            self.pbar.set_postfix(ok=self.succeeded, ng=self.failed, rows=self.rows, refresh=False)
            self.pbar.update(1)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
