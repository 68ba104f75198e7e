from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from ..glossary import EARLY_LEAVE_MINUTES, LATENESS_MINUTES
from .annotated_row import AnnotatedRow

"""Processing result models: per-workbook counts and the run aggregate."""

__all__ = [
    "AttendanceSummary",
    "FileStat",
    "ProcessingResult",
]


@dataclass(frozen=True)
class AttendanceSummary:
    """Counts shown after annotating one workbook."""
    total_rows: int = 0
    friday_count: int = 0
    modified_count: int = 0  # 異動 == V
    late_count: int = 0  # 遲到 written by the engine
    early_count: int = 0  # 早退 written by the engine

    @classmethod
    def from_rows(cls, rows: Iterable[AnnotatedRow]) -> AttendanceSummary:
        total = friday = modified = late = early = 0
        for row in rows:
            total += 1
            if row.is_friday:
                friday += 1
            if row.is_modified:
                modified += 1
            if LATENESS_MINUTES in row.modified_fields:
                late += 1
            if EARLY_LEAVE_MINUTES in row.modified_fields:
                early += 1
        return cls(
            total_rows=total,
            friday_count=friday,
            modified_count=modified,
            late_count=late,
            early_count=early,
        )

    def __add__(self, other: AttendanceSummary) -> AttendanceSummary:
        return AttendanceSummary(
            total_rows=self.total_rows + other.total_rows,
            friday_count=self.friday_count + other.friday_count,
            modified_count=self.modified_count + other.modified_count,
            late_count=self.late_count + other.late_count,
            early_count=self.early_count + other.early_count,
        )


@dataclass(frozen=True)
class FileStat:
    file_name: str
    status: str  # success/failed
    summary: AttendanceSummary
    elapsed_seconds: float
    output_name: str | None = None


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results of one run (feeds the SUMMARY line)."""
    success_files: int
    failed_files: int
    summary: AttendanceSummary  # successful workbooks only
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] | None = None
