from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from typing import Any

from ..glossary import (
    ANOMALY_MARKER,
    ATTENDANCE_DATE,
    CHECK_IN,
    CHECK_OUT,
    DEFAULT_LATE_THRESHOLD,
    EARLY_LEAVE_MINUTES,
    EARLY_LEAVE_THRESHOLD,
    FRIDAY_FLAG,
    LATENESS_MINUTES,
    LEAVE_END,
    LEAVE_START,
    MARK,
    NOT_CLOCKED_IN,
    SCHEDULED_HOURS,
    SHORT_SCHEDULE_LATE_THRESHOLD,
    SHORT_SCHEDULE_MINUTES,
)
from ..models.annotated_row import AnnotatedRow
from .time_normalizer import is_empty, parse_date, time_to_minutes

"""Friday attendance anomaly rules.

Only Friday rows are evaluated. For those rows:

- 上班: no check-in and no leave start -> ``(未打卡)``; a check-in after the
  lateness threshold writes the late minutes unless a leave started earlier.
- 下班: no check-out and no leave end -> ``(未打卡)``; a check-out before
  18:00 writes the early-leave minutes unless a leave started earlier.

The lateness threshold is 10:00 when the scheduled hours normalize to exactly
420 minutes (7h), 09:00 otherwise.

``process_row`` is pure: the input mapping is copied, never mutated, and the
changed field names come back as a second value.
"""

__all__ = [
    "WEEKDAY_FRIDAY",
    "late_threshold_for",
    "is_friday",
    "process_row",
    "process_attendance_data",
]

WEEKDAY_FRIDAY = 4  # date.weekday(): Monday == 0


def late_threshold_for(scheduled_minutes: int | None) -> int:
    if scheduled_minutes == SHORT_SCHEDULE_MINUTES:
        return SHORT_SCHEDULE_LATE_THRESHOLD
    return DEFAULT_LATE_THRESHOLD


def is_friday(value: Any) -> bool:
    parsed = parse_date(value)
    return parsed is not None and parsed.weekday() == WEEKDAY_FRIDAY


def _leave_covers(leave_start_min: int | None, punch_min: int) -> bool:
    # 假勤起始時間 早於 打卡時間 -> 有請假
    return leave_start_min is not None and leave_start_min < punch_min


def process_row(row: Mapping[str, Any]) -> tuple[dict[str, Any], frozenset[str]]:
    """Apply the Friday rules to one row.

    Returns:
        (new_row, modified_fields) where new_row keeps every original key and
        carries the 星期五 flag and 異動 marker.
    """
    new_row = dict(row)
    friday = is_friday(row.get(ATTENDANCE_DATE))
    new_row[FRIDAY_FLAG] = MARK if friday else ""

    if not friday:
        new_row[ANOMALY_MARKER] = ""
        return new_row, frozenset()

    modified: set[str] = set()

    check_in_val = new_row.get(CHECK_IN)
    check_out_val = new_row.get(CHECK_OUT)
    leave_start_val = new_row.get(LEAVE_START)
    leave_end_val = new_row.get(LEAVE_END)

    check_in_min = time_to_minutes(check_in_val)
    check_out_min = time_to_minutes(check_out_val)
    leave_start_min = time_to_minutes(leave_start_val)
    scheduled_min = time_to_minutes(new_row.get(SCHEDULED_HOURS))

    late_threshold = late_threshold_for(scheduled_min)

    # 上班
    if is_empty(check_in_val) and is_empty(leave_start_val):
        new_row[CHECK_IN] = NOT_CLOCKED_IN
        modified.add(CHECK_IN)
    elif check_in_min is not None and check_in_min > late_threshold:
        if not _leave_covers(leave_start_min, check_in_min):
            new_row[LATENESS_MINUTES] = math.floor(check_in_min - late_threshold)
            modified.add(LATENESS_MINUTES)

    # 下班 (leave START guards early leave as well)
    if is_empty(check_out_val) and is_empty(leave_end_val):
        new_row[CHECK_OUT] = NOT_CLOCKED_IN
        modified.add(CHECK_OUT)
    elif check_out_min is not None and check_out_min < EARLY_LEAVE_THRESHOLD:
        if not _leave_covers(leave_start_min, check_out_min):
            new_row[EARLY_LEAVE_MINUTES] = math.floor(EARLY_LEAVE_THRESHOLD - check_out_min)
            modified.add(EARLY_LEAVE_MINUTES)

    new_row[ANOMALY_MARKER] = MARK if modified else ""
    return new_row, frozenset(modified)


def process_attendance_data(rows: Iterable[Mapping[str, Any]]) -> list[AnnotatedRow]:
    """Run ``process_row`` over every row, preserving order."""
    annotated: list[AnnotatedRow] = []
    for row in rows:
        values, modified = process_row(row)
        annotated.append(AnnotatedRow(values=values, modified_fields=modified))
    return annotated
