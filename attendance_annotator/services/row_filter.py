from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from ..glossary import ATTENDANCE_DATE, SUMMARY_KEYWORDS
from .time_normalizer import is_valid_date

"""Pre-processing filter for attendance rows.

Footer lines (小計/合計/總計...) and rows whose date cannot be parsed are not
attendance data. They are dropped silently, never reported as errors.
"""

__all__ = [
    "is_attendance_row",
    "filter_attendance_rows",
]

logger = logging.getLogger(__name__)


def is_attendance_row(row: Mapping[str, Any]) -> bool:
    value = row.get(ATTENDANCE_DATE)
    if value is None or value == "" or value == 0:
        return False
    text = str(value)
    if any(keyword in text for keyword in SUMMARY_KEYWORDS):
        return False
    return is_valid_date(value)


def filter_attendance_rows(rows: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Keep only rows that carry a real, parsable attendance date (order preserved)."""
    kept: list[dict[str, Any]] = []
    dropped = 0
    for row in rows:
        if is_attendance_row(row):
            kept.append(dict(row))
        else:
            dropped += 1
    if dropped:
        logger.debug("row filter dropped %d non-attendance rows", dropped)
    return kept
