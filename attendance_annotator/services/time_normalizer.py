from __future__ import annotations

import math
import numbers
import re
from datetime import date, datetime, time, timedelta
from typing import Any

import pandas as pd

from ..glossary import NOT_CLOCKED_IN

"""Time/date normalization for raw attendance cell values.

Cells arrive from pandas/openpyxl as native ``datetime``/``time`` objects,
spreadsheet serial numbers, ``"HH:MM"`` text or sentinel strings. Parse
failures never raise: they resolve to ``None`` so the rule engine can treat
a missing punch as business data.

Spreadsheet serial arithmetic is kept explicit (no library epoch defaults):
serial 25569 is 1970-01-01, one day is 86,400,000 ms.
"""

__all__ = [
    "EXCEL_EPOCH_OFFSET_DAYS",
    "MS_PER_DAY",
    "MINUTES_PER_DAY",
    "time_to_minutes",
    "parse_date",
    "is_valid_date",
    "is_empty",
]

EXCEL_EPOCH_OFFSET_DAYS = 25569
MS_PER_DAY = 86_400_000
MINUTES_PER_DAY = 1440

_UNIX_EPOCH = datetime(1970, 1, 1)
# 前置符號與數字 (其餘字元忽略)
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
# 括號內文字視為註解, e.g. "2024/01/05(五)"
_PAREN_COMMENT = re.compile(r"\s*\([^)]*\)")


def _is_real_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_missing(value: Any) -> bool:
    if value is None or value is pd.NaT:
        return True
    return _is_real_number(value) and math.isnan(value)


def _leading_int(text: str) -> int | None:
    m = _LEADING_INT.match(text)
    return int(m.group(1)) if m else None


def is_empty(value: Any) -> bool:
    """True for ``None``/NaN and for strings that are blank after trimming."""
    if _is_missing(value):
        return True
    return str(value).strip() == ""


def time_to_minutes(value: Any) -> int | None:
    """Convert a raw cell value to minutes since midnight.

    Returns:
        int in ``[0, 1439]`` for serials/native times, the raw ``h*60+m`` for
        colon strings (no range check), or ``None`` when absent/unparsable.
    """
    if _is_missing(value):
        return None
    if isinstance(value, (datetime, time)):
        return value.hour * 60 + value.minute
    if isinstance(value, date):
        return 0
    if isinstance(value, timedelta):
        return int(value.total_seconds() // 60) % MINUTES_PER_DAY

    if isinstance(value, str):
        clean = value.strip()
        if clean == NOT_CLOCKED_IN:
            return None
        parts = clean.split(":")
        if len(parts) >= 2:
            hours = _leading_int(parts[0])
            minutes = _leading_int(parts[1])
            if hours is None or minutes is None:
                return None
            return hours * 60 + minutes
        return None

    if _is_real_number(value):
        # round half up, then fold 1440 back to 0
        return math.floor(float(value) * MINUTES_PER_DAY + 0.5) % MINUTES_PER_DAY
    return None


def parse_date(value: Any) -> date | None:
    """Parse an attendance-date cell.

    ``date``/``datetime`` pass through, real numbers are spreadsheet serials,
    everything else is parsed as free-form date text. Returns ``None`` as the
    invalid-date marker.
    """
    if _is_missing(value):
        return None
    if isinstance(value, date):
        return value
    if _is_real_number(value):
        ms = round((float(value) - EXCEL_EPOCH_OFFSET_DAYS) * MS_PER_DAY)
        try:
            return _UNIX_EPOCH + timedelta(milliseconds=ms)
        except OverflowError:
            return None
    text = _PAREN_COMMENT.sub("", str(value)).strip()
    if not text:
        return None
    try:
        parsed = pd.to_datetime(text, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return None
    if parsed is pd.NaT or pd.isna(parsed):
        return None
    return parsed.to_pydatetime()


def is_valid_date(value: Any) -> bool:
    return parse_date(value) is not None
