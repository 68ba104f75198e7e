from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ..glossary import (
    ATTENDANCE_DATE,
    CHECK_IN,
    CHECK_OUT,
    EARLY_LEAVE_MINUTES,
    EMPLOYEE_ID_FIELDS,
    LATENESS_MINUTES,
)
from ..models.annotated_row import AnnotatedRow
from .time_normalizer import is_empty, parse_date

"""Plain-text preview of annotated rows (數據預覽).

Columns: 員工編號 | 日期 | 上班時間 | 下班時間 | 遲到(分) | 早退(分) | 異動.
Values the engine changed are wrapped in ``*...*``; Friday dates carry a
``週五`` tag.
"""

__all__ = [
    "PREVIEW_HEADER",
    "render_preview_lines",
]

PREVIEW_HEADER = ("員工編號", "日期", "上班時間", "下班時間", "遲到(分)", "早退(分)", "異動")
FRIDAY_TAG = "週五"
_DASH = "-"


def _employee_id(row: AnnotatedRow) -> str:
    for name in EMPLOYEE_ID_FIELDS:
        value = row.get(name)
        if not is_empty(value) and value != 0:
            return str(value)
    return _DASH


def _display_date(row: AnnotatedRow) -> str:
    parsed = parse_date(row.get(ATTENDANCE_DATE))
    if parsed is None:
        return _DASH
    text = f"{parsed.year}/{parsed.month:02d}/{parsed.day:02d}"
    return f"{text} {FRIDAY_TAG}" if row.is_friday else text


def _positive_minutes(value: Any) -> str:
    try:
        return str(value) if float(value) > 0 else _DASH
    except (TypeError, ValueError):
        return _DASH


def _cell(row: AnnotatedRow, name: str, text: str) -> str:
    return f"*{text}*" if name in row.modified_fields else text


def _display_time(value: Any) -> str:
    if is_empty(value):
        return ""
    if hasattr(value, "strftime"):
        return value.strftime("%H:%M")
    return str(value)


def render_preview_lines(rows: Sequence[AnnotatedRow], limit: int = 20) -> list[str]:
    """Header line plus one ``|``-separated line for each of the first ``limit`` rows."""
    lines = [" | ".join(PREVIEW_HEADER)]
    for row in rows[:limit]:
        cells = [
            _employee_id(row),
            _display_date(row),
            _cell(row, CHECK_IN, _display_time(row.get(CHECK_IN))),
            _cell(row, CHECK_OUT, _display_time(row.get(CHECK_OUT))),
            _cell(row, LATENESS_MINUTES, _positive_minutes(row.get(LATENESS_MINUTES))),
            _cell(row, EARLY_LEAVE_MINUTES, _positive_minutes(row.get(EARLY_LEAVE_MINUTES))),
            "V" if row.is_modified else _DASH,
        ]
        lines.append(" | ".join(cells))
    return lines
