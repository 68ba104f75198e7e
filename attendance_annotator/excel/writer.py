from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from pathlib import Path
from typing import Any

import pandas as pd
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from ..glossary import ANOMALY_MARKER, ATTENDANCE_DATE, FRIDAY_FLAG
from ..models.annotated_row import AnnotatedRow

"""Annotated workbook writer.

異動儲存格: 黃底紅字 (solid FFFF00 fill, bold Arial 11 FF0000 font, centered,
thin black border). 異動 / 星期五 columns are appended after the original
headers when missing.
"""

__all__ = [
    "WorkbookWriteError",
    "DEFAULT_OUTPUT_PREFIX",
    "DEFAULT_SHEET_TITLE",
    "output_file_name",
    "export_headers",
    "format_export_value",
    "export_annotated_workbook",
]

DEFAULT_OUTPUT_PREFIX = "邏輯處理_"
DEFAULT_SHEET_TITLE = "考勤處理結果"
MARKER_COLUMN_WIDTH = 8
DEFAULT_COLUMN_WIDTH = 15

_THIN_BLACK = Side(style="thin", color="000000")
HIGHLIGHT_FILL = PatternFill(fill_type="solid", fgColor="FFFF00")
HIGHLIGHT_FONT = Font(name="Arial", size=11, bold=True, color="FF0000")
HIGHLIGHT_ALIGNMENT = Alignment(horizontal="center", vertical="center")
HIGHLIGHT_BORDER = Border(top=_THIN_BLACK, bottom=_THIN_BLACK, left=_THIN_BLACK, right=_THIN_BLACK)


class WorkbookWriteError(Exception):
    """Raised when the annotated workbook cannot be written."""


def output_file_name(source_name: str, prefix: str = DEFAULT_OUTPUT_PREFIX) -> str:
    """``report.xls`` -> ``邏輯處理_report.xlsx`` (last extension dropped)."""
    return f"{prefix}{Path(source_name).stem}.xlsx"


def export_headers(original_headers: Sequence[str]) -> list[str]:
    headers = list(original_headers)
    if ANOMALY_MARKER not in headers:
        headers.append(ANOMALY_MARKER)
    if FRIDAY_FLAG not in headers:
        headers.append(FRIDAY_FLAG)
    return headers


def format_export_value(header: str, value: Any) -> Any:
    if value is None:
        return None
    if header == ATTENDANCE_DATE and isinstance(value, date):
        return f"{value.year}/{value.month:02d}/{value.day:02d}"
    return value


def export_annotated_workbook(
    rows: Sequence[AnnotatedRow],
    original_headers: Sequence[str],
    output_path: Path,
    sheet_title: str = DEFAULT_SHEET_TITLE,
) -> Path | None:
    """Write annotated rows to ``output_path`` and highlight modified cells.

    Returns the written path, or None when there is nothing to export.
    A file left half-written by a failure is removed before raising.
    """
    if not rows:
        return None

    headers = export_headers(original_headers)
    records = [
        [format_export_value(h, row.values.get(h)) for h in headers]
        for row in rows
    ]
    df = pd.DataFrame(records, columns=headers, dtype=object)

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name=sheet_title, index=False)
            ws = writer.sheets[sheet_title]
            for row_idx, row in enumerate(rows, start=2):  # 1 = header
                if not row.modified_fields:
                    continue
                for col_idx, header in enumerate(headers, start=1):
                    if header in row.modified_fields:
                        cell = ws.cell(row=row_idx, column=col_idx)
                        cell.fill = HIGHLIGHT_FILL
                        cell.font = HIGHLIGHT_FONT
                        cell.alignment = HIGHLIGHT_ALIGNMENT
                        cell.border = HIGHLIGHT_BORDER
            for col_idx, header in enumerate(headers, start=1):
                width = MARKER_COLUMN_WIDTH if header in (ANOMALY_MARKER, FRIDAY_FLAG) else DEFAULT_COLUMN_WIDTH
                ws.column_dimensions[get_column_letter(col_idx)].width = width
    except Exception as e:
        output_path.unlink(missing_ok=True)
        raise WorkbookWriteError(f"cannot write workbook '{output_path.name}': {e}") from e
    return output_path
