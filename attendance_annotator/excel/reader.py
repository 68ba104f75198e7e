from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

from ..services.row_filter import filter_attendance_rows

"""Attendance workbook reader.

- 只讀第一個工作表 (multi-sheet workbooks: remaining sheets ignored)
- 1st row = header, original column order kept
- Blank header cells become ``Unknown_{index}``
- Fully blank rows skipped, NaN cells -> None
- Footer / invalid-date rows removed by the row filter
"""

__all__ = [
    "WorkbookReadError",
    "AttendanceSheet",
    "read_excel_file",
    "normalize_sheet",
    "read_attendance_workbook",
]


class WorkbookReadError(Exception):
    """Raised when the workbook cannot be opened or has no usable header."""


@dataclass
class AttendanceSheet:
    sheet_name: str
    headers: list[str]
    rows: list[dict[str, Any]]  # 欄位名稱 -> 原始值 (date 保持 datetime)


def read_excel_file(path: Path, keep_na_strings: list[str] | None = None) -> tuple[str, pd.DataFrame]:
    """Read the first sheet of an Excel file as a raw header-less DataFrame.

    Parameters
    ----------
    path: Excel ファイルパス
    keep_na_strings: strings excluded from pandas' default NaN conversion (e.g. ['NA'])
    """
    import pandas._libs.parsers as parsers

    if keep_na_strings:
        na_values = list(parsers.STR_NA_VALUES - set(keep_na_strings))
        keep_default_na = False
    else:
        na_values = None
        keep_default_na = True

    try:
        with pd.ExcelFile(path, engine="openpyxl") as xls:
            if not xls.sheet_names:
                raise WorkbookReadError(f"workbook '{path.name}' has no sheets")
            name = str(xls.sheet_names[0])
            df = xls.parse(
                xls.sheet_names[0], header=None, keep_default_na=keep_default_na, na_values=na_values
            )
    except WorkbookReadError:
        raise
    except Exception as e:
        raise WorkbookReadError(f"cannot read workbook '{path.name}': {e}") from e
    return name, df


def normalize_sheet(df: pd.DataFrame, sheet_name: str) -> AttendanceSheet:
    """Turn a raw DataFrame into header list + row dicts (no filtering)."""
    if df.shape[0] < 1:
        raise WorkbookReadError(f"sheet '{sheet_name}' has no header row")
    headers: list[str] = []
    for idx, cell in enumerate(df.iloc[0].tolist()):
        if pd.isna(cell) or str(cell).strip() == "":
            headers.append(f"Unknown_{idx}")
        else:
            headers.append(str(cell).strip())

    rows: list[dict[str, Any]] = []
    for _, raw in df.iloc[1:].iterrows():
        if raw.isna().all():
            continue
        row_dict: dict[str, Any] = {}
        for col, val in zip(headers, raw.tolist(), strict=False):
            row_dict[col] = None if pd.isna(val) else val
        rows.append(row_dict)
    return AttendanceSheet(sheet_name=sheet_name, headers=headers, rows=rows)


def read_attendance_workbook(path: Path, keep_na_strings: list[str] | None = None) -> AttendanceSheet:
    """Read, normalize and filter the attendance sheet of ``path``."""
    sheet_name, df = read_excel_file(path, keep_na_strings=keep_na_strings)
    sheet = normalize_sheet(df, sheet_name)
    sheet.rows = filter_attendance_rows(sheet.rows)
    return sheet
