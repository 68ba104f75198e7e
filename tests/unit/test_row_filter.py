from __future__ import annotations

from datetime import datetime

import pytest

from attendance_annotator.services.row_filter import filter_attendance_rows, is_attendance_row


def _row(date_value):
    return {"員工編號": "E001", "出勤日期": date_value}


@pytest.mark.parametrize(
    "value",
    [datetime(2024, 1, 5), "2024/01/05", "2024/01/05(五)", 45296],
)
def test_keeps_rows_with_valid_dates(value):
    assert is_attendance_row(_row(value))


@pytest.mark.parametrize(
    "value",
    [None, "", 0, "小計", "合計", "總計", "次數", "遲到早退", "部門合計 2024/01", "不是日期"],
)
def test_drops_summary_and_invalid_rows(value):
    assert not is_attendance_row(_row(value))


def test_missing_date_field_is_dropped():
    assert not is_attendance_row({"員工編號": "E001"})


def test_filter_preserves_order_and_copies():
    rows = [
        _row(datetime(2024, 1, 5)),
        _row("合計"),
        _row("2024/01/08"),
        _row(None),
    ]
    kept = filter_attendance_rows(rows)
    assert [r["出勤日期"] for r in kept] == [datetime(2024, 1, 5), "2024/01/08"]
    kept[0]["員工編號"] = "changed"
    assert rows[0]["員工編號"] == "E001"
