from __future__ import annotations

import re
from datetime import datetime, time
from pathlib import Path

import pytest
from openpyxl import load_workbook

from attendance_annotator.cli import main as cli_main
from tests.conftest import FRIDAY, HEADERS, MONDAY, make_workbook

"""End-to-end run: real workbook in, highlighted workbook out.

Rows cover the Friday scenarios (late, leave-covered late, missing punch,
7-hour schedule, early leave), a Monday row and footer rows.
"""

SUMMARY_RE = re.compile(
    r"SUMMARY files=1/1 success=1 failed=0 rows=(\d+) fridays=(\d+) modified=(\d+) late=(\d+) early=(\d+)"
)


@pytest.fixture
def scenario_workbook(temp_workdir: Path, write_config) -> Path:
    rows = [
        # 1. late, threshold 09:00
        ["E001", "王小明", FRIDAY, "10:15", "18:30", None, None, None, 0, 0],
        # 2. late but leave started 09:00
        ["E002", "陳小華", FRIDAY, "10:15", "18:30", "09:00", "10:00", "08:00", 0, 0],
        # 3. no check-in and no leave
        ["E003", "林小美", FRIDAY, None, "18:30", None, None, "08:00", 0, 0],
        # 4. 7h schedule, 09:30 is on time
        ["E004", "張大同", FRIDAY, "09:30", "18:00", None, None, "07:00", 0, 0],
        # 5. early leave at 16:45
        ["E005", "黃小玉", FRIDAY, time(8, 40), time(16, 45), None, None, "08:00", 0, 0],
        # Monday: nothing evaluated
        ["E001", "王小明", MONDAY, None, "12:00", None, None, "08:00", 0, 0],
        ["小計", None, "小計", None, None, None, None, None, None, None],
        [None, None, "遲到早退次數", None, None, None, None, None, 2, 1],
    ]
    return make_workbook(temp_workdir / "data" / "202401考勤.xlsx", rows)


def test_end_to_end_annotation(temp_workdir: Path, scenario_workbook: Path, capsys):
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 0

    m = SUMMARY_RE.search(out)
    assert m, out
    assert m.groups() == ("6", "5", "3", "1", "1")

    exported = temp_workdir / "output" / "邏輯處理_202401考勤.xlsx"
    assert exported.exists()
    ws = load_workbook(exported)["考勤處理結果"]

    header = [c.value for c in ws[1]]
    assert header == HEADERS + ["異動", "星期五"]
    col = {name: idx + 1 for idx, name in enumerate(header)}

    def cell(row_no: int, name: str):
        return ws.cell(row=row_no + 1, column=col[name])

    assert ws.max_row == 7  # header + 6 data rows, footers dropped
    assert cell(1, "出勤日期").value == "2024/01/05"
    assert cell(6, "出勤日期").value == "2024/01/08"

    # 1. late 75 highlighted
    assert cell(1, "遲到(分鐘)").value == 75
    assert cell(1, "遲到(分鐘)").font.bold is True
    assert cell(1, "異動").value == "V"
    # 2. leave covers lateness
    assert cell(2, "遲到(分鐘)").value == 0
    assert cell(2, "遲到(分鐘)").fill.fill_type is None
    assert cell(2, "異動").value in (None, "")
    # 3. 未打卡
    assert cell(3, "實際上班時間").value == "(未打卡)"
    assert cell(3, "實際上班時間").fill.fill_type == "solid"
    # 4. 7h schedule on time
    assert cell(4, "遲到(分鐘)").value == 0
    # 5. early leave 75
    assert cell(5, "早退(分鐘)").value == 75
    assert cell(5, "早退(分鐘)").fill.fgColor.rgb.endswith("FFFF00")
    # Monday untouched
    assert cell(6, "實際上班時間").value in (None, "")
    assert cell(6, "星期五").value in (None, "")
    for row_no in (1, 2, 3, 4, 5):
        assert cell(row_no, "星期五").value == "V"


def test_source_workbook_left_unchanged(temp_workdir: Path, scenario_workbook: Path):
    before = scenario_workbook.read_bytes()
    assert cli_main([]) == 0
    assert scenario_workbook.read_bytes() == before


def test_second_run_ignores_previous_export(temp_workdir: Path, scenario_workbook: Path, capsys):
    config = temp_workdir / "config" / "annotate.yml"
    config.write_text("source_directory: ./data\n", encoding="utf-8")
    assert cli_main([]) == 0
    assert (temp_workdir / "data" / "邏輯處理_202401考勤.xlsx").exists()
    capsys.readouterr()
    assert cli_main([]) == 0
    assert "SUMMARY files=1/1" in capsys.readouterr().out
