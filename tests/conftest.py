# Shared pytest fixtures
from __future__ import annotations
import tempfile
from datetime import datetime, time
from pathlib import Path
from typing import Any

import pandas as pd
import pytest

from attendance_annotator.logging.init import reset_logging

HEADERS = [
    "員工編號", "姓名", "出勤日期", "實際上班時間", "實際下班時間",
    "假勤起始時間", "假勤結束時間", "應出勤時數(時:分)", "遲到(分鐘)", "早退(分鐘)",
]

# 2024-01-05 = 星期五, 2024-01-08 = 星期一
FRIDAY = datetime(2024, 1, 5)
MONDAY = datetime(2024, 1, 8)


@pytest.fixture(autouse=True)
def _fresh_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        # 確保 teardown 時還原 (.env 可能寫入)
        monkeypatch.setenv("ATTENDANCE_CONFIG", "")
        monkeypatch.delenv("ATTENDANCE_CONFIG")
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
output_directory: ./output
output_prefix: 邏輯處理_
sheet_title: 考勤處理結果
preview_rows: 5
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "annotate.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


def make_workbook(path: Path, rows: list[list[Any]], headers: list[str] | None = None) -> Path:
    """Write ``headers`` + ``rows`` as the first sheet of an .xlsx file."""
    data = [list(headers or HEADERS)] + rows
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame(data).to_excel(writer, sheet_name="Sheet1", header=False, index=False)
    return path


@pytest.fixture()
def attendance_workbook(temp_workdir: Path) -> Path:
    """Two Friday rows (one late, one clean), one Monday row and a 合計 footer."""
    rows = [
        ["E001", "王小明", FRIDAY, "10:15", "18:30", None, None, "08:00", 0, 0],
        ["E002", "陳小華", FRIDAY, time(8, 55), time(18, 5), None, None, "08:00", 0, 0],
        ["E001", "王小明", MONDAY, "11:00", "15:00", None, None, "08:00", 0, 0],
        ["合計", None, "合計", None, None, None, None, None, 75, 0],
    ]
    return make_workbook(temp_workdir / "data" / "attendance.xlsx", rows)
