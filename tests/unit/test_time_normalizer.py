from __future__ import annotations

import math
from datetime import date, datetime, time, timedelta

import pandas as pd
import pytest

from attendance_annotator.services.time_normalizer import (
    EXCEL_EPOCH_OFFSET_DAYS,
    is_empty,
    is_valid_date,
    parse_date,
    time_to_minutes,
)


@pytest.mark.parametrize("value", [None, "", "   ", float("nan"), pd.NaT])
def test_time_to_minutes_absent(value):
    assert time_to_minutes(value) is None


def test_time_to_minutes_native_values_ignore_date_part():
    assert time_to_minutes(datetime(2024, 1, 5, 10, 15, 42)) == 615
    assert time_to_minutes(time(9, 0)) == 540
    assert time_to_minutes(pd.Timestamp("2024-01-05 18:00")) == 1080
    # bare date has no clock part
    assert time_to_minutes(date(2024, 1, 5)) == 0


def test_time_to_minutes_duration_cell():
    assert time_to_minutes(timedelta(hours=7)) == 420
    assert time_to_minutes(timedelta(hours=25, minutes=30)) == 90


def test_time_to_minutes_not_clocked_in_sentinel():
    assert time_to_minutes("(未打卡)") is None
    assert time_to_minutes("  (未打卡) ") is None


@pytest.mark.parametrize(
    "text,expected",
    [
        ("10:15", 615),
        ("09:00", 540),
        (" 7:00 ", 420),
        ("18:30:59", 1110),
        ("25:00", 1500),  # no range validation
        ("9a:05", 545),  # leading digits only
    ],
)
def test_time_to_minutes_colon_strings(text, expected):
    assert time_to_minutes(text) == expected


@pytest.mark.parametrize("text", ["ab:cd", "10:xx", ":30", "1015", "請假"])
def test_time_to_minutes_unparsable_strings(text):
    assert time_to_minutes(text) is None


def test_time_to_minutes_serial_fraction():
    assert time_to_minutes(0.375) == 540  # 09:00
    assert time_to_minutes(0.75) == 1080  # 18:00
    assert time_to_minutes(45296.4270833333) == 615  # date + 10:15
    # rounding up to a full day folds back to midnight
    assert time_to_minutes(0.99999) == 0
    assert time_to_minutes(1) == 0


def test_time_to_minutes_other_types():
    assert time_to_minutes(True) is None
    assert time_to_minutes([9, 0]) is None


def test_parse_date_passthrough():
    d = datetime(2024, 1, 5)
    assert parse_date(d) is d
    assert parse_date(date(2024, 1, 5)) == date(2024, 1, 5)


def test_parse_date_serial():
    assert parse_date(EXCEL_EPOCH_OFFSET_DAYS) == datetime(1970, 1, 1)
    assert parse_date(45296) == datetime(2024, 1, 5)
    assert parse_date(45296.5) == datetime(2024, 1, 5, 12, 0)


@pytest.mark.parametrize(
    "text", ["2024/01/05", "2024-01-05", " 2024/1/5 ", "2024/01/05(五)", "2024/01/05 (五)"]
)
def test_parse_date_text(text):
    parsed = parse_date(text)
    assert parsed is not None
    assert (parsed.year, parsed.month, parsed.day) == (2024, 1, 5)


@pytest.mark.parametrize("value", ["合計", "", "not a date", "(五)", None, float("nan")])
def test_parse_date_invalid(value):
    assert parse_date(value) is None
    assert is_valid_date(value) is False


def test_is_empty():
    assert is_empty(None)
    assert is_empty("")
    assert is_empty(" \t")
    assert is_empty(math.nan)
    assert not is_empty(0)
    assert not is_empty("09:00")
    assert not is_empty(time(9, 0))
