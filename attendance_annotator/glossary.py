from __future__ import annotations

"""Shared field vocabulary and sentinel values for attendance workbooks.

The column names are the literal header texts exported by the HR attendance
system (繁體中文). Every component refers to these constants instead of
repeating the literals.
"""

__all__ = [
    "ATTENDANCE_DATE",
    "CHECK_IN",
    "CHECK_OUT",
    "LEAVE_START",
    "LEAVE_END",
    "SCHEDULED_HOURS",
    "LATENESS_MINUTES",
    "EARLY_LEAVE_MINUTES",
    "ANOMALY_MARKER",
    "FRIDAY_FLAG",
    "EMPLOYEE_ID_FIELDS",
    "NOT_CLOCKED_IN",
    "MARK",
    "SUMMARY_KEYWORDS",
    "TRACKED_FIELDS",
    "DEFAULT_LATE_THRESHOLD",
    "SHORT_SCHEDULE_LATE_THRESHOLD",
    "SHORT_SCHEDULE_MINUTES",
    "EARLY_LEAVE_THRESHOLD",
]

# Source columns
ATTENDANCE_DATE = "出勤日期"
CHECK_IN = "實際上班時間"
CHECK_OUT = "實際下班時間"
LEAVE_START = "假勤起始時間"
LEAVE_END = "假勤結束時間"
SCHEDULED_HOURS = "應出勤時數(時:分)"
LATENESS_MINUTES = "遲到(分鐘)"
EARLY_LEAVE_MINUTES = "早退(分鐘)"

# Columns appended by the rule engine
ANOMALY_MARKER = "異動"
FRIDAY_FLAG = "星期五"

# 預覽用: 依序嘗試
EMPLOYEE_ID_FIELDS = ("員工編號", "工號")

NOT_CLOCKED_IN = "(未打卡)"
MARK = "V"

# 小計 / 合計 / 總計 / 次數 / 遲到早退 summary lines at the sheet footer
SUMMARY_KEYWORDS = ("小計", "合計", "總計", "次數", "遲到早退")

# Fields the engine may overwrite (ModifiedFieldSet universe)
TRACKED_FIELDS = frozenset({CHECK_IN, CHECK_OUT, LATENESS_MINUTES, EARLY_LEAVE_MINUTES})

# Thresholds in minutes since midnight
DEFAULT_LATE_THRESHOLD = 540  # 09:00
SHORT_SCHEDULE_LATE_THRESHOLD = 600  # 10:00
SHORT_SCHEDULE_MINUTES = 420  # 7 hours scheduled
EARLY_LEAVE_THRESHOLD = 1080  # 18:00
