from __future__ import annotations

from ..models.processing_result import ProcessingResult

"""SUMMARY line rendering.

Format::

    SUMMARY files={n}/{n} success={s} failed={f} rows={r} fridays={x}
    modified={m} late={l} early={e} elapsed_sec={t}
"""


def _format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # avoid scientific notation
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return str(round(seconds, 3))


def render_summary_fields(total_files: int, result: ProcessingResult) -> str:
    """Key=value body of the SUMMARY line (the logger adds the label)."""
    s = result.summary
    return (
        f"files={total_files}/{total_files} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"rows={s.total_rows} "
        f"fridays={s.friday_count} "
        f"modified={s.modified_count} "
        f"late={s.late_count} "
        f"early={s.early_count} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )


def render_summary_line(total_files: int, result: ProcessingResult) -> str:
    """Render the SUMMARY line for a run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> from attendance_annotator.models import AttendanceSummary
        >>> start = datetime(2024, 1, 5, 9, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 5, 9, 0, 2, tzinfo=timezone.utc)
        >>> result = ProcessingResult(
        ...     success_files=1, failed_files=0,
        ...     summary=AttendanceSummary(total_rows=10, friday_count=2, modified_count=1, late_count=1),
        ...     start_time=start, end_time=end, elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(1, result)
        'SUMMARY files=1/1 success=1 failed=0 rows=10 fridays=2 modified=1 late=1 early=0 elapsed_sec=2'
    """
    return f"SUMMARY {render_summary_fields(total_files, result)}"
