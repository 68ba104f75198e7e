from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

from ..excel.reader import WorkbookReadError, read_attendance_workbook
from ..excel.writer import WorkbookWriteError, export_annotated_workbook, output_file_name
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.config_models import AnnotateConfig
from ..models.processing_result import AttendanceSummary, FileStat, ProcessingResult
from ..models.workbook_file import FileStatus, WorkbookFile
from .progress import ProgressTracker
from .rule_engine import process_attendance_data

"""Run orchestration: read -> filter -> annotate -> export, per workbook.

Each workbook is an independent, one-shot unit. A read or write failure
fails that workbook only (no partial export is left behind); the run goes on
with the next file and the failure lands in the JSON Lines error log.
"""

__all__ = [
    "ProcessingError",
    "scan_excel_files",
    "process_file",
    "process_all",
]

logger = logging.getLogger(__name__)

EXCEL_SUFFIX = ".xlsx"


class ProcessingError(Exception):
    """Fatal error that prevents the run from starting."""


def scan_excel_files(directory: Path, output_prefix: str = "") -> list[Path]:
    """List ``.xlsx`` files in ``directory`` (non-recursive, sorted by name).

    Files already carrying ``output_prefix`` are previous exports and are
    skipped; Excel lock files (``~$``) too.

    Raises:
        ProcessingError: If directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")
    try:
        candidates = sorted(p for p in directory.iterdir() if p.is_file() and p.suffix == EXCEL_SUFFIX)
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e
    return [
        p for p in candidates
        if not p.name.startswith("~$") and not (output_prefix and p.name.startswith(output_prefix))
    ]


def _failed(file_path: Path, start_time: datetime, error: str) -> WorkbookFile:
    return WorkbookFile(
        path=file_path,
        name=file_path.name,
        start_time=start_time,
        end_time=datetime.now(UTC),
        status=FileStatus.FAILED,
        error=error,
    )


def process_file(
    file_path: Path,
    config: AnnotateConfig,
    error_log: ErrorLogBuffer | None = None,
) -> WorkbookFile:
    """Annotate one workbook and export the highlighted copy.

    Returns a FAILED WorkbookFile (never raises) on read/write failure.
    """
    start_time = datetime.now(UTC)
    error_log = error_log if error_log is not None else ErrorLogBuffer()

    try:
        sheet = read_attendance_workbook(file_path, keep_na_strings=config.keep_na_strings or None)
    except WorkbookReadError as e:
        logger.error("read failed file=%s: %s", file_path.name, e)
        error_log.append(ErrorRecord.create(file_path.name, "read", "WORKBOOK_READ_ERROR", str(e)))
        return _failed(file_path, start_time, str(e))

    logger.debug("file=%s sheet=%s rows=%d", file_path.name, sheet.sheet_name, len(sheet.rows))
    annotated = process_attendance_data(sheet.rows)

    output_path: Path | None = None
    if annotated:
        target = Path(config.output_directory) / output_file_name(file_path.name, config.output_prefix)
        if target.resolve() == file_path.resolve():
            # 不可覆寫來源檔
            message = f"export target is the source workbook: {target}"
            logger.error("export failed file=%s: %s", file_path.name, message)
            error_log.append(ErrorRecord.create(file_path.name, "export", "OUTPUT_OVERWRITES_SOURCE", message))
            return _failed(file_path, start_time, message)
        try:
            output_path = export_annotated_workbook(
                annotated, sheet.headers, target, sheet_title=config.sheet_title
            )
        except WorkbookWriteError as e:
            logger.error("export failed file=%s: %s", file_path.name, e)
            error_log.append(ErrorRecord.create(file_path.name, "export", "WORKBOOK_WRITE_ERROR", str(e)))
            return _failed(file_path, start_time, str(e))
        logger.info("exported %s -> %s", file_path.name, output_path)
    else:
        # 無資料: nothing to export, not a failure
        logger.warning("no attendance rows in %s, export skipped", file_path.name)

    return WorkbookFile(
        path=file_path,
        name=file_path.name,
        headers=sheet.headers,
        rows=annotated,
        output_path=output_path,
        start_time=start_time,
        end_time=datetime.now(UTC),
        status=FileStatus.SUCCESS,
        error=None,
    )


def process_all(
    config: AnnotateConfig,
    files: Sequence[Path] | None = None,
    error_log: ErrorLogBuffer | None = None,
) -> tuple[ProcessingResult, list[WorkbookFile]]:
    """Process explicit ``files`` or every workbook in ``config.source_directory``.

    Returns:
        (ProcessingResult, per-workbook results in processing order)

    Raises:
        ProcessingError: source directory missing / unreadable
    """
    start_time = datetime.now(UTC)
    error_log = error_log if error_log is not None else ErrorLogBuffer()

    if files is None:
        file_paths = scan_excel_files(Path(config.source_directory), config.output_prefix)
    else:
        file_paths = list(files)

    results: list[WorkbookFile] = []
    file_stats: list[FileStat] = []
    total = AttendanceSummary()
    success_count = 0
    failed_count = 0

    with ProgressTracker(len(file_paths)) as progress:
        for file_path in file_paths:
            progress.start_file(file_path)
            if not file_path.exists():
                logger.error("file not found: %s", file_path)
                error_log.append(
                    ErrorRecord.create(file_path.name, "read", "FILE_NOT_FOUND", f"file not found: {file_path}")
                )
                wb = _failed(file_path, datetime.now(UTC), f"file not found: {file_path}")
            else:
                wb = process_file(file_path, config, error_log)
            results.append(wb)

            progress.finish_file(wb)

            summary = AttendanceSummary.from_rows(wb.rows)
            if wb.status == FileStatus.SUCCESS:
                success_count += 1
                total = total + summary
            else:
                failed_count += 1

            elapsed = (wb.end_time - wb.start_time).total_seconds() if wb.start_time and wb.end_time else 0.0
            file_stats.append(
                FileStat(
                    file_name=wb.name,
                    status=wb.status.value,
                    summary=summary,
                    elapsed_seconds=elapsed,
                    output_name=wb.output_path.name if wb.output_path else None,
                )
            )

    log_path = error_log.flush()
    if log_path is not None:
        logger.warning("error log written: %s", log_path)

    end_time = datetime.now(UTC)
    result = ProcessingResult(
        success_files=success_count,
        failed_files=failed_count,
        summary=total,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=file_stats,
    )
    return result, results
