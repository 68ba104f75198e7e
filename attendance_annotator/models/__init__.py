"""Domain models for the attendance annotator."""

from .annotated_row import AnnotatedRow
from .config_models import AnnotateConfig
from .error_record import ErrorRecord
from .processing_result import AttendanceSummary, FileStat, ProcessingResult
from .workbook_file import FileStatus, WorkbookFile

__all__ = [
    # Configuration models
    "AnnotateConfig",
    # Processing models
    "AnnotatedRow",
    "WorkbookFile",
    "FileStatus",
    # Results
    "AttendanceSummary",
    "FileStat",
    "ProcessingResult",
    "ErrorRecord",
]
