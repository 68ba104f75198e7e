from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the file-level error log.

One record per failed workbook operation (read / annotate / export). ``row``
is -1 when the failure is not tied to a data row, which is the usual case:
row-level parse problems degrade to empty values and are never logged here.
"""

__all__ = [
    "ErrorRecord",
    "FILE_LEVEL_ROW",
]

FILE_LEVEL_ROW = -1


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: source workbook name
        stage: read | annotate | export
        row: 1-based data row, -1 for file-level errors
        error_type: UPPER_SNAKE_CASE classification
        message: error description
    """
    timestamp: str
    file: str
    stage: str
    row: int
    error_type: str
    message: str

    @staticmethod
    def create(file: str, stage: str, error_type: str, message: str, row: int = FILE_LEVEL_ROW) -> ErrorRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            stage=stage,
            row=row,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        # 追加キー阻止: dataclass -> dict
        return json.dumps(asdict(self), ensure_ascii=False)
