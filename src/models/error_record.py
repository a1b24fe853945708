from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the JSON Lines error log.

Hard parse failures are logged once per file with the failing stage/row and
the exception kind. Soft row validation errors are logged once per message
with error_type ROW_VALIDATION. row=-1 marks file-level errors where no grid
row applies (unreadable workbook, unsupported file type).
"""

__all__ = [
    "ErrorRecord",
    "ROW_VALIDATION",
]

ROW_VALIDATION = "ROW_VALIDATION"


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: spreadsheet filename being processed
        stage: parsing stage name, or None for file-level errors
        row: grid row number (1-based). -1 when unknown
        error_type: error classification in UPPER_SNAKE_CASE format
        message: human readable description
    """
    timestamp: str  # ISO8601 UTC
    file: str
    stage: str | None
    row: int  # 行番号。不明な場合 -1
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(file: str, stage: str | None, row: int, error_type: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
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
        """Serialize to one JSON line with exactly the dataclass keys."""
        return json.dumps(asdict(self), ensure_ascii=False)
