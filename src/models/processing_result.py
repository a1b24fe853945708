from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path

from .parse_result import ParseResult
from .period import Period

"""Processing result models for the invoice import run.

FileOutcome describes one spreadsheet; ImportSummary aggregates a whole run
and feeds the SUMMARY line.
"""

__all__ = [
    "FileStatus",
    "FileOutcome",
    "ImportSummary",
]


class FileStatus(Enum):
    """Outcome of a single file: success, or failed (hard error / unreadable)."""
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class FileOutcome:
    path: Path
    status: FileStatus
    result: ParseResult | None = None  # 成功時のみ
    error_type: str | None = None  # 失敗時: 例外の kind
    error: str | None = None  # 失敗時: メッセージ
    output_path: Path | None = None  # JSON 書き出し先 (設定時のみ)

    @property
    def invoice_rows(self) -> int:
        return len(self.result.invoices_data) if self.result is not None else 0

    @property
    def invalid_rows(self) -> int:
        return self.result.invalid_row_count if self.result is not None else 0


@dataclass(frozen=True)
class ImportSummary:
    """Aggregated results of an import run."""
    period: Period
    start_time: datetime
    end_time: datetime
    outcomes: list[FileOutcome] = field(default_factory=list)
    error_log_path: Path | None = None

    @property
    def total_files(self) -> int:
        return len(self.outcomes)

    @property
    def success_files(self) -> int:
        return sum(1 for o in self.outcomes if o.status is FileStatus.SUCCESS)

    @property
    def failed_files(self) -> int:
        return sum(1 for o in self.outcomes if o.status is FileStatus.FAILED)

    @property
    def invoice_rows(self) -> int:
        return sum(o.invoice_rows for o in self.outcomes)

    @property
    def invalid_rows(self) -> int:
        return sum(o.invalid_rows for o in self.outcomes)

    @property
    def elapsed_seconds(self) -> float:
        return (self.end_time - self.start_time).total_seconds()
