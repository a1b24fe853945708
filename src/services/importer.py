from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from ..config.loader import ImportConfig
from ..excel.reader import SUPPORTED_SUFFIXES, WorkbookReadError, read_invoice_grid
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.error_record import ROW_VALIDATION
from ..models.parse_result import ParseResult
from ..models.period import Period
from ..models.processing_result import FileOutcome, FileStatus, ImportSummary
from ..parsing.errors import InvoiceParseError
from ..parsing.stage_machine import InvoiceParsingStage, parse_invoice_grid
from .progress import ProgressTracker

"""Import orchestration.

Coordinates one run: collect spreadsheet files, decode each one, run the
parsing core against the declared period, record hard and soft errors in the
JSON Lines error log, optionally write one JSON result per file, and
aggregate an ImportSummary.

A hard parse error fails only the file it occurred in; remaining files are
still processed.
"""

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Fatal error that prevents the run from starting (bad input paths)."""


def scan_invoice_files(directory: Path) -> list[Path]:
    """List Excel files in a directory (non-recursive, sorted by name).

    Raises:
        ProcessingError: directory missing, not a directory, or unreadable
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")
    try:
        return sorted(
            p for p in directory.iterdir()
            if p.is_file() and p.suffix.lower() in SUPPORTED_SUFFIXES
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def collect_input_files(paths: Iterable[Path]) -> list[Path]:
    """Expand CLI arguments: directories are scanned, files are kept as given."""
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(scan_invoice_files(path))
        elif path.exists():
            files.append(path)
        else:
            raise ProcessingError(f"Path not found: {path}")
    return files


def _row_error_records(file_name: str, result: ParseResult) -> list[ErrorRecord]:
    records = []
    for row in result.invoices_data:
        for message in row.validation_errors:
            records.append(
                ErrorRecord.create(
                    file=file_name,
                    stage=InvoiceParsingStage.DATA_ROWS.value,
                    row=row.row_number,
                    error_type=ROW_VALIDATION,
                    message=message,
                )
            )
    return records


def write_result(result: ParseResult, source: Path, output_directory: Path) -> Path:
    """Write a ParseResult as ``<output_directory>/<source stem>.json``."""
    output_directory.mkdir(parents=True, exist_ok=True)
    out = output_directory / f"{source.stem}.json"
    out.write_text(result.to_json(indent=2) + "\n", encoding="utf-8")
    return out


def import_invoice_file(
    path: Path,
    declared_period: Period,
    config: ImportConfig,
    error_log: ErrorLogBuffer,
) -> FileOutcome:
    """Decode and parse one invoice spreadsheet.

    Hard errors are converted into a failed FileOutcome plus one error record;
    soft row errors are copied to the error log and kept on the result.
    """
    try:
        grid = read_invoice_grid(path)
    except WorkbookReadError as e:
        logger.error(f"{path.name}: {e}")
        error_log.append(ErrorRecord.create(path.name, None, -1, "WORKBOOK_READ_ERROR", str(e)))
        return FileOutcome(path=path, status=FileStatus.FAILED, error_type="WORKBOOK_READ_ERROR", error=str(e))

    logger.debug(f"{path.name}: {len(grid)} rows decoded")
    try:
        result = parse_invoice_grid(grid, declared_period, config.row_schema)
    except InvoiceParseError as e:
        logger.error(f"{path.name}: {e}")
        error_log.append(ErrorRecord.create(path.name, e.stage, e.row_number, e.kind, e.message))
        return FileOutcome(path=path, status=FileStatus.FAILED, error_type=e.kind, error=str(e))

    error_log.extend(_row_error_records(path.name, result))
    if result.invalid_row_count:
        logger.warning(
            f"{path.name}: {result.invalid_row_count} of {len(result.invoices_data)} invoice rows have validation errors"
        )

    output_path = None
    if config.output_directory:
        output_path = write_result(result, path, Path(config.output_directory))
        logger.debug(f"{path.name}: result written to {output_path}")

    logger.info(f"{path.name}: month={result.invoicing_month} rates={len(result.currency_rates)} invoices={len(result.invoices_data)}")
    return FileOutcome(path=path, status=FileStatus.SUCCESS, result=result, output_path=output_path)


def import_all(files: list[Path], declared_period: Period, config: ImportConfig) -> ImportSummary:
    """Process files in order and aggregate an ImportSummary."""
    start_time = datetime.now(UTC)
    error_log = ErrorLogBuffer(Path(config.logs_directory))
    outcomes: list[FileOutcome] = []

    with ProgressTracker(len(files)) as progress:
        for path in files:
            progress.start_file(path)
            outcome = import_invoice_file(path, declared_period, config, error_log)
            outcomes.append(outcome)
            progress.finish_file(outcome.status is FileStatus.SUCCESS, outcome.invoice_rows)

    log_path = error_log.flush()
    if log_path is not None:
        logger.info(f"error log written: {log_path}")

    return ImportSummary(
        period=declared_period,
        start_time=start_time,
        end_time=datetime.now(UTC),
        outcomes=outcomes,
        error_log_path=log_path,
    )
