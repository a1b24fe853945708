from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum
from typing import Any

from ..models.field_schema import DEFAULT_INVOICE_ROW_SCHEMA, FieldSchema
from ..models.invoice_row import RawInvoiceRow
from ..models.parse_result import ParseResult
from ..models.period import Period
from .currency import compute_invoice_total, is_number, parse_currency_symbol
from .errors import (
    CurrencySymbolUnparsable,
    DuplicateCurrencyCode,
    InvalidCurrencyRate,
    InvalidHeaderRow,
    NoCurrencyRatesFound,
    NoInvoiceDataFound,
    PeriodMismatch,
    PeriodUnparsable,
    UnexpectedEmptyRow,
    UnexpectedEndOfGrid,
    UnexpectedRowInPeriodStage,
)
from .period import parse_period_label
from .validator import validate_row

"""Invoice grid stage machine.

Walks the decoded worksheet rows exactly once, moving forward through four
stages:

    PERIOD -> CURRENCY_RATES -> HEADER -> DATA_ROWS

Layout of a valid grid:

    ["March 2024"]                    # period label (single text cell)
    ["USD", 1]                        # one or more rate rows (text, number)
    ["EUR Rate", 0.92]
    ["Customer", "Cust No", ...]      # header row (all text)
    ["ACME", 1001, ...]               # data rows
    []                                # optional terminator; anything after is ignored

The first non-rate row after at least one rate row is handled as the header
row in the same iteration. Any structural problem raises an InvoiceParseError
subclass and no partial result is returned.
"""

__all__ = [
    "InvoiceParsingStage",
    "READY_STATUS",
    "STATUS_COLUMN",
    "INVOICE_NUMBER_COLUMN",
    "PRICE_COLUMN",
    "CURRENCY_COLUMN",
    "parse_invoice_grid",
]

logger = logging.getLogger(__name__)

STATUS_COLUMN = "Status"
READY_STATUS = "Ready"
INVOICE_NUMBER_COLUMN = "Invoice #"
PRICE_COLUMN = "Invoice Total Price"
CURRENCY_COLUMN = "Invoice Currency"


class InvoiceParsingStage(Enum):
    PERIOD = "period"
    CURRENCY_RATES = "currency_rates"
    HEADER = "header"
    DATA_ROWS = "data_rows"


def _trim_row(row: Sequence[Any]) -> list[Any]:
    """Drop trailing absent cells. A row of only absent cells becomes []."""
    cells = list(row)
    while cells and cells[-1] is None:
        cells.pop()
    return cells


def _is_rate_row(row: list[Any]) -> bool:
    return len(row) == 2 and isinstance(row[0], str) and is_number(row[1])


def _is_accepted(values: dict[str, Any]) -> bool:
    invoice_number = values.get(INVOICE_NUMBER_COLUMN)
    return values.get(STATUS_COLUMN) == READY_STATUS or (
        isinstance(invoice_number, str) and len(invoice_number) > 0
    )


def _build_invoice_row(
    row_number: int,
    cells: list[Any],
    columns: list[str],
    rates: dict[str, float],
    schema: FieldSchema,
) -> RawInvoiceRow | None:
    # ヘッダより短い行は不足列を None で埋める。ヘッダを超える列は無視
    values = {column: (cells[i] if i < len(cells) else None) for i, column in enumerate(columns)}
    errors = validate_row(values, schema)

    if not _is_accepted(values):
        logger.debug(f"row {row_number}: skipped (not ready, no invoice number)")
        return None

    total = compute_invoice_total(values.get(PRICE_COLUMN), values.get(CURRENCY_COLUMN), rates)
    errors.extend(total.errors)
    return RawInvoiceRow(
        row_number=row_number,
        values=values,
        invoice_total=total.value,
        validation_errors=tuple(errors),
    )


def parse_invoice_grid(
    grid: Sequence[Sequence[Any]],
    declared_period: Period,
    row_schema: FieldSchema = DEFAULT_INVOICE_ROW_SCHEMA,
) -> ParseResult:
    """Parse a decoded invoice worksheet into a ParseResult.

    Parameters
    ----------
    grid: ordered rows of untyped cells (str / number / None)
    declared_period: period the caller expects the report to cover
    row_schema: field schema applied to every data row

    Raises
    ------
    InvoiceParseError subclasses for every structural problem.
    """
    stage = InvoiceParsingStage.PERIOD
    actual_period: Period | None = None
    rates: dict[str, float] = {}
    columns: list[str] = []
    invoices: list[RawInvoiceRow] = []

    for row_number, raw_row in enumerate(grid, start=1):
        row = _trim_row(raw_row)

        if not row:
            if stage is InvoiceParsingStage.DATA_ROWS:
                if not invoices:
                    raise NoInvoiceDataFound(
                        "No invoice data rows found before empty row",
                        row_number=row_number,
                        stage=stage.value,
                    )
                logger.debug(f"row {row_number}: empty row terminates data section")
                break
            raise UnexpectedEmptyRow(
                f"Unexpected empty row for stage {stage.value}",
                row_number=row_number,
                stage=stage.value,
            )

        if stage is InvoiceParsingStage.PERIOD:
            if len(row) != 1 or not isinstance(row[0], str):
                raise UnexpectedRowInPeriodStage(
                    "Expected a single text cell with the invoicing month",
                    row_number=row_number,
                    stage=stage.value,
                )
            try:
                actual_period = parse_period_label(row[0])
            except PeriodUnparsable as e:
                raise PeriodUnparsable(e.message, row_number=row_number, stage=stage.value) from e
            if actual_period != declared_period:
                raise PeriodMismatch(
                    f"Passed invoicing month {declared_period} doesn't match "
                    f"the actual invoicing month {actual_period}",
                    row_number=row_number,
                    stage=stage.value,
                )
            stage = InvoiceParsingStage.CURRENCY_RATES
            logger.debug(f"row {row_number}: invoicing month {actual_period}")
            continue

        if stage is InvoiceParsingStage.CURRENCY_RATES:
            if _is_rate_row(row):
                try:
                    symbol = parse_currency_symbol(row[0])
                except CurrencySymbolUnparsable as e:
                    raise CurrencySymbolUnparsable(
                        e.message, row_number=row_number, stage=stage.value
                    ) from e
                if symbol in rates:
                    raise DuplicateCurrencyCode(
                        f"Duplicate currency symbol: {symbol}",
                        row_number=row_number,
                        stage=stage.value,
                    )
                if not row[1] > 0:
                    raise InvalidCurrencyRate(
                        f"Currency rate for {symbol} must be positive: {row[1]}",
                        row_number=row_number,
                        stage=stage.value,
                    )
                rates[symbol] = row[1]
                continue
            if not rates:
                raise NoCurrencyRatesFound(
                    "Expected at least one currency rate row",
                    row_number=row_number,
                    stage=stage.value,
                )
            # この行はヘッダ行として同じ反復内で処理する
            stage = InvoiceParsingStage.HEADER
            logger.debug(f"row {row_number}: {len(rates)} currency rates collected")

        if stage is InvoiceParsingStage.HEADER:
            if not all(isinstance(cell, str) for cell in row):
                raise InvalidHeaderRow(
                    "Header row must contain only text cells",
                    row_number=row_number,
                    stage=stage.value,
                )
            columns = [cell.strip() for cell in row]
            stage = InvoiceParsingStage.DATA_ROWS
            logger.debug(f"row {row_number}: header columns={columns}")
            continue

        item = _build_invoice_row(row_number, row, columns, rates, row_schema)
        if item is not None:
            invoices.append(item)
    else:
        _check_end_of_grid(stage, rates, invoices, len(grid))

    assert actual_period is not None
    return ParseResult(
        invoicing_month=actual_period,
        currency_rates=dict(rates),
        invoices_data=tuple(invoices),
    )


def _check_end_of_grid(
    stage: InvoiceParsingStage,
    rates: dict[str, float],
    invoices: list[RawInvoiceRow],
    row_count: int,
) -> None:
    """Raise if the grid ended before a complete document was read."""
    if stage is InvoiceParsingStage.DATA_ROWS:
        if not invoices:
            raise NoInvoiceDataFound(
                "No invoice data rows found", row_number=row_count, stage=stage.value
            )
        return
    if stage is InvoiceParsingStage.CURRENCY_RATES and not rates:
        raise NoCurrencyRatesFound(
            "Expected at least one currency rate row", row_number=row_count, stage=stage.value
        )
    raise UnexpectedEndOfGrid(
        f"Grid ended during stage {stage.value}", row_number=row_count, stage=stage.value
    )
