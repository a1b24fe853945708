from __future__ import annotations

"""Exception hierarchy for invoice grid parsing.

Hard (structural) errors abort the whole parse and are raised as subclasses of
InvoiceParseError. Each subclass carries a distinct UPPER_SNAKE ``kind`` which
is also used as ``error_type`` in the JSON Lines error log.

Soft (field-level) errors are never raised; they are attached to the
RawInvoiceRow they belong to.
"""

__all__ = [
    "InvoiceImportError",
    "InvalidPeriodFormat",
    "InvoiceParseError",
    "PeriodUnparsable",
    "PeriodMismatch",
    "UnexpectedRowInPeriodStage",
    "UnexpectedEmptyRow",
    "NoCurrencyRatesFound",
    "DuplicateCurrencyCode",
    "CurrencySymbolUnparsable",
    "InvalidCurrencyRate",
    "InvalidHeaderRow",
    "NoInvoiceDataFound",
    "UnexpectedEndOfGrid",
]


class InvoiceImportError(Exception):
    """Base class for all errors raised by the invoice import tool."""
    kind = "INVOICE_IMPORT_ERROR"


class InvalidPeriodFormat(InvoiceImportError):
    """Caller-declared period is not a valid ``YYYY-MM`` string."""
    kind = "INVALID_PERIOD_FORMAT"


class InvoiceParseError(InvoiceImportError):
    """Hard error raised while walking the grid.

    Attributes:
        row_number: 1-based grid row where parsing stopped (-1 when unknown)
        stage: name of the parsing stage active at that row (None when unknown)
    """
    kind = "INVOICE_PARSE_ERROR"

    def __init__(self, message: str, *, row_number: int = -1, stage: str | None = None) -> None:
        self.message = message
        self.row_number = row_number
        self.stage = stage
        super().__init__(self._format())

    def _format(self) -> str:
        location = []
        if self.stage is not None:
            location.append(f"stage={self.stage}")
        if self.row_number >= 0:
            location.append(f"row={self.row_number}")
        if not location:
            return self.message
        return f"{self.message} ({' '.join(location)})"


class PeriodUnparsable(InvoiceParseError):
    kind = "PERIOD_UNPARSABLE"


class PeriodMismatch(InvoiceParseError):
    kind = "PERIOD_MISMATCH"


class UnexpectedRowInPeriodStage(InvoiceParseError):
    kind = "UNEXPECTED_ROW_IN_PERIOD_STAGE"


class UnexpectedEmptyRow(InvoiceParseError):
    kind = "UNEXPECTED_EMPTY_ROW"


class NoCurrencyRatesFound(InvoiceParseError):
    kind = "NO_CURRENCY_RATES_FOUND"


class DuplicateCurrencyCode(InvoiceParseError):
    kind = "DUPLICATE_CURRENCY_CODE"


class CurrencySymbolUnparsable(InvoiceParseError):
    kind = "CURRENCY_SYMBOL_UNPARSABLE"


class InvalidCurrencyRate(InvoiceParseError):
    kind = "INVALID_CURRENCY_RATE"


class InvalidHeaderRow(InvoiceParseError):
    kind = "INVALID_HEADER_ROW"


class NoInvoiceDataFound(InvoiceParseError):
    kind = "NO_INVOICE_DATA_FOUND"


class UnexpectedEndOfGrid(InvoiceParseError):
    kind = "UNEXPECTED_END_OF_GRID"
