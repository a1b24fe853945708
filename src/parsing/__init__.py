"""Invoice grid parsing core (pure, synchronous, no I/O)."""

from .currency import TotalResult, TotalStatus, compute_invoice_total, parse_currency_symbol
from .errors import InvalidPeriodFormat, InvoiceImportError, InvoiceParseError
from .period import parse_declared_period, parse_period_label
from .stage_machine import InvoiceParsingStage, parse_invoice_grid
from .validator import validate_row

__all__ = [
    "InvalidPeriodFormat",
    "InvoiceImportError",
    "InvoiceParseError",
    "InvoiceParsingStage",
    "TotalResult",
    "TotalStatus",
    "compute_invoice_total",
    "parse_currency_symbol",
    "parse_declared_period",
    "parse_invoice_grid",
    "parse_period_label",
    "validate_row",
]
