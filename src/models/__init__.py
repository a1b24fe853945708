"""Domain models for the invoice spreadsheet importer."""

from .error_record import ErrorRecord
from .field_schema import DEFAULT_INVOICE_ROW_SCHEMA, FieldKind, FieldRule, FieldSchema
from .invoice_row import RawInvoiceRow
from .parse_result import ParseResult
from .period import Period
from .processing_result import FileOutcome, FileStatus, ImportSummary

__all__ = [
    # Core parsing models
    "Period",
    "RawInvoiceRow",
    "ParseResult",
    # Row schema
    "FieldKind",
    "FieldRule",
    "FieldSchema",
    "DEFAULT_INVOICE_ROW_SCHEMA",
    # Run / logging models
    "ErrorRecord",
    "FileOutcome",
    "FileStatus",
    "ImportSummary",
]
