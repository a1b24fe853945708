from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""RawInvoiceRow model.

One accepted data row of the invoice grid: the header-aligned cell values plus
two derived fields (computed total and validation errors). Instances are
created once by the parsing pass and never mutated afterwards.
"""

__all__ = [
    "RawInvoiceRow",
    "INVOICE_TOTAL_KEY",
    "VALIDATION_ERRORS_KEY",
]

INVOICE_TOTAL_KEY = "Invoice Total"
VALIDATION_ERRORS_KEY = "validationErrors"


@dataclass(frozen=True)
class RawInvoiceRow:
    """Header-aligned data row (column name -> raw cell value).

    Columns declared by the header but missing from the row carry None.
    """
    row_number: int  # グリッド上の行番号 (1 始まり)
    values: dict[str, Any]
    invoice_total: float | None = None
    validation_errors: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.validation_errors

    def get(self, column: str, default: Any = None) -> Any:
        return self.values.get(column, default)

    def to_dict(self) -> dict[str, Any]:
        data = dict(self.values)
        data[INVOICE_TOTAL_KEY] = self.invoice_total
        data[VALIDATION_ERRORS_KEY] = list(self.validation_errors)
        return data
