from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any

from .invoice_row import RawInvoiceRow
from .period import Period

"""ParseResult model: the single artifact produced by a successful parse.

Serialized form:
    {
      "invoicingMonth": "YYYY-MM",
      "currencyRates": {"USD": 1, ...},
      "invoicesData": [{<columns>..., "Invoice Total": ..., "validationErrors": [...]}]
    }
"""

__all__ = [
    "ParseResult",
]


def _json_default(value: Any) -> Any:
    # Excel の日付セルは datetime で来る
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


@dataclass(frozen=True)
class ParseResult:
    invoicing_month: Period
    currency_rates: dict[str, float]
    invoices_data: tuple[RawInvoiceRow, ...]

    @property
    def invalid_row_count(self) -> int:
        return sum(1 for row in self.invoices_data if not row.is_valid)

    def to_dict(self) -> dict[str, Any]:
        return {
            "invoicingMonth": str(self.invoicing_month),
            "currencyRates": dict(self.currency_rates),
            "invoicesData": [row.to_dict() for row in self.invoices_data],
        }

    def to_json(self, indent: int | None = None) -> str:
        """Serialize deterministically (insertion order preserved, no sorting)."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent, default=_json_default)
