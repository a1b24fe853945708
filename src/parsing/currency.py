from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .errors import CurrencySymbolUnparsable

"""Currency helpers: rate-table label parsing and invoice total conversion."""

__all__ = [
    "RATE_MARKER",
    "TotalStatus",
    "TotalResult",
    "parse_currency_symbol",
    "compute_invoice_total",
    "is_number",
]

RATE_MARKER = "Rate"

_CURRENCY_CODE_RE = re.compile(r"^[A-Z]{3}$")


def is_number(value: Any) -> bool:
    # bool は int のサブクラスだが数値扱いしない
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_currency_symbol(label: str) -> str:
    """Extract a currency code from a rate-table label.

    Accepts an exact 3-letter uppercase code ("USD") or a label containing
    "Rate" whose trimmed prefix is non-empty ("EUR Rate" -> "EUR").

    Raises:
        CurrencySymbolUnparsable: neither form applies
    """
    if _CURRENCY_CODE_RE.match(label):
        return label
    if RATE_MARKER in label:
        symbol = label.split(RATE_MARKER, 1)[0].strip()
        if symbol:
            return symbol
    raise CurrencySymbolUnparsable(f"Unable to parse currency symbol: {label!r}")


class TotalStatus(Enum):
    COMPUTED = "computed"
    LOOKUP_FAILED = "lookup_failed"
    INSUFFICIENT_DATA = "insufficient_data"


@dataclass(frozen=True)
class TotalResult:
    """Outcome of an invoice total conversion.

    - COMPUTED: value is set, errors empty
    - LOOKUP_FAILED: value is None, errors describe the failed lookup
    - INSUFFICIENT_DATA: value is None, errors empty (price or currency missing)
    """
    status: TotalStatus
    value: float | None = None
    errors: tuple[str, ...] = ()

    @classmethod
    def computed(cls, value: float) -> TotalResult:
        return cls(TotalStatus.COMPUTED, value=value)

    @classmethod
    def lookup_failed(cls, *errors: str) -> TotalResult:
        return cls(TotalStatus.LOOKUP_FAILED, errors=tuple(errors))

    @classmethod
    def insufficient_data(cls) -> TotalResult:
        return cls(TotalStatus.INSUFFICIENT_DATA)


def compute_invoice_total(price: Any, currency: Any, rates: Mapping[str, float]) -> TotalResult:
    """Convert an invoice price into the reference currency.

    A currency that is present (not None, not "") but missing from ``rates``
    is a lookup failure. A numeric price with a text currency yields
    ``price * rate``. Anything else is insufficient data, not an error.
    """
    if currency is not None and currency != "":
        if not isinstance(currency, str) or currency not in rates:
            return TotalResult.lookup_failed(f"Currency rate not found: {currency}")
    if isinstance(currency, str) and currency and is_number(price):
        return TotalResult.computed(price * rates[currency])
    return TotalResult.insufficient_data()
