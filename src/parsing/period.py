from __future__ import annotations

import re
from datetime import datetime

from ..models.period import Period
from .errors import InvalidPeriodFormat, PeriodUnparsable

"""Period parsing.

Two entry points:
- parse_period_label: free-text month label found inside the grid
  ("03 2024", "Mar 2024", "March 2024", "3 2024")
- parse_declared_period: strict ``YYYY-MM`` supplied by the caller
"""

__all__ = [
    "PERIOD_LABEL_FORMATS",
    "parse_period_label",
    "parse_declared_period",
]

# 試行順。%m は 1 桁/2 桁どちらも受け付ける
PERIOD_LABEL_FORMATS: tuple[str, ...] = ("%m %Y", "%b %Y", "%B %Y")

_DECLARED_PERIOD_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def parse_period_label(label: str) -> Period:
    """Parse an in-grid month label into a Period.

    The first format that yields a real calendar date wins.

    Raises:
        PeriodUnparsable: no format matches
    """
    if not isinstance(label, str):
        raise PeriodUnparsable(f"Unable to parse invoicing month: {label!r}")
    text = " ".join(label.split())
    for fmt in PERIOD_LABEL_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt)
        except ValueError:
            continue
        return Period.from_date(parsed)
    raise PeriodUnparsable(f"Unable to parse invoicing month: {label!r}")


def parse_declared_period(text: str) -> Period:
    """Parse a caller-declared ``YYYY-MM`` period.

    Raises:
        InvalidPeriodFormat: malformed string or non-existent calendar month
    """
    if not isinstance(text, str) or not _DECLARED_PERIOD_RE.match(text):
        raise InvalidPeriodFormat("invoicingMonth must be in YYYY-MM format")
    year, month = (int(part) for part in text.split("-"))
    try:
        return Period(year=year, month=month)
    except ValueError as e:
        raise InvalidPeriodFormat(f"Invalid invoicing month: {text}") from e
