from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

"""Period model: a calendar year-month value.

Equality is defined by (year, month) only. Day, time-of-day and tzinfo of any
source date are discarded on construction so two labels denoting the same
month always compare equal.
"""

__all__ = [
    "Period",
]


@dataclass(frozen=True, order=True)
class Period:
    """Invoicing period (calendar month)."""
    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"month out of range: {self.month}")
        if not 1 <= self.year <= 9999:
            raise ValueError(f"year out of range: {self.year}")

    @classmethod
    def from_date(cls, value: date | datetime) -> Period:
        # datetime は date のサブクラス。日/時刻/tz は捨てる
        return cls(year=value.year, month=value.month)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"
