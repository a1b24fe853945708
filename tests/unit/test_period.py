from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.models.period import Period
from src.parsing.errors import InvalidPeriodFormat, PeriodUnparsable
from src.parsing.period import parse_declared_period, parse_period_label


@pytest.mark.parametrize(
    "label",
    ["03 2024", "3 2024", "Mar 2024", "March 2024", "march 2024", "  Mar   2024 "],
)
def test_parse_period_label_accepted_forms(label: str):
    assert parse_period_label(label) == Period(2024, 3)


@pytest.mark.parametrize("label", ["", "2024-03", "13 2024", "Foo 2024", "March", "31/03/2024"])
def test_parse_period_label_rejects(label: str):
    with pytest.raises(PeriodUnparsable):
        parse_period_label(label)


def test_parse_period_label_non_string():
    with pytest.raises(PeriodUnparsable):
        parse_period_label(202403)  # type: ignore[arg-type]


def test_parse_declared_period_canonical():
    period = parse_declared_period("2024-03")
    assert period == Period(2024, 3)
    assert str(period) == "2024-03"


@pytest.mark.parametrize("text", ["2024-3", "2024-13", "2024-00", "24-03", "2024/03", "2024-03-01", "", "0000-01"])
def test_parse_declared_period_invalid(text: str):
    with pytest.raises(InvalidPeriodFormat):
        parse_declared_period(text)


def test_period_equality_ignores_day_time_and_tz():
    a = Period.from_date(datetime(2024, 3, 1, 0, 0, tzinfo=timezone.utc))
    b = Period.from_date(datetime(2024, 3, 31, 23, 59))
    assert a == b
    assert hash(a) == hash(b)


def test_period_rejects_invalid_month():
    with pytest.raises(ValueError):
        Period(2024, 13)


def test_period_str_zero_pads():
    assert str(Period(999, 1)) == "0999-01"
