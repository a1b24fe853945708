from __future__ import annotations

import json

from grids import HEADER, invoice_row, make_grid
from src.models.period import Period
from src.parsing.stage_machine import parse_invoice_grid

"""Serialized ParseResult contract: invoicingMonth / currencyRates / invoicesData."""


def _payload(grid) -> dict:
    return json.loads(parse_invoice_grid(grid, Period(2024, 3)).to_json())


def test_top_level_keys():
    payload = _payload(make_grid())
    assert list(payload) == ["invoicingMonth", "currencyRates", "invoicesData"]
    assert payload["invoicingMonth"] == "2024-03"


def test_each_invoice_has_all_columns_plus_derived_fields():
    grid = make_grid(rows=[invoice_row(), ["Solo", None, None, None, None, None, None, None, "Ready"]])
    for item in _payload(grid)["invoicesData"]:
        assert list(item) == HEADER + ["Invoice Total", "validationErrors"]
        assert isinstance(item["validationErrors"], list)
        assert item["Invoice Total"] is None or isinstance(item["Invoice Total"], (int, float))


def test_ready_row_missing_fields_reports_errors_inline():
    grid = make_grid(rows=[["Solo", None, None, None, None, None, None, None, "Ready"]])
    item = _payload(grid)["invoicesData"][0]
    assert item["Invoice Total"] is None
    assert item["validationErrors"] == [
        "Cust No is required",
        "Project Type is required",
        "Quantity is required",
        "Price Per Item is required",
        "Item Price Currency is required",
        "Invoice Total Price is required",
        "Invoice Currency is required",
    ]


def test_gbp_total_with_and_without_rate():
    row = invoice_row(**{"Invoice Currency": "GBP", "Invoice Total Price": 100})
    missing = _payload(make_grid(rows=[row]))["invoicesData"][0]
    assert missing["Invoice Total"] is None
    assert any("GBP" in e for e in missing["validationErrors"])

    present = _payload(make_grid(rates=[["USD", 1], ["GBP", 0.8]], rows=[row]))["invoicesData"][0]
    assert present["Invoice Total"] == 80
    assert present["validationErrors"] == []


def test_serialization_is_byte_identical_across_runs():
    grid = make_grid(rates=[["USD", 1], ["EUR Rate", 0.92]])
    first = parse_invoice_grid(grid, Period(2024, 3)).to_json()
    second = parse_invoice_grid(grid, Period(2024, 3)).to_json()
    assert first.encode("utf-8") == second.encode("utf-8")
