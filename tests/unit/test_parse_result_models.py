from __future__ import annotations

import json
from datetime import datetime

from src.models.invoice_row import RawInvoiceRow
from src.models.parse_result import ParseResult
from src.models.period import Period


def _result() -> ParseResult:
    rows = (
        RawInvoiceRow(row_number=5, values={"Customer": "ACME", "Status": "Ready"}, invoice_total=80.0),
        RawInvoiceRow(
            row_number=6,
            values={"Customer": None, "Status": "Ready"},
            validation_errors=("Customer is required",),
        ),
    )
    return ParseResult(
        invoicing_month=Period(2024, 3),
        currency_rates={"USD": 1, "GBP": 0.8},
        invoices_data=rows,
    )


def test_to_dict_serialized_form():
    data = _result().to_dict()
    assert data == {
        "invoicingMonth": "2024-03",
        "currencyRates": {"USD": 1, "GBP": 0.8},
        "invoicesData": [
            {"Customer": "ACME", "Status": "Ready", "Invoice Total": 80.0, "validationErrors": []},
            {
                "Customer": None,
                "Status": "Ready",
                "Invoice Total": None,
                "validationErrors": ["Customer is required"],
            },
        ],
    }


def test_to_json_preserves_column_order():
    payload = json.loads(_result().to_json())
    assert list(payload["invoicesData"][0]) == ["Customer", "Status", "Invoice Total", "validationErrors"]


def test_to_json_handles_datetime_cells():
    row = RawInvoiceRow(row_number=5, values={"Due": datetime(2024, 3, 31)})
    result = ParseResult(Period(2024, 3), {"USD": 1}, (row,))
    assert json.loads(result.to_json())["invoicesData"][0]["Due"] == "2024-03-31T00:00:00"


def test_invalid_row_count():
    result = _result()
    assert result.invalid_row_count == 1
    assert result.invoices_data[0].is_valid
    assert not result.invoices_data[1].is_valid
