# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from src.logging.init import reset_logging
from src.models.period import Period

from grids import invoice_row, make_excel, make_grid


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def march_2024() -> Period:
    return Period(2024, 3)


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("INVOICE_IMPORT_CONFIG", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """row_schema:
  - {name: Customer, kind: text}
  - {name: Cust No, kind: text_or_number}
  - {name: Project Type, kind: text}
  - {name: Quantity, kind: number}
  - {name: Price Per Item, kind: number}
  - {name: Item Price Currency, kind: text}
  - {name: Invoice Total Price, kind: number}
  - {name: Invoice Currency, kind: text}
  - {name: Status, kind: text}
  - {name: Notes, kind: text, required: false}
output_directory: ./out
logs_directory: ./logs
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def valid_excel(temp_workdir: Path) -> Path:
    rows = make_grid(
        rates=[["USD", 1], ["EUR Rate", 0.92], ["GBP", 0.8]],
        rows=[
            invoice_row(),
            invoice_row(**{"Invoice #": None, "Status": "Draft"}),
            invoice_row(**{"Invoice #": "INV-002", "Invoice Currency": "GBP", "Customer": "Globex"}),
        ],
        trailer=[[None], ["Prepared by finance"]],
    )
    return make_excel(temp_workdir / "data" / "march.xlsx", rows)
