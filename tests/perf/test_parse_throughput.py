from __future__ import annotations

import time

from grids import invoice_row, make_grid
from src.models.period import Period
from src.parsing.stage_machine import parse_invoice_grid

"""Performance smoke test: the grid is scanned once, cost linear in rows."""

ROWS = 20_000


def test_parse_large_grid_quickly():
    rows = [invoice_row(**{"Invoice #": f"INV-{i:06d}"}) for i in range(ROWS)]
    grid = make_grid(rows=rows)

    start = time.perf_counter()
    result = parse_invoice_grid(grid, Period(2024, 3))
    elapsed = time.perf_counter() - start

    assert len(result.invoices_data) == ROWS
    # CI でも十分余裕のある上限
    assert elapsed < 5.0, f"parse too slow: {elapsed:.3f}s"
