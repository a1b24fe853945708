#!/usr/bin/env python3
"""Generate a synthetic monthly invoice report workbook.

Layout written to the first worksheet:
- Row 1: invoicing month label (e.g. "Mar 2024")
- Rows 2..: currency rate rows ("USD", 1.0 / "EUR Rate", 0.92 ...)
- Next row: header row
- Then data rows, a blank row and a free-form note

Useful for manual CLI runs and for timing the parser on large reports.
"""
from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

HEADER = [
    "Customer",
    "Cust No",
    "Project Type",
    "Quantity",
    "Price Per Item",
    "Item Price Currency",
    "Invoice Total Price",
    "Invoice Currency",
    "Status",
    "Invoice #",
]

RATES = {"USD": 1.0, "EUR": 0.92, "GBP": 0.8, "JPY": 151.3, "CHF": 0.88}
CUSTOMERS = ["ACME Corp", "Globex", "Initech", "Umbrella", "Hooli", "Stark Industries"]
PROJECT_TYPES = ["Consulting", "Development", "Support", "Training"]


def generate_report_rows(
    month: str,
    rows: int,
    currencies: list[str],
    draft_ratio: float = 0.1,
    seed: int = 42,
) -> list[list[Any]]:
    """Build the full grid (metadata + header + data rows) as plain lists."""
    rng = np.random.default_rng(seed)
    year, mon = (int(p) for p in month.split("-"))
    label = date(year, mon, 1).strftime("%b %Y")

    grid: list[list[Any]] = [[label]]
    for i, code in enumerate(currencies):
        # 表記揺れ: 奇数番目は "XXX Rate"
        grid.append([f"{code} Rate" if i % 2 else code, RATES[code]])
    grid.append(list(HEADER))

    for j in range(rows):
        quantity = int(rng.integers(1, 50))
        price = float(np.round(rng.uniform(10, 500), 2))
        currency = str(rng.choice(currencies))
        draft = bool(rng.random() < draft_ratio)
        grid.append([
            str(rng.choice(CUSTOMERS)),
            int(rng.integers(1000, 9999)),
            str(rng.choice(PROJECT_TYPES)),
            quantity,
            price,
            currency,
            round(quantity * price, 2),
            currency,
            "Draft" if draft else "Ready",
            None if draft else f"INV-{j + 1:06d}",
        ])

    grid.append([])
    grid.append([f"Generated sample report ({rows} rows)"])
    return grid


def create_report_file(output_path: Path, grid: list[list[Any]]) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        pd.DataFrame(grid).to_excel(writer, sheet_name="Invoices", header=False, index=False)
    print(f"Created Excel file: {output_path}")
    print(f"  Grid rows: {len(grid):,}")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate a synthetic monthly invoice report",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s data/2024-03.xlsx --month 2024-03
  %(prog)s big.xlsx --month 2024-03 --rows 20000 --currencies USD EUR GBP
        """,
    )
    parser.add_argument("output", type=Path, help="Output Excel file path")
    parser.add_argument("--month", required=True, help="Invoicing month (YYYY-MM)")
    parser.add_argument("--rows", type=int, default=200, help="Number of data rows (default: 200)")
    parser.add_argument(
        "--currencies",
        nargs="+",
        default=["USD", "EUR", "GBP"],
        choices=sorted(RATES),
        help="Currencies in the rate table (default: USD EUR GBP)",
    )
    parser.add_argument("--draft-ratio", type=float, default=0.1, help="Share of draft rows (default: 0.1)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--dry-run", action="store_true", help="Show the plan without writing a file")
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    if not 0 <= args.draft_ratio < 1:
        print("Error: --draft-ratio must be in [0, 1)", file=sys.stderr)
        return 1

    print("Report generation plan:")
    print(f"  Output file: {args.output}")
    print(f"  Month: {args.month}")
    print(f"  Data rows: {args.rows:,}")
    print(f"  Currencies: {', '.join(args.currencies)}")

    if args.dry_run:
        print("\n[DRY RUN] Would generate the report but not creating it.")
        return 0

    try:
        grid = generate_report_rows(args.month, args.rows, args.currencies, args.draft_ratio, args.seed)
        create_report_file(args.output, grid)
        return 0
    except (OSError, ValueError) as e:
        print(f"\nError generating report: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
