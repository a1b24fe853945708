from __future__ import annotations

from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

"""Spreadsheet decoding: first worksheet -> grid of raw cells.

The parsing core consumes a plain ``list[list[Any]]``; this module is the only
place that knows about pandas/openpyxl.

- ヘッダ推定はしない (header=None で生読み)
- 空セル (空文字含む) は None、"NA" 等の文字列は NaN 化しない。numpy スカラーは Python スカラーに変換
- 行末の空セルは除去し、全セル空の行は [] として残す (データ区間の終端判定に使う)
"""

__all__ = [
    "SUPPORTED_SUFFIXES",
    "WorkbookReadError",
    "UnsupportedFileType",
    "read_invoice_grid",
    "frame_to_grid",
]

SUPPORTED_SUFFIXES = (".xlsx", ".xls")


class WorkbookReadError(Exception):
    """Raised when the workbook cannot be opened or has no worksheet."""


class UnsupportedFileType(WorkbookReadError):
    """Raised for files that are not Excel workbooks."""


def _to_cell(value: Any) -> Any:
    if value is None or (isinstance(value, str) and value == ""):
        return None
    if isinstance(value, float) and np.isnan(value):
        return None
    if value is pd.NaT:
        return None
    if isinstance(value, np.generic):
        value = value.item()
        if isinstance(value, float) and np.isnan(value):
            return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    return value


def _to_row(values: list[Any]) -> list[Any]:
    cells = [_to_cell(v) for v in values]
    while cells and cells[-1] is None:
        cells.pop()
    return cells


def frame_to_grid(df: pd.DataFrame) -> list[list[Any]]:
    """Convert a header-less DataFrame into a list of trimmed rows."""
    # object に寄せてから取り出す (int 列が float に化けるのを避ける)
    return [_to_row(list(raw)) for raw in df.astype(object).itertuples(index=False, name=None)]


def read_invoice_grid(path: Path) -> list[list[Any]]:
    """Read the first worksheet of an Excel file as a grid of raw cells.

    Raises:
        UnsupportedFileType: suffix is not .xlsx / .xls
        WorkbookReadError: file missing, unreadable, or without worksheets
    """
    if path.suffix.lower() not in SUPPORTED_SUFFIXES:
        raise UnsupportedFileType(f"Only Excel files are allowed: {path.name}")
    if not path.exists():
        raise WorkbookReadError(f"file not found: {path}")
    try:
        with pd.ExcelFile(path) as xls:
            if not xls.sheet_names:
                raise WorkbookReadError(f"workbook has no worksheets: {path.name}")
            df = xls.parse(xls.sheet_names[0], header=None, keep_default_na=False, na_values=[""])
    except WorkbookReadError:
        raise
    except Exception as e:
        raise WorkbookReadError(f"failed to read workbook {path.name}: {e}") from e
    return frame_to_grid(df)
