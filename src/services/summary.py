from __future__ import annotations

from ..models.processing_result import ImportSummary

"""SUMMARY line rendering.

Format:
SUMMARY month={YYYY-MM} files={total} success={success} failed={failed}
invoices={rows} invalid_rows={invalid} elapsed_sec={elapsed}
"""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # 指数表記を避ける
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(summary: ImportSummary) -> str:
    """Render a SUMMARY line for an import run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> from src.models.period import Period
        >>> start = datetime(2024, 3, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 3, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> render_summary_line(ImportSummary(Period(2024, 3), start, end))
        'SUMMARY month=2024-03 files=0 success=0 failed=0 invoices=0 invalid_rows=0 elapsed_sec=2'
    """
    return (
        f"SUMMARY month={summary.period} "
        f"files={summary.total_files} "
        f"success={summary.success_files} "
        f"failed={summary.failed_files} "
        f"invoices={summary.invoice_rows} "
        f"invalid_rows={summary.invalid_rows} "
        f"elapsed_sec={_format_seconds(summary.elapsed_seconds)}"
    )
