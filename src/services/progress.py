from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""File progress display with tqdm (TTY only).

A single tqdm bar tracks files processed. In non-TTY environments (CI, pipes)
the bar is disabled so no ANSI control sequences end up in the output.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    """True when stdout is a TTY and progress should be displayed."""
    return sys.stdout.isatty()


class ProgressTracker:
    """Progress tracker for invoice file processing."""

    def __init__(self, total_files: int, *, description: str = "Parsing invoices") -> None:
        self.total_files = total_files
        self.description = description
        self.current_file = 0
        self.failed_files = 0
        self.invoice_rows = 0

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_files,
                desc=description,
                unit="file",
                leave=True,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def start_file(self, file_path: Path) -> None:
        self.current_file += 1
        if self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({file_path.name})")

    def finish_file(self, success: bool = True, invoice_rows: int = 0) -> None:
        """Advance the bar and refresh the failed/invoices postfix."""
        if not success:
            self.failed_files += 1
        self.invoice_rows += invoice_rows
        if self.pbar is not None:
            self.pbar.update(1)
            self.pbar.set_description(self.description)
            self.pbar.set_postfix(failed=self.failed_files, invoices=self.invoice_rows)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
