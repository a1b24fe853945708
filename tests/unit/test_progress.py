from __future__ import annotations

from pathlib import Path
from unittest.mock import Mock, patch

from src.services.progress import ProgressTracker, is_tty_enabled


def test_is_tty_enabled_returns_stdout_isatty():
    with patch("sys.stdout.isatty", return_value=True):
        assert is_tty_enabled() is True
    with patch("sys.stdout.isatty", return_value=False):
        assert is_tty_enabled() is False


def test_tracker_disabled_without_tty():
    with patch("src.services.progress.is_tty_enabled", return_value=False):
        tracker = ProgressTracker(3)
        tracker.start_file(Path("a.xlsx"))
        tracker.finish_file(success=False)
        tracker.close()
    assert tracker.pbar is None
    assert tracker.current_file == 1
    assert tracker.failed_files == 1


def test_tracker_with_tty_updates_bar():
    mock_pbar = Mock()
    with patch("src.services.progress.is_tty_enabled", return_value=True), \
         patch("src.services.progress.tqdm", return_value=mock_pbar) as mock_tqdm:
        with ProgressTracker(2, description="Parsing invoices") as tracker:
            tracker.start_file(Path("march.xlsx"))
            mock_pbar.set_description.assert_called_with("Parsing invoices (march.xlsx)")
            tracker.finish_file(success=True, invoice_rows=4)

    mock_tqdm.assert_called_once_with(
        total=2, desc="Parsing invoices", unit="file", leave=True, ncols=80, ascii=True
    )
    mock_pbar.update.assert_called_once_with(1)
    mock_pbar.set_postfix.assert_called_once_with(failed=0, invoices=4)
    mock_pbar.close.assert_called_once()
    assert tracker.pbar is None
