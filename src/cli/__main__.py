from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from src.config.loader import ConfigError, ImportConfig, resolve_config
from src.logging.init import enable_debug, log_summary, setup_logging
from src.models.processing_result import FileStatus
from src.parsing.errors import InvalidPeriodFormat
from src.parsing.period import parse_declared_period
from src.services.importer import ProcessingError, collect_input_files, import_all
from src.services.summary import render_summary_line

"""CLI entrypoint.

    python -m src.cli PATH [PATH ...] --month YYYY-MM [--config FILE] [--output-dir DIR] [--debug]

PATH may be an Excel file or a directory (scanned non-recursively). With a
single file and no output directory, the parse result JSON is printed to
stdout.

Exit codes:
    0  every file parsed
    1  fatal startup error (bad --month, config, missing paths)
    2  at least one file failed with a hard parse / read error
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env (INVOICE_IMPORT_CONFIG etc.). Failure only warns."""
    try:
        if path.exists():
            load_dotenv(dotenv_path=path, override=override)
    except OSError as e:  # pragma: no cover
        print(f"WARNING: failed to load .env via python-dotenv: {e}")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Monthly invoice spreadsheet parser")
    p.add_argument("paths", nargs="+", type=Path, help="Excel files or directories")
    p.add_argument("--month", required=True, help="Declared invoicing month (YYYY-MM)")
    p.add_argument("--config", type=Path, default=None, help="Config YAML (default: config/import.yml)")
    p.add_argument("--output-dir", type=Path, default=None, help="Write one <name>.json per parsed file")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみ sys.argv を読む (テストで main([...]) を呼ぶため)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        enable_debug()

    try:
        declared_period = parse_declared_period(args.month)
    except InvalidPeriodFormat as e:
        logger.error(f"month: {e}")
        return EXIT_FATAL

    try:
        cfg = resolve_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL
    if args.output_dir is not None:
        cfg = ImportConfig(
            row_schema=cfg.row_schema,
            output_directory=str(args.output_dir),
            logs_directory=cfg.logs_directory,
        )

    try:
        files = collect_input_files(args.paths)
    except ProcessingError as e:
        logger.error(f"input: {e}")
        return EXIT_FATAL

    logger.info(f"Parsing {len(files)} file(s) for {declared_period}")
    summary = import_all(files, declared_period, cfg)

    # 単一ファイル + 出力先なし: 結果 JSON を stdout に出す
    if len(summary.outcomes) == 1 and cfg.output_directory is None:
        outcome = summary.outcomes[0]
        if outcome.result is not None:
            print(outcome.result.to_json(indent=2))

    summary_line = render_summary_line(summary)
    # log_summary が "SUMMARY " を付けるので除去
    log_summary(summary_line[len("SUMMARY "):])

    if any(o.status is FileStatus.FAILED for o in summary.outcomes):
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
