from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import ConfigError, load_config, resolve_config_path
from ..errors import NoQuoteTableError, QuoteContractError, WorkbookReadError
from ..excel.reader import list_sheet_names
from ..logging.init import enable_debug, log_summary, setup_logging
from ..services.batch import ProcessingError, process_all, write_quote_json
from ..services.extract import extract_quote_from_file
from ..services.summary import render_summary_line

"""Command line interface.

Commands:
- ``sheets FILE``: list sheet names
- ``extract FILE``: print (or write) the quote JSON of one workbook
- ``batch``: extract every workbook of the configured directory
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load ``.env`` (QUOTE_CONFIG etc.); a broken file only produces a warning."""
    try:
        if path.exists():
            load_dotenv(dotenv_path=path, override=override)
    except Exception as e:  # pragma: no cover
        print(f"WARNING: failed to load .env via python-dotenv: {e}", file=sys.stderr)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="quote-extract", description="Spreadsheet quotation extractor")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    sp = sub.add_parser("sheets", help="List sheet names of a workbook")
    sp.add_argument("file", help="Path to .xlsx file")

    ep = sub.add_parser("extract", help="Extract the quotation of one workbook as JSON")
    ep.add_argument("file", help="Path to .xlsx file")
    ep.add_argument("--sheet", dest="sheet_name", help="Sheet to try first")
    ep.add_argument("--project", dest="project_name", help="Project name to record")
    ep.add_argument("--client", dest="client_name", help="Client name to record")
    ep.add_argument("--source-label", dest="source_label", help="Source label (default: sheet name)")
    ep.add_argument("--output", "-o", help="Write JSON to this path instead of stdout")

    bp = sub.add_parser("batch", help="Extract every workbook in the configured directory")
    bp.add_argument("--config", help="Config YAML (default: $QUOTE_CONFIG or config/quote.yml)")
    return p.parse_args(argv)


def _cmd_sheets(args: argparse.Namespace, logger) -> int:
    try:
        names = list_sheet_names(args.file)
    except WorkbookReadError as e:
        logger.error(f"read: {e}")
        return EXIT_FATAL
    for name in names:
        print(name)
    return EXIT_SUCCESS_ALL


def _cmd_extract(args: argparse.Namespace, logger) -> int:
    try:
        quote = extract_quote_from_file(
            args.file,
            sheet_name=args.sheet_name,
            project_name=args.project_name,
            client_name=args.client_name,
            source_label=args.source_label,
        )
    except WorkbookReadError as e:
        logger.error(f"read: {e}")
        return EXIT_FATAL
    except NoQuoteTableError as e:
        logger.error(f"extract: {e}")
        return EXIT_FATAL

    if args.output:
        path = write_quote_json(quote, Path(args.output))
        logger.info(f"wrote {path}")
    else:
        print(json.dumps(quote.to_dict(), ensure_ascii=False, indent=2))
    return EXIT_SUCCESS_ALL


def _cmd_batch(args: argparse.Namespace, logger) -> int:
    config_path = resolve_config_path(args.config)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    directory = Path(cfg.source_directory)
    if not directory.exists():
        logger.error(f"directory not found: {directory}")
        return EXIT_FATAL

    logger.info(f"Processing files from: {directory}")
    try:
        result = process_all(cfg)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    if result.error_log_path and result.failed_files:
        logger.info(f"error log: {result.error_log_path}")
    # log_summary が "SUMMARY " を付けるので先頭ラベルを外す
    summary_line = render_summary_line(result.total_files, result)
    log_summary(summary_line[len("SUMMARY "):])

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    # 空リスト [] が渡された場合に sys.argv を読まないよう None のときのみ参照
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    # extract/sheets は stdout を結果専用にする
    logger = setup_logging(sys.stdout if args.command == "batch" else sys.stderr)
    if args.debug:
        enable_debug()

    _load_env_file(Path(".env"))

    try:
        if args.command == "sheets":
            return _cmd_sheets(args, logger)
        if args.command == "extract":
            return _cmd_extract(args, logger)
        return _cmd_batch(args, logger)
    except QuoteContractError as e:
        logger.critical(f"internal error: {e}")
        return EXIT_FATAL
