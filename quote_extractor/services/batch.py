from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from ..config.loader import BatchConfig
from ..errors import NoQuoteTableError, WorkbookReadError
from ..logging.error_log import ErrorLogBuffer
from ..models.error_record import FILE_LEVEL_SHEET, ErrorRecord
from ..models.processing_result import BatchResult, FileStat
from ..models.quote import Quote
from .extract import extract_quote_from_file
from .progress import ProgressTracker

"""Batch extraction over a directory of workbooks.

Each ``.xlsx`` in ``source_directory`` becomes ``<output_directory>/<stem>.json``.
A workbook that cannot be read or has no quotation table is logged to the
error log and counted as failed; the run continues. QuoteContractError is not
caught here.
"""

__all__ = [
    "ProcessingError",
    "process_all",
    "scan_excel_files",
    "write_quote_json",
]

logger = logging.getLogger(__name__)

STATUS_SUCCESS = "success"
STATUS_FAILED = "failed"


class ProcessingError(Exception):
    """Fatal batch error (directory missing or unreadable)."""


def scan_excel_files(directory: Path) -> list[Path]:
    """Scan directory for .xlsx files (non-recursive, sorted by name).

    Lock files left by Excel (``~$name.xlsx``) are ignored.

    Raises:
        ProcessingError: directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")

    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")

    try:
        return sorted(
            p for p in directory.iterdir()
            if p.is_file() and p.suffix == ".xlsx" and not p.name.startswith("~$")
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def write_quote_json(quote: Quote, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(quote.to_dict(), ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
    return path


def _process_single_file(
    file_path: Path,
    config: BatchConfig,
    output_dir: Path,
    error_log: ErrorLogBuffer,
) -> FileStat:
    start = datetime.now(timezone.utc)
    try:
        quote = extract_quote_from_file(
            file_path,
            sheet_name=config.preferred_sheet,
            project_name=config.project_name,
            client_name=config.client_name,
            source_label=file_path.stem,
        )
    except (WorkbookReadError, NoQuoteTableError) as e:
        error_type = "WORKBOOK_READ_ERROR" if isinstance(e, WorkbookReadError) else "NO_QUOTE_TABLE"
        error_log.append(ErrorRecord.create(file_path.name, FILE_LEVEL_SHEET, -1, error_type, str(e)))
        logger.warning(f"{file_path.name}: {e}")
        return FileStat(
            file_name=file_path.name,
            status=STATUS_FAILED,
            items=0,
            elapsed_seconds=(datetime.now(timezone.utc) - start).total_seconds(),
            error=str(e),
        )

    out_path = write_quote_json(quote, output_dir / f"{file_path.stem}.json")
    logger.info(f"{file_path.name}: sheet={quote.sheet_name!r} items={len(quote.items)} -> {out_path}")
    return FileStat(
        file_name=file_path.name,
        status=STATUS_SUCCESS,
        items=len(quote.items),
        elapsed_seconds=(datetime.now(timezone.utc) - start).total_seconds(),
        sheet_name=quote.sheet_name,
        output_path=str(out_path),
    )


def process_all(config: BatchConfig, error_log: ErrorLogBuffer | None = None) -> BatchResult:
    """Extract a quote from every workbook in the configured directory.

    Args:
        config: batch configuration
        error_log: buffer for per-file failures (a new one by default)

    Returns:
        BatchResult with per-file stats

    Raises:
        ProcessingError: the source directory is missing or unreadable
    """
    start_time = datetime.now(timezone.utc)
    error_log = error_log if error_log is not None else ErrorLogBuffer()

    file_paths = scan_excel_files(Path(config.source_directory))
    output_dir = Path(config.output_directory)

    file_stats: list[FileStat] = []
    success_count = 0
    failed_count = 0
    total_items = 0

    with ProgressTracker(len(file_paths)) as progress:
        for file_path in file_paths:
            progress.start_file(file_path)
            stat = _process_single_file(file_path, config, output_dir, error_log)
            if stat.status == STATUS_SUCCESS:
                success_count += 1
                total_items += stat.items
            else:
                failed_count += 1
            file_stats.append(stat)
            progress.set_postfix(success=success_count, failed=failed_count, items=total_items)
            progress.finish_file()

    # エラーログは最後に一括 flush
    log_path = error_log.flush()

    end_time = datetime.now(timezone.utc)
    return BatchResult(
        success_files=success_count,
        failed_files=failed_count,
        total_items=total_items,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=file_stats,
        error_log_path=str(log_path) if log_path is not None else None,
    )
