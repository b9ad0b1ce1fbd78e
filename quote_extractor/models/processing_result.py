from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Batch result models.

FileStat holds the outcome of one workbook; BatchResult aggregates a whole
run and feeds the SUMMARY line.
"""

__all__ = [
    "BatchResult",
    "FileStat",
]


@dataclass(frozen=True)
class FileStat:
    """Per-file outcome of a batch run."""
    file_name: str  # ファイル名
    status: str  # success/failed
    items: int  # 抽出した明細数 (失敗時 0)
    elapsed_seconds: float
    sheet_name: str | None = None  # 選択されたシート
    output_path: str | None = None  # 書き出した JSON
    error: str | None = None


@dataclass(frozen=True)
class BatchResult:
    """Aggregated result of a batch run."""
    success_files: int
    failed_files: int
    total_items: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] | None = None
    error_log_path: str | None = None

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files
