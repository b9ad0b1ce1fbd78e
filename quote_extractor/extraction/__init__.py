"""Heuristic table-extraction engine (header, layout, sheet and row logic)."""

from .header import build_column_map, is_likely_header_row, sheet_score
from .layout import classify_layout
from .rows import ItemBuildResult, RowKind, build_items, classify_row
from .selector import SheetSelection, select_best_sheet

__all__ = [
    "ItemBuildResult",
    "RowKind",
    "SheetSelection",
    "build_column_map",
    "build_items",
    "classify_layout",
    "classify_row",
    "is_likely_header_row",
    "select_best_sheet",
    "sheet_score",
]
