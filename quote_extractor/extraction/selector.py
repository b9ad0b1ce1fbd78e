from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from ..errors import NoQuoteTableError
from ..models.columns import ColumnRoleMap, Layout
from .header import build_column_map, is_likely_header_row
from .layout import score_column_map

"""Sheet selection.

Every sheet is a candidate; the caller's preferred sheet is only tried first.
A preferred sheet without a header row loses to any sheet that has one.
"""

__all__ = [
    "SheetSelection",
    "candidate_sheet_order",
    "find_header_row",
    "select_best_sheet",
]

logger = logging.getLogger(__name__)

NO_TABLE_MESSAGE = (
    "no recognizable quotation table: no sheet has a header row with "
    "S.NO, ROOM, ITEM and AMOUNT columns"
)


@dataclass(frozen=True)
class SheetSelection:
    """The chosen sheet and its header row."""
    sheet_name: str
    rows: Sequence[Sequence[Any]]
    header_row_index: int
    column_map: ColumnRoleMap
    layout: Layout
    score: int


def candidate_sheet_order(sheet_names: Sequence[str], preferred: str | None = None) -> list[str]:
    """Preferred sheet first (if present), then the rest in workbook order."""
    names = list(sheet_names)
    if preferred and preferred in names:
        return [preferred] + [n for n in names if n != preferred]
    return names


def find_header_row(rows: Sequence[Sequence[Any]]) -> int | None:
    for idx, row in enumerate(rows):
        if is_likely_header_row(row):
            return idx
    return None


def select_best_sheet(
    workbook: Mapping[str, Sequence[Sequence[Any]]],
    preferred_sheet_name: str | None = None,
) -> SheetSelection:
    """Pick the best-scoring sheet and header row.

    Args:
        workbook: sheet name -> grid, in workbook order
        preferred_sheet_name: sheet to try first (ordering only)

    Returns:
        SheetSelection of the highest score; the first sheet seen wins ties

    Raises:
        NoQuoteTableError: no sheet contains a header row
    """
    if preferred_sheet_name and preferred_sheet_name not in workbook:
        logger.warning(f"preferred sheet not found: {preferred_sheet_name!r}")

    best: SheetSelection | None = None
    for name in candidate_sheet_order(list(workbook.keys()), preferred_sheet_name):
        rows = workbook[name]
        header_idx = find_header_row(rows)
        if header_idx is None:
            logger.debug(f"sheet {name!r}: no header row")
            continue
        column_map, layout = build_column_map(rows[header_idx])
        score = score_column_map(column_map, layout)
        logger.debug(f"sheet {name!r}: header_row={header_idx} layout={layout.value} score={score}")
        # 同点は先勝ち (>= にしないこと)
        if best is None or score > best.score:
            best = SheetSelection(
                sheet_name=name,
                rows=rows,
                header_row_index=header_idx,
                column_map=column_map,
                layout=layout,
                score=score,
            )

    if best is None:
        raise NoQuoteTableError(NO_TABLE_MESSAGE)
    logger.info(
        f"selected sheet {best.sheet_name!r} header_row={best.header_row_index} "
        f"layout={best.layout.value} score={best.score}"
    )
    return best
