from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from ..excel.cells import normalize_cell, normalize_header_text
from ..models.columns import ColumnRole, ColumnRoleMap, Layout
from .layout import classify_layout, score_column_map

"""Header row detection and column-role inference.

Header rows are found by anchor tokens rather than position; authors move the
table around freely (title blocks, blank spacer rows, logos above it).
"""

__all__ = [
    "HEADER_ANCHORS",
    "ROLE_MATCHERS",
    "build_column_map",
    "find_column",
    "is_likely_header_row",
    "sheet_score",
]

logger = logging.getLogger(__name__)

# すべて揃って初めてヘッダ行とみなす (AND 条件)
HEADER_ANCHORS: tuple[str, ...] = ("S.NO", "ROOM", "ITEM", "AMOUNT")

LEGACY_MARKER = "OLD"

HeaderPredicate = Callable[[str], bool]

ROLE_MATCHERS: dict[ColumnRole, HeaderPredicate] = {
    ColumnRole.SERIAL: lambda h: "S.NO" in h or h in ("SL.", "SL"),
    ColumnRole.ROOM: lambda h: "ROOM" in h,
    ColumnRole.ITEM: lambda h: "ITEM" in h,
    ColumnRole.FINISH: lambda h: "FINISH" in h,
    ColumnRole.WIDTH: lambda h: "WIDTH" in h,
    ColumnRole.HEIGHT: lambda h: "HEIGHT" in h or "HEIGTH" in h,
    ColumnRole.DEPTH: lambda h: "DEPTH" in h,
    ColumnRole.QUANTITY: lambda h: h == "QTY" or "QUANTITY" in h or "QTY" in h,
    ColumnRole.AREA: lambda h: "AREA" in h,
    ColumnRole.RATE: lambda h: "RATE" in h and LEGACY_MARKER not in h,
    ColumnRole.AMOUNT: lambda h: "AMOUNT" in h and LEGACY_MARKER not in h,
    ColumnRole.LEGACY_AMOUNT: lambda h: "AMOUNT" in h and LEGACY_MARKER in h,
}


def is_likely_header_row(row: Sequence[Any]) -> bool:
    """Return True when the row mentions every header anchor.

    A data row that happens to contain one anchor word (an item called
    "Room divider") is rejected.
    """
    joined = " | ".join(normalize_header_text(normalize_cell(c)) for c in row)
    return all(anchor in joined for anchor in HEADER_ANCHORS)


def find_column(headers: Sequence[str], predicate: HeaderPredicate) -> int | None:
    """Index of the first (left-most) normalized header satisfying predicate."""
    for idx, header in enumerate(headers):
        if predicate(header):
            return idx
    return None


def build_column_map(header_row: Sequence[Any]) -> tuple[ColumnRoleMap, Layout]:
    """Resolve every column role for a header row and classify the layout.

    Each role is resolved independently, so one header cell can satisfy more
    than one role. Such overlaps are reported as a warning and kept.

    Fallbacks:
    - no current amount column -> amount uses the legacy ("OLD") amount column
    - no non-legacy rate column -> any column mentioning RATE

    Returns:
        (column map, layout); a pure function of ``header_row``
    """
    headers = [normalize_header_text(c) for c in header_row]
    indices: dict[ColumnRole, int | None] = {
        role: find_column(headers, ROLE_MATCHERS[role]) for role in ColumnRole
    }

    if indices[ColumnRole.AMOUNT] is None and indices[ColumnRole.LEGACY_AMOUNT] is not None:
        indices[ColumnRole.AMOUNT] = indices[ColumnRole.LEGACY_AMOUNT]
    if indices[ColumnRole.RATE] is None:
        indices[ColumnRole.RATE] = find_column(headers, lambda h: "RATE" in h)

    column_map = ColumnRoleMap(indices)
    for idx, roles in column_map.shared_columns().items():
        role_names = ", ".join(r.value for r in roles)
        logger.warning(f"header column {idx} ({headers[idx]!r}) matches several roles: {role_names}")
    return column_map, classify_layout(column_map)


def sheet_score(header_row: Sequence[Any]) -> int:
    """Score a header row by the roles it resolves.

    Examples:
        >>> sheet_score(["S.NO", "ROOM", "ITEM", "DEPTH", "AMOUNT"])
        17
    """
    column_map, layout = build_column_map(header_row)
    return score_column_map(column_map, layout)
