from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..excel.cells import is_blank, normalize_cell, parse_number_loose
from ..models.columns import ColumnRole, ColumnRoleMap, Layout
from ..models.quote import QuoteItem

"""Row classification and item building.

Rows below the header are walked top to bottom with one piece of state, the
current item:

- BLANK: skipped
- TOTAL: serial cell reads "TOTAL"; its amount becomes the quote total and
  nothing after it is read
- NEW_ITEM: serial and item name present; starts a new current item
- CONTINUATION: anything else; its first non-empty cell becomes a note on the
  current item (dropped if there is none yet)

Wrapped descriptions and multi-line specs in hand-edited sheets thus attach
to the item they visually follow.
"""

__all__ = [
    "ItemBuildResult",
    "RowKind",
    "build_items",
    "classify_row",
]

logger = logging.getLogger(__name__)

TOTAL_MARKER = "TOTAL"

# 列が解決できない場合の位置フォールバック (標準レイアウトの列位置)
FALLBACK_COLUMNS: dict[ColumnRole, int] = {
    ColumnRole.SERIAL: 0,
    ColumnRole.ROOM: 1,
    ColumnRole.ITEM: 2,
    ColumnRole.AMOUNT: 9,
}
FALLBACK_TOTAL_AMOUNT_COLUMN = 10

_NEWLINES_RE = re.compile(r"\n+")


class RowKind(Enum):
    BLANK = "blank"
    TOTAL = "total"
    NEW_ITEM = "new_item"
    CONTINUATION = "continuation"


@dataclass
class ItemBuildResult:
    """Items and total read from the rows below the header."""
    items: list[QuoteItem] = field(default_factory=list)
    total_amount: int | float | None = None
    dropped_rows: int = 0  # continuation rows seen before any item


def _cell(row: Sequence[Any], idx: int | None) -> Any:
    """Normalized cell at idx; ``""`` when unmapped or past the row end."""
    if idx is None or idx < 0 or idx >= len(row):
        return ""
    return normalize_cell(row[idx])


def _text(value: Any) -> str:
    return str(value).strip()


def _role_cell(row: Sequence[Any], column_map: ColumnRoleMap, role: ColumnRole) -> Any:
    idx = column_map.get(role)
    if idx is None:
        idx = FALLBACK_COLUMNS.get(role)
    return _cell(row, idx)


def _is_total_marker(value: Any) -> bool:
    return _text(value).upper() == TOTAL_MARKER


def classify_row(row: Sequence[Any], column_map: ColumnRoleMap) -> RowKind:
    """Classify one data row.

    NEW_ITEM requires a non-empty serial cell that is not "TOTAL" and a
    non-empty item-name cell.
    """
    if is_blank(row):
        return RowKind.BLANK
    serial = _role_cell(row, column_map, ColumnRole.SERIAL)
    if _is_total_marker(serial):
        return RowKind.TOTAL
    item_name = _role_cell(row, column_map, ColumnRole.ITEM)
    if _text(serial) and _text(item_name):
        return RowKind.NEW_ITEM
    return RowKind.CONTINUATION


def _read_total(row: Sequence[Any], column_map: ColumnRoleMap) -> int | float | None:
    amount_idx = column_map.get(ColumnRole.AMOUNT)
    if amount_idx is None:
        primary, fallback = FALLBACK_COLUMNS[ColumnRole.AMOUNT], FALLBACK_TOTAL_AMOUNT_COLUMN
    else:
        # 合計値が金額列の右隣に置かれているシートがある
        primary, fallback = amount_idx, amount_idx + 1
    total = parse_number_loose(_cell(row, primary))
    if total is None:
        total = parse_number_loose(_cell(row, fallback))
    return total


def _finish_notes(row: Sequence[Any], column_map: ColumnRoleMap) -> list[str]:
    finish = _text(_cell(row, column_map.get(ColumnRole.FINISH)))
    if not finish:
        return []
    return [line.strip() for line in _NEWLINES_RE.split(finish) if line.strip()]


def _new_item(row: Sequence[Any], column_map: ColumnRoleMap, layout: Layout) -> QuoteItem:
    amount_cell = _role_cell(row, column_map, ColumnRole.AMOUNT)
    amount = parse_number_loose(amount_cell)
    return QuoteItem(
        sno=_role_cell(row, column_map, ColumnRole.SERIAL),
        room=_role_cell(row, column_map, ColumnRole.ROOM),
        item=_role_cell(row, column_map, ColumnRole.ITEM),
        width_mm=_cell(row, column_map.get(ColumnRole.WIDTH)),
        height_mm=_cell(row, column_map.get(ColumnRole.HEIGHT)),
        depth_mm=_cell(row, column_map.get(ColumnRole.DEPTH)) if layout is Layout.DIMENSION else "",
        qty=_cell(row, column_map.get(ColumnRole.QUANTITY)),
        area_sqft=_cell(row, column_map.get(ColumnRole.AREA)),
        rate_per_sqft=_cell(row, column_map.get(ColumnRole.RATE)),
        # 数値化できない金額 ("TBD" 等) は原文のまま保持
        amount=amount if amount is not None else amount_cell,
        notes=_finish_notes(row, column_map) if layout is Layout.FINISH else [],
    )


def _first_text(row: Sequence[Any]) -> str:
    for c in row:
        text = _text(normalize_cell(c))
        if text:
            return text
    return ""


def build_items(
    rows: Sequence[Sequence[Any]],
    header_row_index: int,
    column_map: ColumnRoleMap,
    layout: Layout,
) -> ItemBuildResult:
    """Walk the rows below the header and build the item list.

    Args:
        rows: the whole sheet grid (not mutated)
        header_row_index: index of the header row in ``rows``
        column_map: roles resolved from the header row
        layout: layout of the sheet

    Returns:
        ItemBuildResult with items in row order and the total, if any
    """
    result = ItemBuildResult()
    current: QuoteItem | None = None

    for r in range(header_row_index + 1, len(rows)):
        row = rows[r]
        kind = classify_row(row, column_map)
        if kind is RowKind.BLANK:
            continue
        if kind is RowKind.TOTAL:
            result.total_amount = _read_total(row, column_map)
            logger.debug(f"row {r}: total={result.total_amount!r}; stop")
            break
        if kind is RowKind.NEW_ITEM:
            current = _new_item(row, column_map, layout)
            result.items.append(current)
            continue
        note = _first_text(row)
        if current is None:
            result.dropped_rows += 1
            logger.debug(f"row {r}: text before first item dropped: {note!r}")
            continue
        current.add_note(note)

    return result
