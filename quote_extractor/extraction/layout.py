from __future__ import annotations

from ..models.columns import ColumnRole, ColumnRoleMap, Layout

"""Layout classification and header-row scoring.

The score only orders candidate sheets against each other; it is not a
probability.
"""

__all__ = [
    "DIMENSION_BONUS",
    "ROLE_WEIGHTS",
    "classify_layout",
    "score_column_map",
]

ROLE_WEIGHTS: dict[ColumnRole, int] = {
    ColumnRole.SERIAL: 3,
    ColumnRole.ROOM: 2,
    ColumnRole.ITEM: 4,
    ColumnRole.AMOUNT: 4,
    ColumnRole.RATE: 2,
    ColumnRole.AREA: 2,
    ColumnRole.QUANTITY: 1,
}
DIMENSION_BONUS = 4


def classify_layout(column_map: ColumnRoleMap) -> Layout:
    """DIMENSION if a depth column exists (checked first), else FINISH, else UNKNOWN."""
    if column_map.has(ColumnRole.DEPTH):
        return Layout.DIMENSION
    if column_map.has(ColumnRole.FINISH):
        return Layout.FINISH
    return Layout.UNKNOWN


def score_column_map(column_map: ColumnRoleMap, layout: Layout) -> int:
    score = sum(w for role, w in ROLE_WEIGHTS.items() if column_map.has(role))
    if layout is Layout.DIMENSION:
        score += DIMENSION_BONUS
    return score

