from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

"""Column-role and layout models.

A ``ColumnRoleMap`` is built once per header row and never changes
afterwards; absent roles map to ``None``.
"""

__all__ = [
    "ColumnRole",
    "ColumnRoleMap",
    "Layout",
]


class ColumnRole(Enum):
    """Semantic column roles, in resolution order."""
    SERIAL = "serial"
    ROOM = "room"
    ITEM = "item"
    FINISH = "finish"
    WIDTH = "width"
    HEIGHT = "height"
    DEPTH = "depth"
    QUANTITY = "quantity"
    AREA = "area"
    RATE = "rate"
    AMOUNT = "amount"
    LEGACY_AMOUNT = "legacy_amount"


class Layout(Enum):
    """Known table layouts.

    - DIMENSION: width/height/depth columns; depth values are kept
    - FINISH: a finish column whose lines become item notes
    - UNKNOWN: neither depth nor finish column
    """
    DIMENSION = "DIMENSION"
    FINISH = "FINISH"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class ColumnRoleMap:
    """Immutable role -> column index map (``None`` = absent)."""
    indices: Mapping[ColumnRole, int | None] = field(default_factory=dict)

    def __post_init__(self) -> None:
        full = {role: self.indices.get(role) for role in ColumnRole}
        object.__setattr__(self, "indices", MappingProxyType(full))

    def __getitem__(self, role: ColumnRole) -> int | None:
        return self.indices[role]

    def get(self, role: ColumnRole) -> int | None:
        return self.indices[role]

    def has(self, role: ColumnRole) -> bool:
        return self.indices[role] is not None

    def present_roles(self) -> list[ColumnRole]:
        return [role for role, idx in self.indices.items() if idx is not None]

    def shared_columns(self) -> dict[int, list[ColumnRole]]:
        """Columns claimed by more than one role.

        The amount -> legacy amount alias is expected and not reported.
        """
        claimed: dict[int, list[ColumnRole]] = {}
        for role, idx in self.indices.items():
            if idx is None:
                continue
            claimed.setdefault(idx, []).append(role)
        shared: dict[int, list[ColumnRole]] = {}
        for idx, roles in claimed.items():
            if set(roles) == {ColumnRole.AMOUNT, ColumnRole.LEGACY_AMOUNT}:
                continue
            if len(roles) > 1:
                shared[idx] = roles
        return shared

    def as_dict(self) -> dict[str, int | None]:
        return {role.value: idx for role, idx in self.indices.items()}
