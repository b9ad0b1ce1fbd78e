from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Union

"""Quote domain models.

QuoteItem is filled while the rows below the header are walked: notes are
appended from continuation rows until the next item or the total row. Quote
is built once at the end and is immutable.
"""

__all__ = [
    "CellValue",
    "Quote",
    "QuoteItem",
]

CellValue = Union[str, int, float]


@dataclass
class QuoteItem:
    """One quotation line.

    Dimensions are millimetres, area is square feet. ``amount`` is a number
    when the cell parses as one, otherwise the cell text verbatim.
    """
    sno: CellValue = ""
    room: CellValue = ""
    item: CellValue = ""
    width_mm: CellValue = ""
    height_mm: CellValue = ""
    depth_mm: CellValue = ""
    qty: CellValue = ""
    area_sqft: CellValue = ""
    rate_per_sqft: CellValue = ""
    amount: CellValue = ""
    notes: list[str] = field(default_factory=list)

    def add_note(self, text: str) -> None:
        self.notes.append(text)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["notes"] = list(self.notes)
        return data


@dataclass(frozen=True)
class Quote:
    """Extraction result for one workbook."""
    source_label: str
    sheet_name: str
    project_name: str
    client_name: str
    items: tuple[QuoteItem, ...]
    total_amount: int | float | None = None

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready record; ``total_amount`` is omitted when absent."""
        data: dict[str, Any] = {
            "source_label": self.source_label,
            "sheet_name": self.sheet_name,
            "project_name": self.project_name,
            "client_name": self.client_name,
            "items": [it.to_dict() for it in self.items],
        }
        if self.total_amount is not None:
            data["total_amount"] = self.total_amount
        return data
