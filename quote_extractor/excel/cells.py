from __future__ import annotations

import math
import re
from enum import Enum
from numbers import Real
from typing import Any

"""Cell-level normalization helpers.

Grid cells arrive as ``""``, ``str`` or a number. Everything the engine
compares goes through :func:`normalize_cell` first; header text additionally
goes through :func:`normalize_header_text`.
"""

__all__ = [
    "CellKind",
    "cell_kind",
    "is_blank",
    "normalize_cell",
    "normalize_header_text",
    "parse_number_loose",
]

_WHITESPACE_RE = re.compile(r"\s+")
_HYPHEN_RE = re.compile(r"\s*-\s*")


class CellKind(Enum):
    """Semantic kind of a normalized cell."""
    EMPTY = "empty"
    TEXT = "text"
    NUMBER = "number"


def _is_number(value: Any) -> bool:
    # bool は Real のサブクラスなので除外
    return isinstance(value, Real) and not isinstance(value, bool)


def normalize_cell(value: Any) -> Any:
    """Return ``""`` for missing values, a trimmed string for text, else the value."""
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    if isinstance(value, str):
        return value.strip()
    return value


def cell_kind(value: Any) -> CellKind:
    value = normalize_cell(value)
    if value == "":
        return CellKind.EMPTY
    if _is_number(value):
        return CellKind.NUMBER
    return CellKind.TEXT


def is_blank(row: list[Any]) -> bool:
    """True when every cell of the row normalizes to empty (or the row has no cells)."""
    return all(cell_kind(c) is CellKind.EMPTY for c in row)


def normalize_header_text(value: Any) -> str:
    """Canonical header text used for substring matching.

    Uppercases, collapses whitespace runs and rewrites any hyphen with its
    surrounding spaces to ``" - "``.

    Examples:
        >>> normalize_header_text("  rate  per\\nsqft ")
        'RATE PER SQFT'
        >>> normalize_header_text("Amount-old")
        'AMOUNT - OLD'
    """
    text = "" if value is None else str(normalize_cell(value))
    text = _WHITESPACE_RE.sub(" ", text.upper())
    text = _HYPHEN_RE.sub(" - ", text)
    return text.strip()


def parse_number_loose(value: Any) -> int | float | None:
    """Parse a number tolerating thousands separators and padding.

    Native numbers are accepted if finite. Text has ``,`` removed and is
    trimmed before parsing. Returns ``None`` (never raises) when no finite
    number can be read; callers keep the raw cell in that case.

    Examples:
        >>> parse_number_loose("1,23,500")
        123500
        >>> parse_number_loose(" 4.5 ")
        4.5
        >>> parse_number_loose("TBD") is None
        True
    """
    if _is_number(value):
        return value if math.isfinite(value) else None
    if not isinstance(value, str):
        return None
    text = value.replace(",", "").strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    if number.is_integer() and re.fullmatch(r"[+-]?\d+", text):
        return int(text)
    return number
