from __future__ import annotations

"""Exception types raised by the extraction engine and its reader.

Soft problems (a cell that is not a number, a column that cannot be found)
never raise; they degrade to an empty string or the raw cell text.
"""

__all__ = [
    "ExtractionError",
    "NoQuoteTableError",
    "QuoteContractError",
    "WorkbookReadError",
]


class ExtractionError(Exception):
    """Base class for extraction failures."""


class NoQuoteTableError(ExtractionError):
    """Raised when no sheet has a row carrying all four header anchors."""


class QuoteContractError(ExtractionError):
    """Raised when an assembled quote does not satisfy the output schema.

    This indicates an internal inconsistency and must not be swallowed.
    """


class WorkbookReadError(ExtractionError):
    """Raised when the workbook bytes/path cannot be opened as a spreadsheet."""
