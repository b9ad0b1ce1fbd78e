"""Domain models for the quotation extractor.

Column roles and layouts describe a detected table; Quote/QuoteItem are the
extraction output; ErrorRecord, FileStat and BatchResult belong to batch runs.
"""

from .columns import ColumnRole, ColumnRoleMap, Layout
from .error_record import ErrorRecord
from .processing_result import BatchResult, FileStat
from .quote import Quote, QuoteItem

__all__ = [
    # Table detection
    "ColumnRole",
    "ColumnRoleMap",
    "Layout",
    # Extraction output
    "Quote",
    "QuoteItem",
    # Batch runs
    "BatchResult",
    "ErrorRecord",
    "FileStat",
]
