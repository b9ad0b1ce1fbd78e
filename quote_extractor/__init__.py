"""Heuristic quotation extractor for hand-edited spreadsheet workbooks.

Typical use::

    from quote_extractor import extract_quote_from_file

    quote = extract_quote_from_file("estimate.xlsx", client_name="Mr. Rao")
    print(quote.to_dict())
"""

from .errors import ExtractionError, NoQuoteTableError, QuoteContractError, WorkbookReadError
from .models.quote import Quote, QuoteItem
from .services.extract import extract_quote, extract_quote_from_file

__all__ = [
    "ExtractionError",
    "NoQuoteTableError",
    "QuoteContractError",
    "WorkbookReadError",
    "Quote",
    "QuoteItem",
    "extract_quote",
    "extract_quote_from_file",
]

__version__ = "0.3.0"
