from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from ..excel.reader import WorkbookSource, read_workbook
from ..extraction.rows import build_items
from ..extraction.selector import select_best_sheet
from ..models.quote import Quote
from .assembler import assemble_quote

"""Extraction entry points.

``extract_quote`` is the pure engine over in-memory grids: no I/O and no
state shared between calls. ``extract_quote_from_file`` adds the workbook
reader in front of it.
"""

__all__ = [
    "extract_quote",
    "extract_quote_from_file",
]

logger = logging.getLogger(__name__)


def extract_quote(
    workbook: Mapping[str, Sequence[Sequence[Any]]],
    *,
    sheet_name: str | None = None,
    project_name: str | None = None,
    client_name: str | None = None,
    source_label: str | None = None,
) -> Quote:
    """Extract a validated quote from a workbook of grids.

    Args:
        workbook: sheet name -> grid (rows of cells), in workbook order
        sheet_name: preferred sheet, tried first
        project_name: passed through to the quote
        client_name: passed through to the quote
        source_label: passed through; defaults to the chosen sheet name

    Raises:
        NoQuoteTableError: no sheet has a recognizable header row
        QuoteContractError: the assembled quote violates the output schema
    """
    selection = select_best_sheet(workbook, sheet_name)
    build = build_items(
        selection.rows,
        selection.header_row_index,
        selection.column_map,
        selection.layout,
    )
    if build.dropped_rows:
        logger.info(f"sheet {selection.sheet_name!r}: {build.dropped_rows} row(s) before the first item ignored")
    if build.total_amount is None:
        logger.info(f"sheet {selection.sheet_name!r}: no TOTAL row amount found")
    return assemble_quote(
        selection,
        build,
        project_name=project_name,
        client_name=client_name,
        source_label=source_label,
    )


def extract_quote_from_file(source: WorkbookSource, **opts: Any) -> Quote:
    """Read a workbook (path or bytes) and extract its quote.

    Keyword options are those of :func:`extract_quote`.

    Raises:
        WorkbookReadError: the workbook cannot be read
        NoQuoteTableError, QuoteContractError: see :func:`extract_quote`
    """
    return extract_quote(read_workbook(source), **opts)
