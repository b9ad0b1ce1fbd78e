from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema.exceptions import ValidationError

from ..errors import QuoteContractError
from ..extraction.rows import ItemBuildResult
from ..extraction.selector import SheetSelection
from ..models.quote import Quote

"""Quote assembly and output contract check.

The schema lives in ``quote_extractor/contracts/quote_schema.json``. A quote
that fails it means the engine built something it should not have; callers
must let :class:`QuoteContractError` propagate.
"""

__all__ = [
    "QUOTE_SCHEMA_PATH",
    "assemble_quote",
    "load_quote_schema",
    "validate_quote",
]

logger = logging.getLogger(__name__)

# quote_extractor/services/assembler.py -> quote_extractor/contracts
QUOTE_SCHEMA_PATH = Path(__file__).parent.parent / "contracts" / "quote_schema.json"


@lru_cache(maxsize=1)
def load_quote_schema() -> dict[str, Any]:
    return json.loads(QUOTE_SCHEMA_PATH.read_text(encoding="utf-8"))


def validate_quote(quote: Quote) -> None:
    """Validate the quote record against the output schema.

    Raises:
        QuoteContractError: the record violates the schema
    """
    try:
        jsonschema.validate(quote.to_dict(), load_quote_schema())
    except ValidationError as e:
        path = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise QuoteContractError(f"quote contract violated at {path}: {e.message}") from e


def assemble_quote(
    selection: SheetSelection,
    build: ItemBuildResult,
    *,
    project_name: str | None = None,
    client_name: str | None = None,
    source_label: str | None = None,
) -> Quote:
    """Package the extracted items and metadata into a validated Quote.

    ``source_label`` defaults to the chosen sheet name; project and client
    names default to ``""``.
    """
    quote = Quote(
        source_label=source_label if source_label is not None else selection.sheet_name,
        sheet_name=selection.sheet_name,
        project_name=project_name or "",
        client_name=client_name or "",
        items=tuple(build.items),
        total_amount=build.total_amount,
    )
    validate_quote(quote)
    logger.debug(
        f"assembled quote sheet={quote.sheet_name!r} items={len(quote.items)} "
        f"total={quote.total_amount!r}"
    )
    return quote
