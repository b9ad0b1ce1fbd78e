from __future__ import annotations

import io
from pathlib import Path
from typing import Any, Union

import pandas as pd

from ..errors import WorkbookReadError

"""Workbook reader.

Reads every sheet without a header (``header=None``) so the extraction engine
can locate the header row itself. Each sheet becomes a positional grid:
every row has the sheet's full width and missing cells are ``""``.

``dtype=object`` keeps openpyxl's native values (1 stays ``int`` instead of
being upcast to ``1.0`` by a NaN elsewhere in the column).
"""

__all__ = [
    "Grid",
    "WorkbookSource",
    "list_sheet_names",
    "read_workbook",
    "to_grid",
]

Grid = list[list[Any]]
WorkbookSource = Union[str, Path, bytes, bytearray, io.BytesIO]


def _open(source: WorkbookSource) -> pd.ExcelFile:
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(bytes(source))
    try:
        return pd.ExcelFile(source, engine="openpyxl")
    except FileNotFoundError as e:
        raise WorkbookReadError(f"workbook not found: {source}") from e
    except Exception as e:  # openpyxl/zipfile のエラー型は多岐にわたる
        raise WorkbookReadError(f"failed to read workbook: {e}") from e


def _to_cell(value: Any) -> Any:
    if value is None:
        return ""
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):  # pragma: no cover - array-like cells
        pass
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return str(value).upper()
    if hasattr(value, "isoformat"):
        # datetime/date/time/Timestamp -> ISO 文字列
        return value.isoformat()
    if hasattr(value, "item"):
        # numpy scalar -> Python scalar
        return value.item()
    if isinstance(value, (int, float)):
        return value
    return str(value)


def to_grid(df: pd.DataFrame) -> Grid:
    """Convert a header-less DataFrame into a padded positional grid."""
    width = df.shape[1]
    grid: Grid = []
    for raw in df.itertuples(index=False, name=None):
        row = [_to_cell(v) for v in raw]
        if len(row) < width:
            row.extend([""] * (width - len(row)))
        grid.append(row)
    return grid


def list_sheet_names(source: WorkbookSource) -> list[str]:
    """Return sheet names in workbook order."""
    with _open(source) as xls:
        return [str(name) for name in xls.sheet_names]


def read_workbook(source: WorkbookSource) -> dict[str, Grid]:
    """Read all sheets of a workbook into grids keyed by sheet name.

    Parameters
    ----------
    source: path to an ``.xlsx`` file, or its raw bytes

    Raises
    ------
    WorkbookReadError: the source cannot be opened or a sheet cannot be parsed
    """
    grids: dict[str, Grid] = {}
    with _open(source) as xls:
        for name in xls.sheet_names:
            try:
                # 既定の NA 文字列 ("NA", "N/A", "null" 等) は本文として残す
                df = xls.parse(name, header=None, dtype=object, keep_default_na=False, na_values=[""])
            except Exception as e:
                raise WorkbookReadError(f"failed to read sheet '{name}': {e}") from e
            grids[str(name)] = to_grid(df)
    return grids
