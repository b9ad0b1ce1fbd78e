# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pandas as pd
import pytest

from quote_extractor.logging.init import reset_logging

DIMENSION_HEADER = [
    "S.NO", "ROOM", "ITEM", "WIDTH(mm)", "HEIGHT(mm)", "DEPTH(mm)",
    "QTY", "AREA(sqft)", "RATE/sqft", "AMOUNT",
]

FINISH_HEADER = [
    "S.NO", "ROOM", "ITEM", "FINISH", "WIDTH", "HEIGHT",
    "QUANTITY", "AREA", "RATE", "AMOUNT",
]


@pytest.fixture(autouse=True)
def _fresh_logging():
    # setup_logging はモジュール状態を持つのでテスト毎にリセット
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
output_directory: ./out
preferred_sheet: Quote
project_name: Villa 12
client_name: Mr. Rao
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "quote.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def dimension_header() -> list[str]:
    return list(DIMENSION_HEADER)


@pytest.fixture()
def finish_header() -> list[str]:
    return list(FINISH_HEADER)


def make_excel(directory: Path, name: str, sheets: dict[str, list[list[object]]]) -> Path:
    """Write a real .xlsx with one header-less sheet per entry."""
    path = directory / name
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for sheet, rows in sheets.items():
            df = pd.DataFrame(rows)
            df.to_excel(writer, sheet_name=sheet, header=False, index=False)
    return path


def dimension_sheet() -> list[list[object]]:
    """Title block, header, two items (one with a wrapped note) and a total."""
    return [
        ["HOME INTERIORS - ESTIMATE", None, None],
        [None, None, None],
        list(DIMENSION_HEADER),
        ["1", "Kitchen", "Base Unit", "600", "720", "560", "1", "4.5", "1200", "5,400"],
        [None, "BWP ply with laminate finish", None, None, None, None, None, None, None, None],
        ["2", "Kitchen", "Wall Unit", "900", "600", "300", "1", "5.8", "1000", "5800"],
        ["TOTAL", None, None, None, None, None, None, None, None, "11,200"],
        ["Note: prices valid for 30 days", None, None, None, None, None, None, None, None, None],
    ]


@pytest.fixture()
def excel_factory():
    return make_excel


@pytest.fixture()
def dimension_rows() -> list[list[object]]:
    return dimension_sheet()
