from __future__ import annotations

import math

import pytest

from quote_extractor.excel.cells import (
    CellKind,
    cell_kind,
    is_blank,
    normalize_cell,
    normalize_header_text,
    parse_number_loose,
)


def test_normalize_cell_empty_values():
    assert normalize_cell(None) == ""
    assert normalize_cell(float("nan")) == ""
    assert normalize_cell("   ") == ""


def test_normalize_cell_trims_strings_and_passes_numbers():
    assert normalize_cell("  Kitchen \n") == "Kitchen"
    assert normalize_cell(5400) == 5400
    assert normalize_cell(4.5) == 4.5


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("s.no", "S.NO"),
        ("  Rate   per\nsqft ", "RATE PER SQFT"),
        ("Amount-Old", "AMOUNT - OLD"),
        ("AMOUNT  -   OLD", "AMOUNT - OLD"),
        (None, ""),
        (12, "12"),
    ],
)
def test_normalize_header_text(raw, expected):
    assert normalize_header_text(raw) == expected


@pytest.mark.parametrize(
    "raw,expected",
    [
        (5400, 5400),
        (4.5, 4.5),
        ("5400", 5400),
        ("1,23,500", 123500),
        (" 12,000.50 ", 12000.5),
        ("-250", -250),
    ],
)
def test_parse_number_loose_accepts(raw, expected):
    assert parse_number_loose(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", ",", "TBD", "Quote on request", "inf", "nan", None, True])
def test_parse_number_loose_rejects(raw):
    assert parse_number_loose(raw) is None


def test_parse_number_loose_rejects_non_finite_native():
    assert parse_number_loose(math.inf) is None
    assert parse_number_loose(float("nan")) is None


def test_parse_number_loose_integral_text_is_int():
    value = parse_number_loose("5400")
    assert isinstance(value, int)
    assert isinstance(parse_number_loose("4.50"), float)


def test_cell_kind_and_blank_rows():
    assert cell_kind("") is CellKind.EMPTY
    assert cell_kind(None) is CellKind.EMPTY
    assert cell_kind(" x ") is CellKind.TEXT
    assert cell_kind(0) is CellKind.NUMBER
    assert is_blank(["", None, "  "])
    assert is_blank([])
    # 0 は空セルではない
    assert not is_blank(["", 0])
