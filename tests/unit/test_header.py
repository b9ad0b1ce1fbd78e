from __future__ import annotations

import logging

from quote_extractor.extraction.header import build_column_map, is_likely_header_row
from quote_extractor.models.columns import ColumnRole, Layout


def test_header_row_requires_all_four_anchors(dimension_header):
    assert is_likely_header_row(dimension_header)
    assert is_likely_header_row(["s.no", " Room ", "item description", "Amount (Rs)"])
    # 1 つでも欠ければ不可
    assert not is_likely_header_row(["S.NO", "ROOM", "ITEM", "RATE"])
    assert not is_likely_header_row(["1", "Room divider", "Item", "5400"])
    assert not is_likely_header_row([])


def test_header_row_tolerates_blank_and_numeric_cells():
    assert is_likely_header_row([None, "S.NO", "", "ROOM", 3, "ITEM", "AMOUNT"])


def test_build_column_map_dimension_layout(dimension_header):
    column_map, layout = build_column_map(dimension_header)
    assert layout is Layout.DIMENSION
    assert column_map.as_dict() == {
        "serial": 0,
        "room": 1,
        "item": 2,
        "finish": None,
        "width": 3,
        "height": 4,
        "depth": 5,
        "quantity": 6,
        "area": 7,
        "rate": 8,
        "amount": 9,
        "legacy_amount": None,
    }


def test_build_column_map_finish_layout(finish_header):
    column_map, layout = build_column_map(finish_header)
    assert layout is Layout.FINISH
    assert column_map[ColumnRole.FINISH] == 3
    assert column_map[ColumnRole.DEPTH] is None
    assert column_map[ColumnRole.QUANTITY] == 6


def test_build_column_map_unknown_layout():
    _, layout = build_column_map(["S.NO", "ROOM", "ITEM", "AMOUNT"])
    assert layout is Layout.UNKNOWN


def test_depth_wins_over_finish():
    _, layout = build_column_map(["S.NO", "ROOM", "ITEM", "FINISH", "DEPTH", "AMOUNT"])
    assert layout is Layout.DIMENSION


def test_serial_synonyms_and_height_misspelling():
    column_map, _ = build_column_map(["SL", "ROOM", "ITEM", "HEIGTH", "AMOUNT"])
    assert column_map[ColumnRole.SERIAL] == 0
    assert column_map[ColumnRole.HEIGHT] == 3
    column_map, _ = build_column_map(["Sl.", "ROOM", "ITEM", "AMOUNT"])
    assert column_map[ColumnRole.SERIAL] == 0


def test_first_matching_column_wins():
    column_map, _ = build_column_map(["S.NO", "ROOM", "ITEM", "ITEM CODE", "AMOUNT", "AMOUNT 2"])
    assert column_map[ColumnRole.ITEM] == 2
    assert column_map[ColumnRole.AMOUNT] == 4


def test_current_amount_preferred_over_legacy():
    column_map, _ = build_column_map(["S.NO", "ROOM", "ITEM", "AMOUNT - OLD", "RATE-OLD", "RATE", "AMOUNT"])
    assert column_map[ColumnRole.LEGACY_AMOUNT] == 3
    assert column_map[ColumnRole.AMOUNT] == 6
    assert column_map[ColumnRole.RATE] == 5


def test_amount_falls_back_to_legacy_column():
    column_map, _ = build_column_map(["S.NO", "ROOM", "ITEM", "AMOUNT (OLD)"])
    assert column_map[ColumnRole.LEGACY_AMOUNT] == 3
    assert column_map[ColumnRole.AMOUNT] == 3


def test_rate_falls_back_to_legacy_rate():
    column_map, _ = build_column_map(["S.NO", "ROOM", "ITEM", "OLD RATE", "AMOUNT"])
    assert column_map[ColumnRole.RATE] == 3


def test_build_column_map_is_deterministic(dimension_header):
    first = build_column_map(dimension_header)
    second = build_column_map(dimension_header)
    assert first[0].as_dict() == second[0].as_dict()
    assert first[1] is second[1]


def test_build_column_map_does_not_mutate_row(dimension_header):
    before = list(dimension_header)
    build_column_map(dimension_header)
    assert dimension_header == before


def test_overlapping_roles_are_kept_and_reported(caplog):
    caplog.set_level(logging.WARNING, logger="quote_extractor")
    column_map, _ = build_column_map(["S.NO", "ROOM", "ITEM", "RATE/AREA", "AMOUNT"])
    assert column_map[ColumnRole.RATE] == 3
    assert column_map[ColumnRole.AREA] == 3
    assert column_map.shared_columns() == {3: [ColumnRole.AREA, ColumnRole.RATE]}
    assert "matches several roles" in caplog.text
