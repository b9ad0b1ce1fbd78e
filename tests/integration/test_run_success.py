from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict

import pytest

from quote_extractor.cli import main as cli_main

"""Integration test: successful multi-file batch run.

Real .xlsx workbooks go through the CLI; every workbook yields one JSON file
and the SUMMARY line agrees with what was written.
"""

SUMMARY_RE = re.compile(
    r"^SUMMARY\s+files=(\d+)/(\d+)\s+success=(\d+)\s+failed=(\d+)\s+items=(\d+)\s+elapsed_sec=(\d+\.?\d*)$",
    re.MULTILINE,
)


@pytest.fixture
def multi_file_setup(
    temp_workdir: Path, write_config: Any, excel_factory, dimension_rows, finish_header
) -> Dict[str, Any]:
    data_dir = temp_workdir / "data"
    kitchen = excel_factory(
        data_dir, "kitchen.xlsx",
        {
            "Cover": [["HOME INTERIORS"], ["Client", "Mr. Rao"]],
            "Quote": dimension_rows,
        },
    )
    bedroom = excel_factory(
        data_dir, "bedroom.xlsx",
        {
            "Finish": [
                finish_header,
                ["1", "Bedroom", "Wardrobe", "Laminate outside\nAcrylic shutters", "1800", "2100", "1", "40", "1500", "60,000"],
                ["", "", "Loft included", "", "", "", "", "", "", ""],
                ["2", "Bedroom", "Side table", "Veneer", "450", "500", "2", "", "", "Quote on request"],
            ],
        },
    )
    return {"kitchen": kitchen, "bedroom": bedroom, "expected_items": 2 + 2}


def test_multi_file_run_success_integration(temp_workdir: Path, multi_file_setup, capsys) -> None:
    exit_code = cli_main(["batch"])
    output = capsys.readouterr().out

    assert exit_code == 0
    m = SUMMARY_RE.search(output)
    assert m is not None, f"SUMMARY line not found or malformed in output: {output}"
    assert m.group(1) == m.group(2) == "2"
    assert (int(m.group(3)), int(m.group(4))) == (2, 0)
    assert int(m.group(5)) == multi_file_setup["expected_items"]
    assert "ERROR" not in output
    # bedroom.xlsx has no "Quote" sheet
    assert "WARN preferred sheet not found: 'Quote'" in output

    out_dir = temp_workdir / "out"
    assert sorted(p.name for p in out_dir.iterdir()) == ["bedroom.json", "kitchen.json"]

    kitchen = json.loads((out_dir / "kitchen.json").read_text(encoding="utf-8"))
    assert kitchen["sheet_name"] == "Quote"
    assert kitchen["source_label"] == "kitchen"
    assert kitchen["total_amount"] == 11200
    assert [it["amount"] for it in kitchen["items"]] == [5400, 5800]
    assert kitchen["items"][0]["depth_mm"] == "560"

    bedroom = json.loads((out_dir / "bedroom.json").read_text(encoding="utf-8"))
    assert bedroom["sheet_name"] == "Finish"
    assert "total_amount" not in bedroom
    wardrobe, side_table = bedroom["items"]
    assert wardrobe["notes"] == ["Laminate outside", "Acrylic shutters", "Loft included"]
    assert wardrobe["amount"] == 60000
    assert wardrobe["depth_mm"] == ""
    assert side_table["notes"] == ["Veneer"]
    assert side_table["amount"] == "Quote on request"

    # 失敗なしならエラーログは作らない
    assert list((temp_workdir / "logs").iterdir()) == []
