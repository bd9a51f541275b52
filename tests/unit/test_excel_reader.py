from __future__ import annotations

import datetime
from pathlib import Path

import pandas as pd
import pytest

from parallels.excel.reader import CellKind, WorkbookReadError, classify_cell, read_first_columns


@pytest.mark.parametrize(
    "value,kind",
    [
        ("Gold", CellKind.TEXT),
        ("", CellKind.TEXT),
        (12345, CellKind.NUMBER),
        (1.5, CellKind.NUMBER),
        (None, CellKind.EMPTY),
        (float("nan"), CellKind.EMPTY),
        (True, CellKind.OTHER),
        (datetime.datetime(2024, 3, 1), CellKind.NUMBER),
        (datetime.date(2024, 3, 1), CellKind.NUMBER),
        (datetime.time(12, 30), CellKind.NUMBER),
        (pd.Timestamp("2024-03-01"), CellKind.NUMBER),
        (pd.NaT, CellKind.EMPTY),
    ],
)
def test_classify_cell(value, kind):
    assert classify_cell(value) is kind


def test_read_first_columns_only_requested_sheets(make_workbook):
    path = make_workbook({"Base": ["Parallels:", "Silver"], "Teams": ["x"], "Autographs": ["y"]})
    streams = read_first_columns(path, ["Base", "Autographs", "Missing"])
    assert set(streams) == {"Base", "Autographs"}
    assert [c.value for c in streams["Base"]] == ["Parallels:", "Silver"]


def test_read_first_columns_cell_kinds(make_workbook):
    path = make_workbook({"Base": ["Parallels:", "NA", None, 12345]})
    cells = read_first_columns(path, ["Base"])["Base"]
    # "NA" stays text; the blank row is kept as an empty cell
    assert [c.kind for c in cells] == [CellKind.TEXT, CellKind.TEXT, CellKind.EMPTY, CellKind.NUMBER]
    assert cells[1].text == "NA"
    assert [c.row for c in cells] == [0, 1, 2, 3]


def test_read_first_columns_bad_file(temp_workdir: Path):
    bogus = temp_workdir / "data" / "broken.xlsx"
    bogus.write_bytes(b"not a workbook")
    with pytest.raises(WorkbookReadError):
        read_first_columns(bogus, ["Base"])


def test_date_cell_closes_block(make_workbook):
    from parallels.services.extraction import extract_base_parallels

    path = make_workbook({"Base": ["Parallels:", "Silver", datetime.datetime(2024, 3, 1), "Gold"]})
    cells = read_first_columns(path, ["Base"])["Base"]
    assert cells[2].kind is CellKind.NUMBER
    assert [p.raw_name for p in extract_base_parallels({"Base": cells})] == ["Silver"]
