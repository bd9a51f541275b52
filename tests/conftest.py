# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable
from pathlib import Path

import pandas as pd
import pytest

from parallels.logging.init import reset_logging


@pytest.fixture(autouse=True)
def _fresh_logging():
    # handler binds sys.stderr at setup time; capsys swaps it per test
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


def _write_workbook(path: Path, sheets: dict[str, list[object]]) -> Path:
    """Write one single-column sheet per entry; None becomes an empty cell."""
    with pd.ExcelWriter(path) as writer:
        for sheet, values in sheets.items():
            df = pd.DataFrame({"c": pd.Series(values, dtype=object)})
            df.to_excel(writer, sheet_name=sheet, header=False, index=False)
    return path


@pytest.fixture()
def make_workbook(temp_workdir: Path) -> Callable[..., Path]:
    def _make(sheets: dict[str, list[object]], name: str = "checklist.xlsx") -> Path:
        return _write_workbook(temp_workdir / "data" / name, sheets)
    return _make


@pytest.fixture()
def prizm_sheets() -> dict[str, list[object]]:
    return {
        "Base": [
            "2024-25 Prizm Basketball",
            None,
            "Parallels:",
            "Silver",
            "Gold /199",
            "Black 1/1",
            "Red FOTL /25",
            "Silver",
            12345,
            "Not a parallel",
        ],
        "Autographs": [
            "Rookie Signatures",
            "Parallels:",
            "Gold /10",
            "Black 1/1",
            1,
            "Veteran Signatures",
            "Parallels:",
            "Gold /10",
            "Silver",
            None,
        ],
    }
