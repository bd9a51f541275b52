from __future__ import annotations

import datetime
import math
import numbers
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import pandas as pd

"""Checklist workbook reader.

Only the first column of each recognized sheet is read. Sheets are parsed
without a header row so the "Parallels:" marker is visible even when it sits
on the first line, and with pandas' NA-string conversion disabled so names
such as "NA" stay text.
"""

__all__ = [
    "WorkbookReadError",
    "CellKind",
    "Cell",
    "classify_cell",
    "read_first_columns",
    "cells_from_values",
]


class WorkbookReadError(Exception):
    """Raised when the workbook cannot be opened or parsed."""


class CellKind(Enum):
    TEXT = "text"
    NUMBER = "number"
    EMPTY = "empty"
    OTHER = "other"  # booleans and unrecognised values; never terminate nor emit


@dataclass(frozen=True)
class Cell:
    row: int  # 0-based sheet row
    kind: CellKind
    value: Any

    @property
    def text(self) -> str:
        return self.value.strip() if self.kind is CellKind.TEXT else ""


def classify_cell(value: Any) -> CellKind:
    if value is None:
        return CellKind.EMPTY
    if isinstance(value, str):
        return CellKind.TEXT
    if isinstance(value, bool):
        return CellKind.OTHER
    if isinstance(value, numbers.Number):
        if isinstance(value, float) and math.isnan(value):
            return CellKind.EMPTY
        return CellKind.NUMBER
    if value is pd.NaT:
        return CellKind.EMPTY
    # Excel stores dates and times as serial numbers
    if isinstance(value, (datetime.date, datetime.time, datetime.timedelta)):
        return CellKind.NUMBER
    return CellKind.OTHER


def cells_from_values(values: Iterable[Any]) -> list[Cell]:
    return [Cell(row=i, kind=classify_cell(v), value=v) for i, v in enumerate(values)]


def read_first_columns(path: Path, sheet_names: Iterable[str]) -> dict[str, list[Cell]]:
    """Read the first column of each requested sheet present in the workbook.

    Parameters
    ----------
    path: workbook path
    sheet_names: sheets to read; names absent from the workbook are skipped

    Returns a mapping sheet name -> cell stream. Absent sheets are simply not
    keys of the result.
    """
    wanted = set(sheet_names)
    try:
        xls = pd.ExcelFile(path)
    except Exception as e:
        raise WorkbookReadError(f"cannot open workbook {path}: {e}") from e

    streams: dict[str, list[Cell]] = {}
    with xls:
        for name in xls.sheet_names:
            if str(name) not in wanted:
                continue
            try:
                df = xls.parse(name, header=None, keep_default_na=False, na_values=[""])
            except Exception as e:
                raise WorkbookReadError(f"cannot parse sheet '{name}': {e}") from e
            if df.shape[1] == 0:
                streams[str(name)] = []
                continue
            streams[str(name)] = cells_from_values(df.iloc[:, 0].tolist())
    return streams
