from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum

from ..excel.reader import Cell, CellKind
from ..models.config_models import DEFAULT_MARKER
from ..models.parallel import ClassifiedParallel, SheetKind
from .classifier import classify_name

"""Marker-driven extraction of parallel names from a sheet's first column.

Each sheet is folded cell by cell through a small state machine:

    SCANNING --marker--> COLLECTING --number/empty--> DONE       (single block)
    SCANNING --marker--> COLLECTING --number/empty--> SCANNING   (multi block)

While COLLECTING, non-blank text cells are emitted (trimmed); blank text and
non-text/non-number cells are skipped without ending the block.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "ScanState",
    "ScanStep",
    "step",
    "collect_names",
    "extract_base_parallels",
    "extract_auto_parallels",
]


class ScanState(Enum):
    SCANNING = "scanning"
    COLLECTING = "collecting"
    DONE = "done"


@dataclass(frozen=True)
class ScanStep:
    state: ScanState
    emitted: str | None = None


def step(state: ScanState, cell: Cell, *, marker: str, multi_block: bool) -> ScanStep:
    """Transition function of the extraction fold."""
    if state is ScanState.DONE:
        return ScanStep(state)

    if state is ScanState.SCANNING:
        if cell.kind is CellKind.TEXT and cell.text == marker:
            return ScanStep(ScanState.COLLECTING)
        return ScanStep(state)

    # COLLECTING
    if cell.kind in (CellKind.NUMBER, CellKind.EMPTY):
        return ScanStep(ScanState.SCANNING if multi_block else ScanState.DONE)
    if cell.kind is CellKind.TEXT and cell.text:
        return ScanStep(state, emitted=cell.text)
    return ScanStep(state)


def collect_names(
    cells: Iterable[Cell], *, marker: str = DEFAULT_MARKER, multi_block: bool = False
) -> list[str]:
    state = ScanState.SCANNING
    names: list[str] = []
    blocks = 0
    for cell in cells:
        nxt = step(state, cell, marker=marker, multi_block=multi_block)
        if nxt.state is ScanState.COLLECTING and state is not ScanState.COLLECTING:
            blocks += 1
        if nxt.emitted is not None:
            names.append(nxt.emitted)
        state = nxt.state
        if state is ScanState.DONE:
            break
    if blocks == 0:
        logger.debug(f"no '{marker}' marker found")
    return names


def _extract(
    sheets: Mapping[str, list[Cell]],
    sheet_name: str,
    kind: SheetKind,
    *,
    marker: str,
    multi_block: bool,
) -> list[ClassifiedParallel]:
    cells = sheets.get(sheet_name)
    if cells is None:
        logger.debug(f"sheet '{sheet_name}' not present -> 0 parallels")
        return []
    names = collect_names(cells, marker=marker, multi_block=multi_block)
    logger.debug(f"sheet '{sheet_name}': {len(names)} parallel names")
    return [classify_name(n, kind) for n in names]


def extract_base_parallels(
    sheets: Mapping[str, list[Cell]],
    *,
    sheet_name: str = SheetKind.BASE.value,
    marker: str = DEFAULT_MARKER,
) -> list[ClassifiedParallel]:
    """Names from the first "Parallels:" block of the base sheet."""
    return _extract(sheets, sheet_name, SheetKind.BASE, marker=marker, multi_block=False)


def extract_auto_parallels(
    sheets: Mapping[str, list[Cell]],
    *,
    sheet_name: str = SheetKind.AUTOGRAPHS.value,
    marker: str = DEFAULT_MARKER,
) -> list[ClassifiedParallel]:
    """Names from every "Parallels:" block of the autographs sheet."""
    return _extract(sheets, sheet_name, SheetKind.AUTOGRAPHS, marker=marker, multi_block=True)
