from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .parallel import ClassifiedParallel, InsertRow, SheetKind

"""Aggregated outcome of classifying one checklist workbook.

Feeds both serializers and the SUMMARY log line.
"""


@dataclass(frozen=True)
class ClassificationResult:
    source: Path
    classified: list[ClassifiedParallel]  # pre-dedup, sheet order (Base then Autographs)
    rows: list[InsertRow]  # deduplicated
    missing_sheets: list[str] = field(default_factory=list)

    @property
    def base_count(self) -> int:
        return sum(1 for c in self.classified if c.sheet is SheetKind.BASE)

    @property
    def auto_count(self) -> int:
        return sum(1 for c in self.classified if c.sheet is SheetKind.AUTOGRAPHS)

    @property
    def duplicate_count(self) -> int:
        return len(self.classified) - len(self.rows)
