from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

"""Parallel domain models for the checklist classifier.

A checklist workbook is reduced to a sequence of ClassifiedParallel records
(one per name found under a "Parallels:" marker), which are then projected to
InsertRow records for the `parallels` table.
"""

__all__ = [
    "SheetKind",
    "TabGroup",
    "BadgeSet",
    "ClassifiedParallel",
    "InsertRow",
    "INSERT_COLUMNS",
]


class SheetKind(Enum):
    """Source sheet of a parallel name. Values are the workbook sheet names."""
    BASE = "Base"
    AUTOGRAPHS = "Autographs"


class TabGroup(Enum):
    """Mutually exclusive UI tab a parallel is listed under."""
    BASE_NON_SERIAL = "base-non-serial"
    BASE_SERIAL = "base-serial"
    AUTOS = "autos"


@dataclass(frozen=True)
class BadgeSet:
    """Badge flags inferred for one parallel.

    `is_numbered` is True exactly when `serial_max` is set.
    """
    is_hobby_exclusive: bool
    is_retail_exclusive: bool
    is_fotl_hit: bool
    is_numbered: bool
    is_auto: bool
    is_sp: bool
    is_ssp: bool
    serial_max: int | None = None

    def __post_init__(self) -> None:
        if self.is_numbered != (self.serial_max is not None):
            raise ValueError(
                f"is_numbered={self.is_numbered} inconsistent with serial_max={self.serial_max}"
            )

    def to_dict(self) -> dict[str, Any]:
        # key order mirrors the parallels table badge columns
        return {
            "is_hobby_exclusive": self.is_hobby_exclusive,
            "is_retail_exclusive": self.is_retail_exclusive,
            "is_fotl_hit": self.is_fotl_hit,
            "is_numbered": self.is_numbered,
            "is_auto": self.is_auto,
            "is_sp": self.is_sp,
            "is_ssp": self.is_ssp,
            "serial_max": self.serial_max,
        }


@dataclass(frozen=True)
class ClassifiedParallel:
    raw_name: str
    sheet: SheetKind
    tab_group: TabGroup
    badges: BadgeSet

    def to_dict(self) -> dict[str, Any]:
        """Structured-dump form (camelCase top level, snake_case badges)."""
        return {
            "rawName": self.raw_name,
            "sheet": self.sheet.value,
            "tabGroup": self.tab_group.value,
            "badges": self.badges.to_dict(),
        }


# Column order of the generated INSERT statement
INSERT_COLUMNS: tuple[str, ...] = (
    "product_id",
    "name",
    "slug",
    "is_auto",
    "is_numbered",
    "serial_max",
    "is_fotl_hit",
    "is_hobby_exclusive",
    "is_retail_exclusive",
    "is_sp",
    "is_ssp",
)


@dataclass(frozen=True)
class InsertRow:
    """Serialization-ready projection of a ClassifiedParallel."""
    product_id: str  # placeholder token until substituted
    name: str
    slug: str
    is_auto: bool
    is_numbered: bool
    serial_max: int | None
    is_fotl_hit: bool
    is_hobby_exclusive: bool
    is_retail_exclusive: bool
    is_sp: bool
    is_ssp: bool

    @property
    def dedupe_key(self) -> tuple[str, str, bool]:
        return (self.product_id, self.slug, self.is_auto)

    def values(self) -> tuple[Any, ...]:
        return tuple(getattr(self, c) for c in INSERT_COLUMNS)
