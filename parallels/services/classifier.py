from __future__ import annotations

import re
from dataclasses import dataclass

from ..models.parallel import BadgeSet, ClassifiedParallel, SheetKind, TabGroup

"""Name-level classification of checklist parallels.

Pure functions: serial-run parsing, badge inference, tab grouping and slugs.

Hobby/retail exclusivity and SP/SSP are not derivable from the checklist
name text and are always False here; curators set them in the admin screen.
"""

__all__ = [
    "SerialInfo",
    "parse_serial_info",
    "infer_badges",
    "classify_tab_group",
    "classify_name",
    "slugify",
    "slug_for",
    "AUTO_SLUG_PREFIX",
]

AUTO_SLUG_PREFIX = "auto-"

_SERIAL_RE = re.compile(r"/(\d+)")
_ONE_OF_ONE = "1/1"
_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")


@dataclass(frozen=True)
class SerialInfo:
    is_numbered: bool
    serial_max: int | None


def parse_serial_info(name: str) -> SerialInfo:
    """Detect a limited print run in a parallel name.

    "/N" anywhere in the name gives serial_max=N (first occurrence only);
    otherwise a literal "1/1" means a one-of-one.
    """
    m = _SERIAL_RE.search(name)
    if m:
        return SerialInfo(is_numbered=True, serial_max=int(m.group(1)))
    if _ONE_OF_ONE in name:
        return SerialInfo(is_numbered=True, serial_max=1)
    return SerialInfo(is_numbered=False, serial_max=None)


def infer_badges(name: str, *, is_auto: bool) -> BadgeSet:
    """Build the BadgeSet for a name; `is_auto` comes from the source sheet."""
    serial = parse_serial_info(name)
    return BadgeSet(
        is_hobby_exclusive=False,
        is_retail_exclusive=False,
        is_fotl_hit="fotl" in name.lower(),
        is_numbered=serial.is_numbered,
        is_auto=is_auto,
        is_sp=False,
        is_ssp=False,
        serial_max=serial.serial_max,
    )


def classify_tab_group(sheet: SheetKind, badges: BadgeSet) -> TabGroup:
    if sheet is SheetKind.AUTOGRAPHS:
        return TabGroup.AUTOS
    return TabGroup.BASE_SERIAL if badges.is_numbered else TabGroup.BASE_NON_SERIAL


def classify_name(name: str, sheet: SheetKind) -> ClassifiedParallel:
    badges = infer_badges(name, is_auto=sheet is SheetKind.AUTOGRAPHS)
    return ClassifiedParallel(
        raw_name=name,
        sheet=sheet,
        tab_group=classify_tab_group(sheet, badges),
        badges=badges,
    )


def slugify(value: str) -> str:
    """URL/key-safe token: "Black & Gold /25" -> "black-and-gold-25"."""
    s = value.strip().lower().replace("&", "and")
    return _NON_SLUG_RE.sub("-", s).strip("-")


def slug_for(parallel: ClassifiedParallel) -> str:
    """Slug of a classified parallel; autograph parallels get an `auto-` prefix."""
    base = slugify(parallel.raw_name)
    return f"{AUTO_SLUG_PREFIX}{base}" if parallel.badges.is_auto else base
