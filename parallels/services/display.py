from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from ..models.catalog import ParallelRecord

"""Set page presentation helpers: display names, checklists, image pairing."""

__all__ = [
    "ChecklistItem",
    "display_parallel_name",
    "build_checklist",
    "pick_image_paths",
]

_SERIAL_SUFFIX_RE = re.compile(r"\s*-\s*/\d+$")
_FOTL_WORD_RE = re.compile(r"\bFOTL\b", re.IGNORECASE)
_SPACES_RE = re.compile(r"\s+")
_TRAILING_DASH_RE = re.compile(r"[-–]\s*$")


@dataclass(frozen=True)
class ChecklistItem:
    key: str
    label: str
    active: bool


def display_parallel_name(name: str) -> str:
    """Human title: "Gold FOTL - /10" -> "Gold"."""
    cleaned = _SERIAL_SUFFIX_RE.sub("", name)
    cleaned = _FOTL_WORD_RE.sub("", cleaned)
    cleaned = _SPACES_RE.sub(" ", cleaned)
    cleaned = _TRAILING_DASH_RE.sub("", cleaned)
    return cleaned.strip()


def build_checklist(parallel: ParallelRecord) -> list[ChecklistItem]:
    is_serial = parallel.serial_max is not None
    rarity = (parallel.rarity_tier or "").lower()
    return [
        ChecklistItem(
            "serial",
            f"Serial numbered /{parallel.serial_max}" if is_serial else "Not numbered",
            is_serial,
        ),
        ChecklistItem("fotl", "FOTL exclusive", "fotl" in parallel.name.lower()),
        ChecklistItem("hobby", "Hobby exclusive", parallel.is_hobby_exclusive),
        ChecklistItem("retail", "Retail exclusive", parallel.is_retail_exclusive),
        ChecklistItem("sp", "SP (short print)", rarity == "sp"),
        ChecklistItem("ssp", "SSP (super short print)", rarity == "ssp"),
    ]


def pick_image_paths(paths: Sequence[str]) -> tuple[str | None, str | None]:
    """Choose (front, back) paths by filename, falling back to upload order."""
    if not paths:
        return None, None
    front = next((p for p in paths if "front" in p.lower()), paths[0])
    back = next((p for p in paths if "back" in p.lower()), None)
    if back is None and len(paths) > 1:
        back = paths[1]
    return front, back
