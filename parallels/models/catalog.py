from __future__ import annotations

from dataclasses import dataclass

"""Read models for the catalog backend tables.

Mirrors the subset of `products`, `parallels`, `parallel_images`,
`manufacturers` and `sports` columns the browser and admin screens consume.
The backend owns these tables; nothing here writes schema.
"""

__all__ = [
    "ProductSummary",
    "ParallelRecord",
    "ParallelImage",
    "BADGE_KEYS",
]


@dataclass(frozen=True)
class ProductSummary:
    """Product (set) as listed on the browse page."""
    id: str
    name: str  # products.full_display_name
    slug: str
    year: int
    manufacturer_name: str
    manufacturer_slug: str
    sport_name: str
    sport_slug: str


@dataclass(frozen=True)
class ParallelImage:
    parallel_id: str
    storage_path: str | None
    id: str | None = None  # older rows may lack a surrogate id


@dataclass(frozen=True)
class ParallelRecord:
    """One `parallels` row plus its image paths."""
    id: str
    product_id: str
    name: str
    slug: str
    serial_max: int | None = None
    rarity_tier: str | None = None
    is_hobby_exclusive: bool = False
    is_retail_exclusive: bool = False
    is_fotl_hit: bool = False
    is_numbered: bool = False
    is_auto: bool = False
    is_sp: bool = False
    is_ssp: bool = False
    sort_order: int | None = None
    image_paths: tuple[str, ...] = ()


# Badge flags curators toggle per parallel, in admin column order
BADGE_KEYS: tuple[str, ...] = (
    "is_hobby_exclusive",
    "is_retail_exclusive",
    "is_fotl_hit",
    "is_numbered",
    "is_auto",
    "is_sp",
    "is_ssp",
)
