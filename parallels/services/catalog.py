from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..models.catalog import ProductSummary

"""Catalog browsing: product projection, filter options, filtering and grouping.

Operates on the in-memory list of active products; nothing here talks to the
backend.
"""

__all__ = [
    "ALL",
    "SortOrder",
    "ProductFilter",
    "FilterOptions",
    "to_product_summary",
    "filter_options",
    "filter_and_sort",
    "group_products",
    "group_key",
]

ALL = "all"
UNKNOWN_NAME = "Unknown"
UNKNOWN_SLUG = "unknown"


class SortOrder(Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
    AZ = "az"


@dataclass(frozen=True)
class ProductFilter:
    search: str = ""
    sport: str = ALL  # sport slug
    manufacturer: str = ALL  # manufacturer slug
    year: str = ALL
    sort: SortOrder = SortOrder.NEWEST


@dataclass(frozen=True)
class FilterOptions:
    sports: list[tuple[str, str]]  # (slug, name)
    manufacturers: list[tuple[str, str]]
    years: list[int]


def to_product_summary(row: Mapping[str, Any]) -> ProductSummary:
    """Project a product row with nested `manufacturers` / `sports` relations."""
    manufacturer = row.get("manufacturers") or {}
    sport = row.get("sports") or {}
    return ProductSummary(
        id=str(row["id"]),
        name=row["full_display_name"],
        slug=row["slug"],
        year=int(row["year"]),
        manufacturer_name=manufacturer.get("name") or UNKNOWN_NAME,
        manufacturer_slug=manufacturer.get("slug") or UNKNOWN_SLUG,
        sport_name=sport.get("name") or UNKNOWN_NAME,
        sport_slug=sport.get("slug") or UNKNOWN_SLUG,
    )


def filter_options(products: Iterable[ProductSummary]) -> FilterOptions:
    sports: dict[str, str] = {}
    manufacturers: dict[str, str] = {}
    years: set[int] = set()
    for p in products:
        sports[p.sport_slug] = p.sport_name
        manufacturers[p.manufacturer_slug] = p.manufacturer_name
        years.add(p.year)

    def by_name(items: dict[str, str]) -> list[tuple[str, str]]:
        return sorted(items.items(), key=lambda kv: kv[1].casefold())

    return FilterOptions(
        sports=by_name(sports),
        manufacturers=by_name(manufacturers),
        years=sorted(years, reverse=True),
    )


def _matches_search(p: ProductSummary, term: str) -> bool:
    return (
        term in p.name.lower()
        or term in p.manufacturer_name.lower()
        or term in p.sport_name.lower()
        or term in str(p.year)
    )


def filter_and_sort(products: Iterable[ProductSummary], flt: ProductFilter) -> list[ProductSummary]:
    result = list(products)

    term = flt.search.strip().lower()
    if term:
        result = [p for p in result if _matches_search(p, term)]
    if flt.sport != ALL:
        result = [p for p in result if p.sport_slug == flt.sport]
    if flt.manufacturer != ALL:
        result = [p for p in result if p.manufacturer_slug == flt.manufacturer]
    if flt.year != ALL:
        try:
            year = int(flt.year)
        except ValueError:
            return []
        result = [p for p in result if p.year == year]

    if flt.sort is SortOrder.NEWEST:
        result.sort(key=lambda p: p.year, reverse=True)
    elif flt.sort is SortOrder.OLDEST:
        result.sort(key=lambda p: p.year)
    else:
        result.sort(key=lambda p: p.name.casefold())
    return result


def group_key(p: ProductSummary) -> str:
    return f"{p.sport_name} • {p.manufacturer_name}"


def group_products(products: Iterable[ProductSummary]) -> list[tuple[str, list[ProductSummary]]]:
    """Group by "<sport> • <manufacturer>" keeping first-seen group order."""
    groups: dict[str, list[ProductSummary]] = {}
    for p in products:
        groups.setdefault(group_key(p), []).append(p)
    return list(groups.items())
