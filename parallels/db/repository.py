from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import psycopg2

from ..models.catalog import BADGE_KEYS, ParallelImage, ParallelRecord, ProductSummary
from ..services.catalog import to_product_summary

"""Plain-SQL access to the catalog tables over a DB-API cursor.

Every psycopg2 error is re-raised as RepositoryError so callers can turn it
into a message without knowing the driver.
"""

__all__ = [
    "RepositoryError",
    "fetch_active_products",
    "fetch_product_by_slug",
    "fetch_parallels",
    "fetch_parallel_images",
    "update_parallel_badges",
    "insert_parallel_image",
    "delete_parallel_image",
]

_PRODUCT_SELECT = """
SELECT p.id, p.full_display_name, p.slug, p.year,
       m.name, m.slug, s.name, s.slug
FROM products p
LEFT JOIN manufacturers m ON m.id = p.manufacturer_id
LEFT JOIN sports s ON s.id = p.sport_id
"""

_PARALLEL_COLUMNS = (
    "id",
    "product_id",
    "name",
    "slug",
    "serial_max",
    "rarity_tier",
    *BADGE_KEYS,
    "sort_order",
)


class RepositoryError(Exception):
    pass


def _execute(cursor: Any, sql: str, params: Sequence[Any] | None = None) -> None:
    try:
        cursor.execute(sql, params)
    except psycopg2.Error as e:
        raise RepositoryError(str(e).strip() or type(e).__name__) from e


def _product_from_tuple(row: Sequence[Any]) -> ProductSummary:
    pid, name, slug, year, m_name, m_slug, s_name, s_slug = row
    return to_product_summary(
        {
            "id": pid,
            "full_display_name": name,
            "slug": slug,
            "year": year,
            "manufacturers": {"name": m_name, "slug": m_slug},
            "sports": {"name": s_name, "slug": s_slug},
        }
    )


def fetch_active_products(cursor: Any) -> list[ProductSummary]:
    _execute(cursor, _PRODUCT_SELECT + "WHERE p.is_active ORDER BY p.year DESC")
    return [_product_from_tuple(r) for r in cursor.fetchall()]


def fetch_product_by_slug(cursor: Any, slug: str) -> ProductSummary | None:
    _execute(cursor, _PRODUCT_SELECT + "WHERE p.slug = %s LIMIT 1", (slug,))
    row = cursor.fetchone()
    return _product_from_tuple(row) if row else None


def fetch_parallel_images(cursor: Any, parallel_ids: Sequence[str]) -> list[ParallelImage]:
    if not parallel_ids:
        return []
    _execute(
        cursor,
        "SELECT id, parallel_id, storage_path FROM parallel_images "
        "WHERE parallel_id = ANY(%s) ORDER BY id",
        (list(parallel_ids),),
    )
    return [
        ParallelImage(id=str(i) if i is not None else None, parallel_id=str(pid), storage_path=path)
        for i, pid, path in cursor.fetchall()
    ]


def fetch_parallels(cursor: Any, product_id: str, with_images: bool = True) -> list[ParallelRecord]:
    """Parallels of one product ordered by sort_order, optionally with image paths."""
    cols = ", ".join(_PARALLEL_COLUMNS)
    _execute(
        cursor,
        f"SELECT {cols} FROM parallels WHERE product_id = %s ORDER BY sort_order NULLS LAST, name",
        (product_id,),
    )
    raw = [dict(zip(_PARALLEL_COLUMNS, r)) for r in cursor.fetchall()]

    paths: dict[str, list[str]] = {}
    if with_images and raw:
        for img in fetch_parallel_images(cursor, [str(r["id"]) for r in raw]):
            if img.storage_path:
                paths.setdefault(img.parallel_id, []).append(img.storage_path)

    records = []
    for r in raw:
        pid = str(r["id"])
        records.append(
            ParallelRecord(
                id=pid,
                product_id=str(r["product_id"]),
                name=r["name"] or "",
                slug=r["slug"] or "",
                serial_max=r["serial_max"],
                rarity_tier=r["rarity_tier"],
                sort_order=r["sort_order"],
                image_paths=tuple(paths.get(pid, ())),
                **{k: bool(r[k]) for k in BADGE_KEYS},
            )
        )
    return records


def update_parallel_badges(cursor: Any, parallel_id: str, update: Mapping[str, bool]) -> None:
    unknown = set(update) - set(BADGE_KEYS)
    if unknown:
        raise RepositoryError(f"unknown badge columns: {sorted(unknown)}")
    keys = [k for k in BADGE_KEYS if k in update]
    if not keys:
        return
    assignments = ", ".join(f"{k} = %s" for k in keys)
    _execute(
        cursor,
        f"UPDATE parallels SET {assignments} WHERE id = %s",
        [bool(update[k]) for k in keys] + [parallel_id],
    )


def insert_parallel_image(cursor: Any, parallel_id: str, storage_path: str) -> None:
    _execute(
        cursor,
        "INSERT INTO parallel_images (parallel_id, storage_path) VALUES (%s, %s)",
        (parallel_id, storage_path),
    )


def delete_parallel_image(cursor: Any, image: ParallelImage) -> None:
    # rows without a surrogate id are matched by (parallel_id, storage_path)
    if image.id is not None:
        _execute(cursor, "DELETE FROM parallel_images WHERE id = %s", (image.id,))
    else:
        _execute(
            cursor,
            "DELETE FROM parallel_images WHERE parallel_id = %s AND storage_path = %s",
            (image.parallel_id, image.storage_path),
        )
