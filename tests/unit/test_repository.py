from __future__ import annotations

import psycopg2
import pytest

from parallels.db.repository import (
    RepositoryError,
    delete_parallel_image,
    fetch_active_products,
    fetch_parallel_images,
    fetch_parallels,
    fetch_product_by_slug,
    insert_parallel_image,
    update_parallel_badges,
)
from parallels.models.catalog import ParallelImage


class FakeCursor:
    """Records executed SQL and replays queued result sets."""

    def __init__(self, results=None, fail_with=None) -> None:
        self.executed: list[tuple[str, object]] = []
        self._results = list(results or [])
        self._current: list[tuple] = []
        self.fail_with = fail_with

    def execute(self, sql, params=None):
        if self.fail_with is not None:
            raise self.fail_with
        self.executed.append((sql, params))
        self._current = self._results.pop(0) if self._results else []

    def fetchall(self):
        return self._current

    def fetchone(self):
        return self._current[0] if self._current else None


def test_fetch_active_products():
    cur = FakeCursor([[("1", "2024-25 Prizm", "prizm-24", 2024, "Panini", "panini", None, None)]])
    products = fetch_active_products(cur)
    assert len(products) == 1
    p = products[0]
    assert (p.name, p.year, p.manufacturer_name) == ("2024-25 Prizm", 2024, "Panini")
    assert (p.sport_name, p.sport_slug) == ("Unknown", "unknown")
    assert "WHERE p.is_active" in cur.executed[0][0]


def test_fetch_product_by_slug_missing():
    assert fetch_product_by_slug(FakeCursor([[]]), "nope") is None


def test_fetch_parallels_attaches_images():
    parallels = [
        ("p1", "s1", "Gold /10", "gold-10", 10, None, False, False, True, True, False, False, False, 1),
        ("p2", "s1", "Silver", "silver", None, "sp", False, None, False, False, False, True, False, 2),
    ]
    images = [(1, "p1", "s1/p1/front-a.jpg"), (2, "p1", "s1/p1/back-b.jpg"), (3, "p2", None)]
    cur = FakeCursor([parallels, images])
    records = fetch_parallels(cur, "s1")
    assert [r.id for r in records] == ["p1", "p2"]
    assert records[0].image_paths == ("s1/p1/front-a.jpg", "s1/p1/back-b.jpg")
    assert records[0].is_fotl_hit and records[0].is_numbered and records[0].serial_max == 10
    assert records[1].image_paths == ()
    assert records[1].is_retail_exclusive is False and records[1].is_sp is True
    assert cur.executed[1][1] == (["p1", "p2"],)


def test_fetch_parallel_images_empty_ids_skips_query():
    cur = FakeCursor()
    assert fetch_parallel_images(cur, []) == []
    assert cur.executed == []


def test_update_parallel_badges_sql():
    cur = FakeCursor()
    update_parallel_badges(cur, "p1", {"is_sp": True, "is_fotl_hit": False})
    sql, params = cur.executed[0]
    assert sql == "UPDATE parallels SET is_fotl_hit = %s, is_sp = %s WHERE id = %s"
    assert params == [False, True, "p1"]


def test_update_parallel_badges_rejects_unknown_columns():
    with pytest.raises(RepositoryError, match="is_fotl_exclusive"):
        update_parallel_badges(FakeCursor(), "p1", {"is_fotl_exclusive": True})


def test_image_row_insert_and_delete():
    cur = FakeCursor()
    insert_parallel_image(cur, "p1", "s1/p1/front-x.png")
    delete_parallel_image(cur, ParallelImage(parallel_id="p1", storage_path="s1/p1/front-x.png", id="9"))
    delete_parallel_image(cur, ParallelImage(parallel_id="p1", storage_path="s1/p1/back-y.png"))
    assert cur.executed[0][1] == ("p1", "s1/p1/front-x.png")
    assert cur.executed[1] == ("DELETE FROM parallel_images WHERE id = %s", ("9",))
    assert "parallel_id = %s AND storage_path = %s" in cur.executed[2][0]


def test_driver_errors_become_repository_errors():
    cur = FakeCursor(fail_with=psycopg2.OperationalError("connection refused"))
    with pytest.raises(RepositoryError, match="connection refused"):
        fetch_active_products(cur)
