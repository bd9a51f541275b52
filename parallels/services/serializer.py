from __future__ import annotations

import json
from collections.abc import Iterable, Sequence

from ..models.config_models import DEFAULT_PRODUCT_PLACEHOLDER
from ..models.parallel import INSERT_COLUMNS, ClassifiedParallel, InsertRow
from .classifier import slug_for

"""Insert-row projection, de-duplication and output rendering.

Two outputs:
- JSON dump of the classified sequence (pre-dedup) for inspection
- one batched `insert into parallels ...` statement over the deduplicated rows
"""

__all__ = [
    "NO_ROWS_SQL",
    "build_insert_rows",
    "dedupe_rows",
    "sql_escape",
    "sql_literal",
    "to_sql_insert",
    "to_json_dump",
]

NO_ROWS_SQL = "-- No rows generated.\n"


def build_insert_rows(
    classified: Iterable[ClassifiedParallel],
    product_id: str = DEFAULT_PRODUCT_PLACEHOLDER,
) -> list[InsertRow]:
    rows: list[InsertRow] = []
    for c in classified:
        b = c.badges
        rows.append(
            InsertRow(
                product_id=product_id,
                name=c.raw_name,
                slug=slug_for(c),
                is_auto=b.is_auto,
                is_numbered=b.is_numbered,
                serial_max=b.serial_max,
                is_fotl_hit=b.is_fotl_hit,
                is_hobby_exclusive=b.is_hobby_exclusive,
                is_retail_exclusive=b.is_retail_exclusive,
                is_sp=b.is_sp,
                is_ssp=b.is_ssp,
            )
        )
    return rows


def dedupe_rows(rows: Iterable[InsertRow]) -> list[InsertRow]:
    """Keep the first row per (product_id, slug, is_auto), preserving order."""
    seen: set[tuple[str, str, bool]] = set()
    out: list[InsertRow] = []
    for r in rows:
        key = r.dedupe_key
        if key in seen:
            continue
        seen.add(key)
        out.append(r)
    return out


def sql_escape(value: str) -> str:
    return value.replace("'", "''")


def sql_literal(value: object) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    return f"'{sql_escape(str(value))}'"


def _sql_header(table: str, placeholder: str) -> str:
    cols = ",\n".join(f"  {c}" for c in INSERT_COLUMNS)
    return (
        "-- Paste into the SQL editor\n"
        f"-- 1) Replace {placeholder} with the real products.id for this set\n"
        "-- 2) Run\n"
        "\n"
        f"insert into {table} (\n"
        f"{cols}\n"
        ") values\n"
    )


def to_sql_insert(
    rows: Sequence[InsertRow],
    *,
    table: str = "parallels",
    placeholder: str = DEFAULT_PRODUCT_PLACEHOLDER,
) -> str:
    if not rows:
        return NO_ROWS_SQL

    tuples = []
    for r in rows:
        body = ",\n".join(f"  {sql_literal(v)}" for v in r.values())
        tuples.append(f"(\n{body}\n)")
    return _sql_header(table, placeholder) + ",\n".join(tuples) + ";\n"


def to_json_dump(classified: Iterable[ClassifiedParallel]) -> str:
    return json.dumps([c.to_dict() for c in classified], indent=2, ensure_ascii=False)
