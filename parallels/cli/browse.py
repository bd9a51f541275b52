from __future__ import annotations

import argparse
import sys
from pathlib import Path

import psycopg2

from parallels.config.loader import ConfigError, load_config
from parallels.db.connection import db_cursor, load_env_file
from parallels.db.repository import RepositoryError, fetch_active_products, fetch_parallels, fetch_product_by_slug
from parallels.logging.init import setup_logging
from parallels.models.catalog import ParallelRecord, ProductSummary
from parallels.services.catalog import ProductFilter, SortOrder, filter_and_sort, group_products
from parallels.services.display import build_checklist, display_parallel_name, pick_image_paths

"""Read-only catalog browsing from the terminal.

    parallels-browse sets [--search TERM] [--sport SLUG] [--manufacturer SLUG]
                          [--year YEAR] [--sort newest|oldest|az]
    parallels-browse set <slug>
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="parallels-browse", description="Browse catalog sets and parallels")
    p.add_argument("--config", dest="config_path", help="YAML config file")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    sets = sub.add_parser("sets", help="List active sets")
    sets.add_argument("--search", default="")
    sets.add_argument("--sport", default="all")
    sets.add_argument("--manufacturer", default="all")
    sets.add_argument("--year", default="all")
    sets.add_argument("--sort", choices=[s.value for s in SortOrder], default=SortOrder.NEWEST.value)

    one = sub.add_parser("set", help="Show one set and its parallels")
    one.add_argument("slug")
    return p.parse_args(argv)


def render_sets(products: list[ProductSummary]) -> str:
    groups = group_products(products)
    if not groups:
        return "No sets match these filters."
    lines: list[str] = []
    for key, items in groups:
        noun = "set" if len(items) == 1 else "sets"
        lines.append(f"{key} ({len(items)} {noun})")
        for p in items:
            lines.append(f"  {p.year} {p.name} ({p.slug})")
    return "\n".join(lines)


def render_set(product: ProductSummary, parallels: list[ParallelRecord]) -> str:
    noun = "parallel" if len(parallels) == 1 else "parallels"
    lines = [
        f"{product.name} [{product.year}] {product.manufacturer_name} • {product.sport_name}",
        f"slug: {product.slug}",
        f"{len(parallels)} {noun}",
    ]
    if not parallels:
        lines.append("No parallels have been added for this set yet.")
    for par in parallels:
        serial, *flags = build_checklist(par)
        labels = [serial.label] + [item.label for item in flags if item.active]
        lines.append(f"- {display_parallel_name(par.name)}: {', '.join(labels)}")
        front, back = pick_image_paths(par.image_paths)
        if front:
            lines.append(f"    front: {front}")
        if back:
            lines.append(f"    back: {back}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    if args.debug:
        setup_logging(debug=True)

    load_env_file()
    try:
        cfg = load_config(Path(args.config_path) if args.config_path else None)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    try:
        with db_cursor(cfg.database) as cur:
            if args.command == "sets":
                products = fetch_active_products(cur)
                flt = ProductFilter(
                    search=args.search,
                    sport=args.sport,
                    manufacturer=args.manufacturer,
                    year=args.year,
                    sort=SortOrder(args.sort),
                )
                print(render_sets(filter_and_sort(products, flt)))
                return EXIT_SUCCESS

            product = fetch_product_by_slug(cur, args.slug)
            if product is None:
                print(f"Set not found: {args.slug}")
                return EXIT_FATAL
            print(render_set(product, fetch_parallels(cur, product.id)))
            return EXIT_SUCCESS
    except (RepositoryError, psycopg2.Error) as e:
        print(f"Error loading products: {e}")
        return EXIT_FATAL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
