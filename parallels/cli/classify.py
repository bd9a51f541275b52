from __future__ import annotations

import argparse
import sys
from pathlib import Path

import psycopg2

from parallels.config.loader import ConfigError, load_config
from parallels.db.batch_insert import BatchInsertError
from parallels.db.connection import db_cursor, load_env_file
from parallels.logging.init import log_summary, setup_logging
from parallels.models.config_models import RunOptions
from parallels.services.orchestrator import ProcessingError, apply_rows, classify_workbook
from parallels.services.serializer import to_json_dump, to_sql_insert
from parallels.services.summary import render_summary_line

"""Checklist classifier entrypoint.

    classify-parallels <checklist.xlsx> [--sql] [--json] [--out=FILE]
                       [--apply --product-id=ID] [--config=PATH] [--debug]

SQL and JSON go to stdout; log lines (INFO|WARN|ERROR|SUMMARY) go to stderr.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1

USAGE = (
    "Usage: classify-parallels path/to/checklist.xlsx "
    "[--sql] [--json] [--out=FILE.sql] [--apply --product-id=ID] [--config=PATH] [--debug]"
)


class UsageError(Exception):
    pass


class _Parser(argparse.ArgumentParser):
    def error(self, message: str):  # type: ignore[override]
        raise UsageError(message)


def _build_parser() -> argparse.ArgumentParser:
    p = _Parser(
        prog="classify-parallels",
        description="Checklist workbook -> parallels SQL/JSON",
        add_help=False,
        allow_abbrev=False,
    )
    p.add_argument("path")
    p.add_argument("--sql", action="store_true", help="Print the SQL insert block (default)")
    p.add_argument("--json", action="store_true", help="Print the classification as JSON")
    p.add_argument("--out", metavar="FILE", help="Write SQL to FILE instead of stdout")
    p.add_argument("--apply", action="store_true", help="Insert rows into the database")
    p.add_argument("--product-id", dest="product_id", help="Real products.id used with --apply")
    p.add_argument("--config", dest="config_path", help="YAML config file")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p


def parse_run_options(argv: list[str]) -> tuple[RunOptions, list[str]]:
    """Parse argv into RunOptions; unknown arguments are returned, not fatal.

    Raises:
        UsageError: missing/flag-like path, malformed option, --apply without --product-id
    """
    if not argv or argv[0].startswith("--"):
        raise UsageError("missing checklist path")
    ns, unknown = _build_parser().parse_known_args(argv)
    if ns.apply and not ns.product_id:
        raise UsageError("--apply requires --product-id")
    opts = RunOptions.from_flags(
        ns.path,
        sql=ns.sql,
        json=ns.json,
        out_file=ns.out,
        apply=ns.apply,
        product_id=ns.product_id,
        config_path=ns.config_path,
        debug=ns.debug,
    )
    return opts, unknown


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None only: an explicit [] must not fall back to sys.argv (pytest args)
    if argv is None:
        argv = sys.argv[1:]
    try:
        opts, unknown = parse_run_options(argv)
    except UsageError as e:
        logger.error(str(e))
        print(USAGE, file=sys.stderr)
        return EXIT_FATAL

    if opts.debug:
        setup_logging(debug=True)
        logger.debug("debug mode enabled")
    for arg in unknown:
        logger.warning(f"ignoring unknown argument: {arg}")

    load_env_file()
    try:
        cfg = load_config(Path(opts.config_path) if opts.config_path else None)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    full_path = Path(opts.input_path).resolve()
    if not full_path.exists():
        logger.error(f"File not found: {full_path}")
        return EXIT_FATAL

    try:
        result = classify_workbook(full_path, cfg)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    if opts.emit_json:
        print(to_json_dump(result.classified))

    if opts.emit_sql:
        sql = to_sql_insert(result.rows, table=cfg.table, placeholder=cfg.product_placeholder)
        if opts.out_file:
            Path(opts.out_file).resolve().write_text(sql, encoding="utf-8")
            logger.info(f"Wrote SQL to {opts.out_file}")
        else:
            print(sql)

    if opts.apply:
        try:
            with db_cursor(cfg.database) as cur:
                inserted = apply_rows(cur, result, opts.product_id, cfg.table)
        except (BatchInsertError, psycopg2.Error) as e:
            logger.error(f"apply: {e}")
            return EXIT_FATAL
        logger.info(f"inserted {inserted.inserted_rows} rows into {cfg.table}")

    # log_summary adds the "SUMMARY " prefix itself
    log_summary(render_summary_line(result)[len("SUMMARY "):])
    return EXIT_SUCCESS
