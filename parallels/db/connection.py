from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from pathlib import Path

import psycopg2
from dotenv import load_dotenv

from ..models.config_models import DatabaseConfig

"""PostgreSQL connection helpers shared by the classify and browse commands."""

logger = logging.getLogger(__name__)


def load_env_file(path: Path = Path(".env"), override: bool = True) -> None:
    """Load .env so its connection variables win over the config file."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def resolve_dsn(db_cfg: DatabaseConfig) -> str:
    """Build the connection DSN.

    Resolution order:
        1. DATABASE_URL / PGDSN environment variable (whole DSN)
        2. database.dsn from the config file
        3. PGHOST / PGPORT / PGUSER / PGPASSWORD / PGDATABASE, each falling
           back to the config file value and then to a libpq default
    """
    dsn = os.getenv("DATABASE_URL") or os.getenv("PGDSN") or db_cfg.dsn
    if dsn:
        return dsn
    host = os.getenv("PGHOST", db_cfg.host or "localhost")
    port = os.getenv("PGPORT", str(db_cfg.port) if db_cfg.port else "5432")
    user = os.getenv("PGUSER", db_cfg.user or "postgres")
    password = os.getenv("PGPASSWORD", db_cfg.password or "")
    database = os.getenv("PGDATABASE", db_cfg.database or "postgres")
    dsn = f"host={host} port={port} user={user} dbname={database}"
    if password:
        dsn += f" password={password}"
    return dsn


@contextmanager
def db_cursor(db_cfg: DatabaseConfig):  # pragma: no cover (thin wrapper over psycopg2)
    """Yield a cursor inside one transaction: commit on success, rollback on error."""
    conn = psycopg2.connect(resolve_dsn(db_cfg))
    try:
        with conn:
            with conn.cursor() as cur:
                yield cur
    finally:
        conn.close()
