from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the checklist classifier and catalog tools.

Loaded from YAML by parallels.config.loader; every field has a default so the
tools run without a config file.
"""

DEFAULT_MARKER = "Parallels:"
DEFAULT_PRODUCT_PLACEHOLDER = "__PRODUCT_ID__"
DEFAULT_IMAGE_BUCKET = "parallel-images"


@dataclass(frozen=True)
class DatabaseConfig:
    """Database connection fallback.

    Environment variables (DATABASE_URL / PGDSN / PG*) take precedence.
    """
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str | None = None
    dsn: str | None = None


@dataclass(frozen=True)
class ClassifierConfig:
    base_sheet: str = "Base"
    autos_sheet: str = "Autographs"
    marker: str = DEFAULT_MARKER  # compared against the trimmed cell text
    product_placeholder: str = DEFAULT_PRODUCT_PLACEHOLDER
    table: str = "parallels"
    image_bucket: str = DEFAULT_IMAGE_BUCKET
    database: DatabaseConfig = field(default_factory=DatabaseConfig)


@dataclass(frozen=True)
class RunOptions:
    """Parsed classify command line.

    Output selection has an explicit default: when neither --sql nor --json
    is given, SQL is emitted.
    """
    input_path: str
    emit_sql: bool = True
    emit_json: bool = False
    out_file: str | None = None
    apply: bool = False
    product_id: str | None = None
    config_path: str | None = None
    debug: bool = False

    @classmethod
    def from_flags(
        cls,
        input_path: str,
        *,
        sql: bool = False,
        json: bool = False,
        **kwargs,
    ) -> RunOptions:
        if not sql and not json:
            sql = True
        return cls(input_path=input_path, emit_sql=sql, emit_json=json, **kwargs)
