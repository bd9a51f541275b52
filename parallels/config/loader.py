from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from parallels.models.config_models import ClassifierConfig, DatabaseConfig

"""Config loader.

Responsibilities:
- Load YAML config (default config/classify.yml)
- Validate against the packaged JSON schema
- Apply defaults for every missing key

The default file is optional; a file the caller asks for explicitly must exist.
"""

DEFAULT_CONFIG_PATH = Path("config/classify.yml")
SCHEMA_PATH = Path(__file__).with_name("config_schema.json")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing or unreadable, or the data violates it
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path | None = None) -> ClassifierConfig:
    explicit = path is not None
    path = path if path is not None else DEFAULT_CONFIG_PATH
    if not path.exists():
        if explicit:
            raise ConfigError(f"config file not found: {path}")
        return ClassifierConfig()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)

    defaults = ClassifierConfig()
    db_raw = data.get("database") or {}
    db = DatabaseConfig(
        host=db_raw.get("host"),
        port=db_raw.get("port"),
        user=db_raw.get("user"),
        password=db_raw.get("password"),
        database=db_raw.get("database"),
        dsn=db_raw.get("dsn"),
    )
    return ClassifierConfig(
        base_sheet=data.get("base_sheet", defaults.base_sheet),
        autos_sheet=data.get("autos_sheet", defaults.autos_sheet),
        marker=data.get("marker", defaults.marker),
        product_placeholder=data.get("product_placeholder", defaults.product_placeholder),
        table=data.get("table", defaults.table),
        image_bucket=data.get("image_bucket", defaults.image_bucket),
        database=db,
    )
