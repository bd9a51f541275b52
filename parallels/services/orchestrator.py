from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Any

from ..db.batch_insert import InsertResult, batch_insert
from ..excel.reader import WorkbookReadError, read_first_columns
from ..models.classification_result import ClassificationResult
from ..models.config_models import ClassifierConfig
from ..models.parallel import INSERT_COLUMNS
from .extraction import extract_auto_parallels, extract_base_parallels
from .serializer import build_insert_rows, dedupe_rows

"""Classifier orchestration.

load workbook -> extract (Base, then Autographs) -> classify -> slug -> dedupe,
and optionally insert the result for a known product id.
Rendering and output are left to the caller.
"""

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Base exception for classification failures."""
    pass


def classify_workbook(path: Path, config: ClassifierConfig | None = None) -> ClassificationResult:
    """Classify every parallel listed in a checklist workbook.

    Raises:
        ProcessingError: the file is missing or is not a readable workbook
    """
    cfg = config or ClassifierConfig()
    if not path.exists():
        raise ProcessingError(f"File not found: {path}")

    try:
        sheets = read_first_columns(path, [cfg.base_sheet, cfg.autos_sheet])
    except WorkbookReadError as e:
        raise ProcessingError(str(e)) from e

    missing = [s for s in (cfg.base_sheet, cfg.autos_sheet) if s not in sheets]
    for name in missing:
        logger.debug(f"sheet not found in workbook: {name}")

    classified = [
        *extract_base_parallels(sheets, sheet_name=cfg.base_sheet, marker=cfg.marker),
        *extract_auto_parallels(sheets, sheet_name=cfg.autos_sheet, marker=cfg.marker),
    ]
    rows = dedupe_rows(build_insert_rows(classified, cfg.product_placeholder))
    return ClassificationResult(
        source=path,
        classified=classified,
        rows=rows,
        missing_sheets=missing,
    )


def apply_rows(
    cursor: Any,
    result: ClassificationResult,
    product_id: str,
    table: str = "parallels",
) -> InsertResult:
    """Insert the deduplicated rows for a real product id.

    Raises:
        BatchInsertError: the database rejected the batch
    """
    rows = [replace(r, product_id=product_id) for r in result.rows]
    logger.info(f"inserting {len(rows)} rows into {table} for product {product_id}")
    return batch_insert(cursor, table, INSERT_COLUMNS, [r.values() for r in rows])
