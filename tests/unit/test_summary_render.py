from __future__ import annotations

import re
from pathlib import Path

from parallels.models.classification_result import ClassificationResult
from parallels.models.parallel import SheetKind
from parallels.services.classifier import classify_name
from parallels.services.serializer import build_insert_rows, dedupe_rows
from parallels.services.summary import render_summary_line

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY base=([0-9]+) autos=([0-9]+) classified=([0-9]+) rows=([0-9]+) duplicates=([0-9]+)$"
)


def _result(*pairs):
    classified = [classify_name(n, s) for n, s in pairs]
    return ClassificationResult(
        source=Path("x.xlsx"),
        classified=classified,
        rows=dedupe_rows(build_insert_rows(classified)),
    )


def test_summary_counts():
    result = _result(
        ("Silver", SheetKind.BASE),
        ("Silver", SheetKind.BASE),
        ("Gold", SheetKind.BASE),
        ("Gold", SheetKind.AUTOGRAPHS),
    )
    line = render_summary_line(result)
    m = SUMMARY_PATTERN.match(line)
    assert m, line
    assert m.groups() == ("3", "1", "4", "3", "1")


def test_summary_empty():
    assert render_summary_line(_result()) == "SUMMARY base=0 autos=0 classified=0 rows=0 duplicates=0"
