from __future__ import annotations

from ..models.classification_result import ClassificationResult

"""SUMMARY line rendering for a classify run."""


def render_summary_line(result: ClassificationResult) -> str:
    """Render the SUMMARY line.

    Format:
    SUMMARY base={n} autos={n} classified={n} rows={n} duplicates={n}

    `rows` counts deduplicated insert rows; `duplicates` is what dedupe dropped.
    """
    return (
        f"SUMMARY base={result.base_count} "
        f"autos={result.auto_count} "
        f"classified={len(result.classified)} "
        f"rows={len(result.rows)} "
        f"duplicates={result.duplicate_count}"
    )
