"""Domain models for the parallels checklist classifier and catalog tools."""

from .catalog import BADGE_KEYS, ParallelImage, ParallelRecord, ProductSummary
from .classification_result import ClassificationResult
from .config_models import ClassifierConfig, DatabaseConfig, RunOptions
from .parallel import (
    INSERT_COLUMNS,
    BadgeSet,
    ClassifiedParallel,
    InsertRow,
    SheetKind,
    TabGroup,
)

__all__ = [
    # Configuration models
    "ClassifierConfig",
    "DatabaseConfig",
    "RunOptions",
    # Classifier models
    "BadgeSet",
    "ClassifiedParallel",
    "ClassificationResult",
    "InsertRow",
    "INSERT_COLUMNS",
    "SheetKind",
    "TabGroup",
    # Catalog read models
    "BADGE_KEYS",
    "ParallelImage",
    "ParallelRecord",
    "ProductSummary",
]
