"""Trading-card parallels catalog: checklist classifier and curation helpers."""

__version__ = "0.1.0"
