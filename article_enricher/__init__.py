"""Article metadata extraction and Notion database enrichment."""

__version__ = "0.1.0"
