"""Data models for the article enricher."""

from article_enricher.models.article import ArticleMetadata, ExtractionAttempt
from article_enricher.models.batch import (
    FIELD_KINDS,
    BatchReport,
    FieldMapping,
    FieldOverrides,
    ResolvedField,
    Row,
)

__all__ = [
    "ArticleMetadata",
    "ExtractionAttempt",
    "FIELD_KINDS",
    "BatchReport",
    "FieldMapping",
    "FieldOverrides",
    "ResolvedField",
    "Row",
]
