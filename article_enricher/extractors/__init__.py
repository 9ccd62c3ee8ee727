"""URL → article metadata extraction engine.

This module provides a unified extraction pipeline that:
1. Fetches HTML from article URLs
2. Extracts metadata using cascades of strategies, most explicit first:
   - Schema.org JSON-LD (tolerant of malformed JSON)
   - OpenGraph and other meta tags
   - Site-specific byline parsers (AP News, NYT)
   - HTML heuristics (byline classes, time elements, text patterns)
3. Returns an ArticleMetadata record
"""

from article_enricher.extractors.fetch import fetch_html, FetchError
from article_enricher.extractors.structured import extract_json_ld, parse_json_ld, repair_json
from article_enricher.extractors.publication import extract_publication
from article_enricher.extractors.author import extract_author
from article_enricher.extractors.date import extract_date
from article_enricher.extractors.content import extract_content
from article_enricher.extractors.platforms import register_site, find_site_extractor
from article_enricher.extractors.pipeline import extract_article_metadata, extract_metadata_from_html

__all__ = [
    "fetch_html",
    "FetchError",
    "extract_json_ld",
    "parse_json_ld",
    "repair_json",
    "extract_publication",
    "extract_author",
    "extract_date",
    "extract_content",
    "register_site",
    "find_site_extractor",
    "extract_article_metadata",
    "extract_metadata_from_html",
]
