"""Author (byline) extraction.

Strategies, first validated candidate wins:
1. Site-specific extractor for known publications
2. Multi-author containers (every author link is collected)
3. JSON-LD author
4. rel="author" / itemprop="author" elements
5. Common byline classes
6. "By Jane Doe" text pattern
7. Author meta tags (often wrong, so tried last)

Every candidate is cross-checked against the page text. Returns an empty
string when nothing survives, never a placeholder.
"""

import re
from typing import Any, Optional, Union

from bs4 import BeautifulSoup, Tag

from article_enricher.extractors.heuristics import (
    collapse_whitespace,
    content_scope,
    element_text,
    meta_content,
    page_text,
    record_attempt,
)
from article_enricher.extractors.platforms import find_site_extractor
from article_enricher.extractors.structured import author_from_json_ld, extract_json_ld
from article_enricher.models import ExtractionAttempt
from article_enricher.validators import validate_author

# Longer byline text is a bio blurb, not a name
MAX_AUTHOR_LENGTH = 100

MULTI_AUTHOR_SELECTORS = [
    ".authors",
    ".article-authors",
    ".byline__authors",
    ".story-meta__authors",
    ".contributors",
    '[data-testid="authors"]',
]

# Elements inside a multi-author container that hold one name each
AUTHOR_ITEM_SELECTOR = 'a, [itemprop="name"], .author-name, .name'

SEMANTIC_AUTHOR_SELECTORS = ['[rel="author"]', '[itemprop="author"]']

BYLINE_SELECTORS = [
    ".byline",
    ".author",
    ".byline-author",
    ".article-byline",
    ".article-author",
    ".article__byline",
    ".article__author",
    ".post-author",
    ".c-byline__author",
    ".author-name",
    ".writer",
    ".writer-name",
    ".contributor",
    ".entry-author",
    ".bio-name",
    ".ArticleHeader-byline",
    ".article-meta__author",
]

AUTHOR_META = [
    {"name": "author"},
    {"property": "article:author"},
    {"property": "og:author"},
    {"name": "byl"},
]

BYLINE_PREFIX = re.compile(
    r"^(?:by(?:line)?|written\s+by|posted\s+by|author\(?s?\)?)\s*:?\s+",
    re.I,
)

# Trailing "• 5 min read" / "· March 3" noise after a byline
BYLINE_SUFFIX = re.compile(r"\s+[•·|]\s+.*$")

NAME = r"[A-Z][a-z]+(?:[-'][A-Z]?[a-z]+)?\s+[A-Z][a-z]+(?:[-'][A-Z]?[a-z]+)?"

BY_PATTERN = re.compile(
    rf"\b(?i:written\s+by|by|writer|author)[:\s]+({NAME}(?:\s*,\s*{NAME})*)"
)


def clean_author(text: str) -> str:
    """Strip "By"/"Byline:"/"Author(s):" prefixes and trailing date noise."""
    text = collapse_whitespace(text)
    text = BYLINE_PREFIX.sub("", text)
    text = BYLINE_SUFFIX.sub("", text)
    return text.strip(" ,")


def normalize_separators(text: str) -> str:
    """"Jane Doe and John Smith" -> "Jane Doe, John Smith"."""
    return re.sub(r"\s+and\s+", ", ", text, flags=re.I)


def _join_unique(values: list[str]) -> str:
    seen: list[str] = []
    for value in values:
        if value and value not in seen:
            seen.append(value)
    return ", ".join(seen)


def _semantic_name(element: Tag) -> str:
    """itemprop=author often wraps an itemprop=name (or a meta with content)."""
    name = element.select_one('[itemprop="name"]')
    if name is not None:
        if name.name == "meta":
            return (name.get("content") or "").strip()
        return element_text(name)
    if element.name == "meta":
        return (element.get("content") or "").strip()
    return element_text(element)


def from_multi_author_container(scope: Union[BeautifulSoup, Tag]) -> str:
    for selector in MULTI_AUTHOR_SELECTORS:
        container = scope.select_one(selector)
        if container is None:
            continue
        items = container.select(AUTHOR_ITEM_SELECTOR)
        names = [clean_author(element_text(item)) for item in items]
        joined = _join_unique(names)
        if joined:
            return joined
    return ""


def from_semantic_markup(scope: Union[BeautifulSoup, Tag]) -> str:
    for selector in SEMANTIC_AUTHOR_SELECTORS:
        elements = scope.select(selector)
        if not elements:
            continue
        if len(elements) == 1:
            name = clean_author(_semantic_name(elements[0]))
        else:
            name = _join_unique([clean_author(_semantic_name(e)) for e in elements])
        if name:
            return name
    return ""


def from_text_pattern(scope: Union[BeautifulSoup, Tag]) -> str:
    match = BY_PATTERN.search(element_text(scope))
    if match:
        return match.group(1).strip()
    return ""


def extract_author(
    soup: BeautifulSoup,
    url: str = "",
    json_ld: Optional[list[Any]] = None,
    attempts: Optional[list[ExtractionAttempt]] = None,
    text: Optional[str] = None,
) -> str:
    """Best validated author string for the page, or ''."""
    scope = content_scope(soup)
    if text is None:
        text = page_text(soup)
    if json_ld is None:
        json_ld = extract_json_ld(soup)

    def check(strategy: str, candidate: str) -> str:
        candidate = candidate.strip()
        if not candidate:
            return ""
        accepted = len(candidate) < MAX_AUTHOR_LENGTH and validate_author(candidate, text)
        record_attempt(attempts, "author", strategy, candidate, accepted)
        return candidate if accepted else ""

    site = find_site_extractor(url) if url else None
    if site:
        name, site_extractor = site
        author = check(f"site:{name}", site_extractor(soup, scope))
        if author:
            return author

    author = check("multi-author", from_multi_author_container(scope))
    if author:
        return author

    for block in json_ld:
        author = check("json-ld", clean_author(author_from_json_ld(block)))
        if author:
            return author

    author = check("semantic", from_semantic_markup(scope))
    if author:
        return author

    for selector in BYLINE_SELECTORS:
        element = scope.select_one(selector)
        if element is None:
            continue
        name_element = element.select_one(".name, .author-name")
        raw = element_text(name_element if name_element is not None else element)
        if re.fullmatch(r"by:?", raw, re.I):
            continue
        author = check(f"byline:{selector}", normalize_separators(clean_author(raw)))
        if author:
            return author

    author = check("text-pattern", from_text_pattern(scope))
    if author:
        return author

    for attrs in AUTHOR_META:
        value = meta_content(soup, **attrs)
        # article:author is frequently a profile URL
        if value.startswith(("http://", "https://")):
            continue
        author = check(f"meta:{next(iter(attrs.values()))}", clean_author(value))
        if author:
            return author

    return ""
