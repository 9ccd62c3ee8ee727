"""Publication date extraction.

Strategies in order:
1. JSON-LD date fields
2. Time elements near the byline
3. Time elements anywhere in the main content (skipping "updated" stamps)
4. Publish-date meta tags
5. A date-shaped string in the first paragraphs
"""

import re
from typing import Any, Optional, Union

from bs4 import BeautifulSoup, Tag

from article_enricher.extractors.heuristics import content_scope, element_text, record_attempt
from article_enricher.extractors.structured import date_from_json_ld, extract_json_ld
from article_enricher.models import ExtractionAttempt
from article_enricher.normalizers.dates import is_valid_plausible_date, to_iso_date

# Elements whose parent usually also holds the publish date
BYLINE_AREA_SELECTOR = '.author, .byline, [rel="author"], .meta, .article-meta, .post-meta'

TIME_SELECTORS = [
    "time[datetime]",
    '[itemprop="datePublished"]',
    ".published-date",
    ".publish-date",
    ".post-date",
    ".article-date",
    ".date",
    ".timestamp",
]

# Meta tags in order of reliability
META_DATE_SELECTORS = [
    'meta[property="article:published_time"]',
    'meta[itemprop="datePublished"]',
    'meta[name="pubdate"]',
    'meta[name="publishdate"]',
    'meta[name="publish-date"]',
    'meta[name="date"]',
    'meta[name="DC.date.issued"]',
    'meta[property="og:published_time"]',
]

REVISION_MARKER = re.compile(r"updated|modified", re.I)

# Paragraphs scanned by the last-resort text search
TOP_PARAGRAPHS = 3


def _date_from_element(element: Tag, skip_revisions: bool) -> tuple[str, str]:
    """(iso_date, raw_candidate) for a time-like element, iso '' if unusable."""
    machine = (element.get("datetime") or element.get("content") or "").strip()
    if machine and is_valid_plausible_date(machine):
        return to_iso_date(machine) or "", machine

    text = element_text(element)
    if len(text) <= 5:
        return "", machine or text
    if skip_revisions and REVISION_MARKER.search(text):
        return "", text
    return to_iso_date(text) or "", text


def _search_time_elements(
    area: Union[BeautifulSoup, Tag],
    strategy: str,
    skip_revisions: bool,
    attempts: Optional[list[ExtractionAttempt]],
) -> str:
    for selector in TIME_SELECTORS:
        element = area.select_one(selector)
        if element is None:
            continue
        iso, raw = _date_from_element(element, skip_revisions)
        record_attempt(attempts, "date", f"{strategy}:{selector}", raw, bool(iso))
        if iso:
            return iso
    return ""


def extract_date(
    soup: BeautifulSoup,
    json_ld: Optional[list[Any]] = None,
    attempts: Optional[list[ExtractionAttempt]] = None,
) -> str:
    """Publication date as YYYY-MM-DD, or ''."""
    if json_ld is None:
        json_ld = extract_json_ld(soup)

    for block in json_ld:
        raw = date_from_json_ld(block)
        if not raw:
            continue
        iso = to_iso_date(raw) or ""
        record_attempt(attempts, "date", "json-ld", raw, bool(iso))
        if iso:
            return iso

    scope = content_scope(soup)

    byline = scope.select_one(BYLINE_AREA_SELECTOR)
    if byline is not None and byline.parent is not None:
        iso = _search_time_elements(byline.parent, "near-byline", False, attempts)
        if iso:
            return iso

    iso = _search_time_elements(scope, "content", True, attempts)
    if iso:
        return iso

    for selector in META_DATE_SELECTORS:
        meta = soup.select_one(selector)
        if meta is None:
            continue
        content = (meta.get("content") or "").strip()
        if not content:
            continue
        accepted = is_valid_plausible_date(content)
        record_attempt(attempts, "date", selector, content, accepted)
        if accepted:
            return to_iso_date(content) or ""

    top_text = " ".join(element_text(p) for p in scope.find_all("p", limit=TOP_PARAGRAPHS))
    iso = to_iso_date(top_text) or ""
    if top_text:
        record_attempt(attempts, "date", "top-paragraphs", iso, bool(iso))
    return iso
