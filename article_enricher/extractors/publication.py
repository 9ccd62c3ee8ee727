"""Publication (site) name extraction.

Tries in order of confidence:
1. og:site_name
2. JSON-LD publisher / provider / sourceOrganization
3. Other publisher meta tags
4. Site header logo or brand text (or image alt text)
5. Name derived from the URL's hostname

Never returns an empty string.
"""

from typing import Any, Optional
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from article_enricher.extractors.heuristics import element_text, meta_content, record_attempt
from article_enricher.extractors.structured import extract_json_ld, publisher_from_json_ld
from article_enricher.models import ExtractionAttempt

UNKNOWN_PUBLICATION = "Unknown Publication"

# Longer header text is a tagline or menu, not a site name
MAX_BRAND_LENGTH = 50

PUBLISHER_META = [
    {"name": "publisher"},
    {"name": "application-name"},
    {"property": "og:site"},
]

BRAND_SELECTORS = [
    "header .logo",
    "header .site-title",
    "header .brand",
    ".site-title",
    ".logo img",
    ".logo",
    ".brand",
    "#logo",
    '[itemprop="publisher"]',
]


def publication_from_url(url: str) -> str:
    """"www.the-verge.com" -> "The Verge"."""
    try:
        hostname = urlparse(url).hostname or ""
    except ValueError:
        return UNKNOWN_PUBLICATION

    domain = hostname.removeprefix("www.")
    label = domain.split(".")[0]
    if not label:
        return UNKNOWN_PUBLICATION

    return " ".join(word[:1].upper() + word[1:] for word in label.replace("-", " ").split())


def extract_publication(
    soup: BeautifulSoup,
    url: str,
    json_ld: Optional[list[Any]] = None,
    attempts: Optional[list[ExtractionAttempt]] = None,
) -> str:
    """Best publication name for the page."""

    def accept(strategy: str, value: str) -> str:
        record_attempt(attempts, "publication", strategy, value, True)
        return value

    site_name = meta_content(soup, property="og:site_name")
    if site_name:
        return accept("og:site_name", site_name)

    if json_ld is None:
        json_ld = extract_json_ld(soup)
    for block in json_ld:
        publisher = publisher_from_json_ld(block)
        if publisher:
            return accept("json-ld", publisher)

    for attrs in PUBLISHER_META:
        value = meta_content(soup, **attrs)
        if value:
            return accept(f"meta:{next(iter(attrs.values()))}", value)

    for selector in BRAND_SELECTORS:
        element = soup.select_one(selector)
        if element is None:
            continue

        if element.name == "img":
            alt = (element.get("alt") or "").strip()
            if alt and len(alt) < MAX_BRAND_LENGTH:
                return accept(f"{selector} alt", alt)
            record_attempt(attempts, "publication", f"{selector} alt", alt, False)

        text = element_text(element)
        if text and len(text) < MAX_BRAND_LENGTH:
            return accept(selector, text)
        record_attempt(attempts, "publication", selector, text, False)

    return accept("domain", publication_from_url(url))
