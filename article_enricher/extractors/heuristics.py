"""Shared HTML heuristics: main content detection and text cleanup.

Bylines and dates are searched inside the main content region first so
"related articles" sidebars and footers don't leak into the result.
"""

import re
from typing import Optional, Union

from bs4 import BeautifulSoup, Tag

from article_enricher.models import ExtractionAttempt

# First match wins: article markup, explicit body markers, common content
# containers, then <main>
MAIN_CONTENT_SELECTORS = [
    "article",
    '[role="article"]',
    '[itemprop="articleBody"]',
    ".article-content",
    ".post-content",
    ".entry-content",
    ".story-body",
    "#article-body",
    ".content-body",
    "main",
    '[role="main"]',
    ".main-content",
]


def find_main_content(soup: BeautifulSoup) -> Optional[Tag]:
    """The element most likely to hold the article, or None."""
    for selector in MAIN_CONTENT_SELECTORS:
        element = soup.select_one(selector)
        if element is not None:
            return element
    return None


def content_scope(soup: BeautifulSoup) -> Union[BeautifulSoup, Tag]:
    """Main content region, falling back to <body> and then the document."""
    return find_main_content(soup) or soup.body or soup


def collapse_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def element_text(element: Tag) -> str:
    """Visible text of an element with whitespace collapsed."""
    return collapse_whitespace(element.get_text(" "))


def page_text(soup: BeautifulSoup) -> str:
    """Visible text of the whole page, used to cross-check author names."""
    return collapse_whitespace(soup.get_text(" "))


def meta_content(soup: BeautifulSoup, **attrs: str) -> str:
    """Stripped content attribute of the first matching <meta>, or ''."""
    meta = soup.find("meta", attrs=attrs)
    if meta is None:
        return ""
    return (meta.get("content") or "").strip()


def record_attempt(
    attempts: Optional[list[ExtractionAttempt]],
    field: str,
    strategy: str,
    value: str,
    accepted: bool,
) -> None:
    """Append a candidate to the diagnostic log, if one is being kept."""
    if attempts is not None:
        attempts.append(
            ExtractionAttempt(field=field, strategy=strategy, value=value, accepted=accepted)
        )
