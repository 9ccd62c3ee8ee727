"""Article body text extraction."""

from typing import Optional

from bs4 import BeautifulSoup

from article_enricher.extractors.heuristics import element_text, meta_content, record_attempt
from article_enricher.models import ExtractionAttempt

CONTENT_SELECTORS = [
    "article",
    ".article-content",
    ".post-content",
    ".entry-content",
    ".article-body",
    ".story-body",
    ".story-content",
    ".content-body",
    ".post-body",
    "#article-body",
    ".article__body",
    ".c-entry-content",
]

# Descriptions shorter than this are teasers, not content
MIN_DESCRIPTION_LENGTH = 100

MAX_PARAGRAPHS = 10


def extract_content(
    soup: BeautifulSoup,
    attempts: Optional[list[ExtractionAttempt]] = None,
) -> str:
    """Meta description, or the first paragraphs of the article when that's too short."""
    content = meta_content(soup, name="description") or meta_content(soup, property="og:description")
    if content:
        record_attempt(
            attempts, "content", "meta-description", content,
            len(content) >= MIN_DESCRIPTION_LENGTH,
        )
    if len(content) >= MIN_DESCRIPTION_LENGTH:
        return content

    for selector in CONTENT_SELECTORS:
        element = soup.select_one(selector)
        if element is None:
            continue

        paragraphs = element.find_all("p")
        if paragraphs:
            texts = [element_text(p) for p in paragraphs[:MAX_PARAGRAPHS]]
            body = " ".join(t for t in texts if t)
        else:
            body = element_text(element)
        record_attempt(attempts, "content", selector, body[:200], True)
        return body

    return content
