"""Article metadata orchestrator.

Fetches a page once, parses it once, then runs the four field extractors
against the same tree:
- publication
- author
- date
- content
"""

from typing import Optional

import httpx
from bs4 import BeautifulSoup
from rich.console import Console

from article_enricher.extractors.author import extract_author
from article_enricher.extractors.content import extract_content
from article_enricher.extractors.date import extract_date
from article_enricher.extractors.fetch import fetch_html
from article_enricher.extractors.heuristics import page_text
from article_enricher.extractors.publication import extract_publication
from article_enricher.extractors.structured import extract_json_ld
from article_enricher.models import ArticleMetadata

console = Console()


def extract_metadata_from_html(html: str, url: str) -> ArticleMetadata:
    """Extract publication, author, date and content from page HTML."""
    soup = BeautifulSoup(html, "lxml")
    json_ld = extract_json_ld(soup)
    metadata = ArticleMetadata()

    metadata.publication = extract_publication(soup, url, json_ld=json_ld, attempts=metadata.attempts)
    metadata.author = extract_author(
        soup, url, json_ld=json_ld, attempts=metadata.attempts, text=page_text(soup)
    )
    metadata.date = extract_date(soup, json_ld=json_ld, attempts=metadata.attempts)
    metadata.content = extract_content(soup, attempts=metadata.attempts)

    return metadata


async def extract_article_metadata(
    url: str,
    client: Optional[httpx.AsyncClient] = None,
) -> ArticleMetadata:
    """Fetch a URL and extract its article metadata.

    Raises:
        FetchError: if the page cannot be downloaded
    """
    html = await fetch_html(url, client=client)
    metadata = extract_metadata_from_html(html, url)

    console.print(
        f"[green]Extracted:[/green] {metadata.publication[:30]} | "
        f"{metadata.author[:40] or '-'} | {metadata.date or '-'} "
        f"[dim]({url[:60]})[/dim]"
    )
    return metadata
