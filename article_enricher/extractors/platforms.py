"""Site-specific author extractors for publications with distinctive markup.

Each extractor is registered against a hostname predicate and consulted
before the generic byline cascade. Adding a site means adding a function
here, nothing in the shared cascade changes.
"""

import re
from typing import Callable, Optional, Union
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Tag

from article_enricher.extractors.heuristics import element_text

SiteExtractor = Callable[[BeautifulSoup, Union[BeautifulSoup, Tag]], str]
HostPredicate = Callable[[str], bool]

_REGISTRY: list[tuple[str, HostPredicate, SiteExtractor]] = []


def hostname_of(url: str) -> str:
    try:
        return (urlparse(url).hostname or "").lower()
    except ValueError:
        return ""


def matches_domain(domain: str) -> HostPredicate:
    """Predicate for a domain and its subdomains."""
    def predicate(hostname: str) -> bool:
        return hostname == domain or hostname.endswith("." + domain)
    return predicate


def register_site(name: str, predicate: HostPredicate):
    """Register an author extractor for matching hostnames."""
    def decorator(func: SiteExtractor) -> SiteExtractor:
        _REGISTRY.append((name, predicate, func))
        return func
    return decorator


def find_site_extractor(url: str) -> Optional[tuple[str, SiteExtractor]]:
    """First registered (name, extractor) whose predicate accepts the URL."""
    hostname = hostname_of(url)
    if not hostname:
        return None
    for name, predicate, func in _REGISTRY:
        if predicate(hostname):
            return name, func
    return None


def registered_sites() -> list[str]:
    return [name for name, _, _ in _REGISTRY]


def _join_names(elements: list[Tag]) -> str:
    names: list[str] = []
    for element in elements:
        name = re.sub(r"^by\s+", "", element_text(element), flags=re.I)
        if name and name not in names:
            names.append(name)
    return ", ".join(names)


@register_site("apnews", matches_domain("apnews.com"))
def extract_apnews(soup: BeautifulSoup, scope: Union[BeautifulSoup, Tag]) -> str:
    """AP News lists each author as a link inside .Page-authors."""
    container = soup.select_one(".Page-authors") or soup.select_one(".Page-byline-info")
    if container is None:
        return ""

    links = container.select("a")
    if links:
        return _join_names(links)

    text = re.sub(r"^by\s+", "", element_text(container), flags=re.I)
    return text.replace(" and ", ", ")


@register_site("nytimes", matches_domain("nytimes.com"))
def extract_nytimes(soup: BeautifulSoup, scope: Union[BeautifulSoup, Tag]) -> str:
    """NYT bylines tag each author with itemprop=name inside the byline."""
    names = soup.select('[data-testid="byline"] [itemprop="name"]')
    if not names:
        names = soup.select(".last-byline, .byline-author")
    if names:
        return _join_names(names)

    byline = soup.select_one('[data-testid="byline"], p.byline')
    if byline is None:
        return ""
    text = re.sub(r"^by\s+", "", element_text(byline), flags=re.I)
    return text.replace(" and ", ", ")
