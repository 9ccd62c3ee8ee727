"""HTTP fetcher for article pages.

One attempt per URL with a browser-like user agent, a 10s timeout and at
most 5 redirects. Any failure raises FetchError; there are no retries.
"""

import random
from typing import Optional

import httpx

# Realistic Firefox User-Agents
USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:134.0) Gecko/20100101 Firefox/134.0",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 14.7; rv:134.0) Gecko/20100101 Firefox/134.0",
    "Mozilla/5.0 (X11; Linux x86_64; rv:134.0) Gecko/20100101 Firefox/134.0",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:133.0) Gecko/20100101 Firefox/133.0",
]

FETCH_TIMEOUT = 10.0
MAX_REDIRECTS = 5


class FetchError(Exception):
    """A page could not be downloaded."""

    def __init__(self, url: str, reason: str, status: Optional[int] = None):
        self.url = url
        self.reason = reason  # "timeout", "connection", "404", ...
        self.status = status
        super().__init__(f"Failed to fetch {url}: {reason}")


def browser_headers() -> dict[str, str]:
    return {
        "User-Agent": random.choice(USER_AGENTS),
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
    }


def make_client(transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    """Async client configured for article fetching."""
    return httpx.AsyncClient(
        timeout=FETCH_TIMEOUT,
        follow_redirects=True,
        max_redirects=MAX_REDIRECTS,
        transport=transport,
    )


async def _get(client: httpx.AsyncClient, url: str) -> str:
    try:
        response = await client.get(url, headers=browser_headers())
        response.raise_for_status()
        return response.text
    except httpx.TimeoutException as e:
        raise FetchError(url, "timeout") from e
    except httpx.TooManyRedirects as e:
        raise FetchError(url, "too_many_redirects") from e
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        raise FetchError(url, str(status), status=status) from e
    except httpx.ConnectError as e:
        raise FetchError(url, "connection") from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise FetchError(url, type(e).__name__.lower()) from e


async def fetch_html(url: str, client: Optional[httpx.AsyncClient] = None) -> str:
    """Download a page and return its HTML.

    Args:
        url: Page URL
        client: Shared client to reuse; a short-lived one is opened otherwise

    Raises:
        FetchError: on timeout, network error, redirect loop or non-2xx status
    """
    if client is not None:
        return await _get(client, url)

    async with make_client() as own_client:
        return await _get(own_client, url)
