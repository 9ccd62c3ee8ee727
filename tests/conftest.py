"""Shared test fixtures and configuration."""

from typing import Optional

import pytest
from article_enricher.models import ArticleMetadata, Row


ARTICLE_HTML = """
<html>
<head>
  <title>City council approves budget</title>
  <meta property="og:site_name" content="The Daily Ledger">
  <meta name="description" content="Short teaser.">
  <meta property="article:published_time" content="2023-03-15T09:30:00Z">
  <script type="application/ld+json">
  {
    '@context': 'https://schema.org',
    '@type': 'NewsArticle',
    headline: 'City council approves budget',
    datePublished: '2023-03-14T09:30:00Z',
    author: [{'@type': 'Person', name: 'Maria Lopez'}],
    publisher: {'@type': 'Organization', name: 'Daily Ledger Media'},
  }
  </script>
</head>
<body>
  <header><div class="logo">Daily Ledger</div></header>
  <article>
    <h1>City council approves budget</h1>
    <div class="byline">By Maria Lopez</div>
    <time datetime="2023-03-13">March 13, 2023</time>
    <p>The city council voted 7-2 on Tuesday to approve next year's budget.</p>
    <p>The plan raises spending on parks and transit.</p>
  </article>
  <aside class="related"><div class="author">About the newsroom</div></aside>
</body>
</html>
"""


@pytest.fixture
def article_html() -> str:
    """A news article page with JSON-LD, meta tags and a byline."""
    return ARTICLE_HTML


@pytest.fixture
def sample_metadata() -> ArticleMetadata:
    return ArticleMetadata(
        publication="The Daily Ledger",
        author="Jane Doe and John Smith",
        date="2023-03-14",
        content="The council approved the budget. Spending on parks goes up.",
    )


def make_row(row_id: str, url: Optional[str], kind: str = "url", field: str = "URL") -> Row:
    """Row whose URL field holds the given value as a url, rich_text or title."""
    if kind == "url":
        value = {"type": "url", "url": url}
    else:
        value = {"type": kind, kind: [{"plain_text": url}] if url else []}
    return Row(id=row_id, properties={field: value})


class FakeStore:
    """In-memory RecordStore."""

    def __init__(
        self,
        schema: dict[str, str],
        rows: list[Row],
        blocks: Optional[dict[str, list[dict]]] = None,
        fail_update_for: tuple[str, ...] = (),
    ):
        self.schema = schema
        self.rows = rows
        self.blocks = blocks or {}
        self.fail_update_for = set(fail_update_for)
        self.schema_error: Optional[Exception] = None
        self.updates: dict[str, dict] = {}
        self.appended: dict[str, list[dict]] = {}

    async def retrieve_schema(self, collection_id: str) -> dict[str, str]:
        if self.schema_error:
            raise self.schema_error
        return dict(self.schema)

    async def query_rows(self, collection_id: str, limit: int) -> list[Row]:
        return self.rows[:limit]

    async def update_row(self, row_id: str, properties: dict) -> None:
        if row_id in self.fail_update_for:
            raise RuntimeError("validation_error: Publication is not a property")
        self.updates[row_id] = properties

    async def list_blocks(self, row_id: str) -> list[dict]:
        return self.blocks.get(row_id, [])

    async def append_blocks(self, row_id: str, blocks: list[dict]) -> None:
        self.appended[row_id] = blocks


@pytest.fixture
def default_schema() -> dict[str, str]:
    return {
        "Name": "title",
        "URL": "url",
        "Publication": "select",
        "Author": "multi_select",
        "Date": "date",
        "Summary": "rich_text",
    }
