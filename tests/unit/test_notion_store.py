"""Tests for the Notion-backed store, with an in-memory client stand-in."""

import asyncio
from types import SimpleNamespace

import pytest
from article_enricher.stores.notion import NotionStore, get_notion_client


class FakeNotionClient:
    """Answers the handful of endpoints NotionStore calls."""

    def __init__(self, pages: list[dict]):
        self.rows = pages
        self.query_bodies: list[dict] = []
        self.updated: list[tuple[str, dict]] = []
        self.databases = SimpleNamespace(retrieve=self._retrieve)
        self.pages = SimpleNamespace(update=self._update)
        self.blocks = SimpleNamespace(children=SimpleNamespace(list=self._list, append=self._append))
        self.appended: list[tuple[str, list]] = []

    async def _retrieve(self, database_id: str) -> dict:
        return {"id": database_id, "properties": {"URL": {"type": "url"}, "Author": {"type": "multi_select"}}}

    async def request(self, path: str, method: str, body: dict) -> dict:
        self.query_bodies.append(body)
        start = int(body.get("start_cursor", 0))
        end = start + body["page_size"]
        has_more = end < len(self.rows)
        return {
            "results": self.rows[start:end],
            "has_more": has_more,
            "next_cursor": str(end) if has_more else None,
        }

    async def _update(self, page_id: str, properties: dict) -> None:
        self.updated.append((page_id, properties))

    async def _list(self, block_id: str) -> dict:
        return {"results": [{"type": "paragraph"}]}

    async def _append(self, block_id: str, children: list) -> None:
        self.appended.append((block_id, children))


def pages(count: int) -> list[dict]:
    return [{"id": f"page-{i}", "properties": {"URL": {"type": "url", "url": f"https://x.test/{i}"}}} for i in range(count)]


class TestNotionStore:
    """Tests for NotionStore."""

    def test_schema(self):
        store = NotionStore(FakeNotionClient([]))
        assert asyncio.run(store.retrieve_schema("db")) == {"URL": "url", "Author": "multi_select"}

    def test_query_paginates_up_to_limit(self):
        client = FakeNotionClient(pages(250))
        rows = asyncio.run(NotionStore(client).query_rows("db", 150))

        assert len(rows) == 150
        assert rows[0].id == "page-0"
        assert rows[-1].id == "page-149"
        assert [b["page_size"] for b in client.query_bodies] == [100, 50]
        assert client.query_bodies[1]["start_cursor"] == "100"

    def test_query_stops_when_exhausted(self):
        client = FakeNotionClient(pages(3))
        rows = asyncio.run(NotionStore(client).query_rows("db", 50))
        assert [r.id for r in rows] == ["page-0", "page-1", "page-2"]
        assert len(client.query_bodies) == 1

    def test_update_and_blocks(self):
        client = FakeNotionClient([])
        store = NotionStore(client)

        async def run():
            await store.update_row("page-1", {"Author": {"multi_select": []}})
            blocks = await store.list_blocks("page-1")
            await store.append_blocks("page-1", [{"type": "paragraph"}])
            return blocks

        assert asyncio.run(run()) == [{"type": "paragraph"}]
        assert client.updated == [("page-1", {"Author": {"multi_select": []}})]
        assert client.appended == [("page-1", [{"type": "paragraph"}])]


class TestGetNotionClient:
    """Tests for client construction."""

    def test_missing_key(self, monkeypatch):
        monkeypatch.delenv("NOTION_API_KEY", raising=False)
        with pytest.raises(ValueError, match="NOTION_API_KEY"):
            get_notion_client()
