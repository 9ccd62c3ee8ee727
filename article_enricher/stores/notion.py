"""Notion database store."""

import os
from typing import Optional

from notion_client import AsyncClient

from article_enricher.models import Row

# databases/{id}/query was replaced by data sources in later API versions
NOTION_VERSION = "2022-06-28"

# Notion caps page_size at 100
MAX_PAGE_SIZE = 100


def get_notion_client(api_key: Optional[str] = None) -> AsyncClient:
    """Get Notion client from the given key or environment variables."""
    api_key = api_key or os.environ.get("NOTION_API_KEY")

    if not api_key:
        raise ValueError("NOTION_API_KEY must be set in environment")

    return AsyncClient(auth=api_key, notion_version=NOTION_VERSION)


class NotionStore:
    """RecordStore backed by a Notion database."""

    def __init__(self, client: AsyncClient):
        self.client = client

    async def retrieve_schema(self, collection_id: str) -> dict[str, str]:
        database = await self.client.databases.retrieve(database_id=collection_id)
        return {
            name: prop.get("type")
            for name, prop in (database.get("properties") or {}).items()
        }

    async def query_rows(self, collection_id: str, limit: int) -> list[Row]:
        rows: list[Row] = []
        cursor = None

        while len(rows) < limit:
            body = {"page_size": min(limit - len(rows), MAX_PAGE_SIZE)}
            if cursor:
                body["start_cursor"] = cursor

            response = await self.client.request(
                path=f"databases/{collection_id}/query",
                method="POST",
                body=body,
            )
            rows.extend(
                Row(id=page["id"], properties=page.get("properties") or {})
                for page in response.get("results", [])
            )

            cursor = response.get("next_cursor")
            if not response.get("has_more") or not cursor:
                break

        return rows[:limit]

    async def update_row(self, row_id: str, properties: dict) -> None:
        await self.client.pages.update(page_id=row_id, properties=properties)

    async def list_blocks(self, row_id: str) -> list[dict]:
        response = await self.client.blocks.children.list(block_id=row_id)
        return response.get("results", [])

    async def append_blocks(self, row_id: str, blocks: list[dict]) -> None:
        await self.client.blocks.children.append(block_id=row_id, children=blocks)

    async def search(self, query: str) -> list[dict]:
        """Pages and databases matching a query, most recently edited first."""
        response = await self.client.search(
            query=query,
            sort={"direction": "descending", "timestamp": "last_edited_time"},
        )
        return response.get("results", [])

    async def aclose(self) -> None:
        await self.client.aclose()
