"""Record stores that the batch processor reads rows from and writes back to."""

from typing import Protocol

from article_enricher.models import Row


class RecordStore(Protocol):
    """A collection of typed rows, each with a list of content blocks."""

    async def retrieve_schema(self, collection_id: str) -> dict[str, str]:
        """Map of field name to field kind."""
        ...

    async def query_rows(self, collection_id: str, limit: int) -> list[Row]:
        ...

    async def update_row(self, row_id: str, properties: dict) -> None:
        ...

    async def list_blocks(self, row_id: str) -> list[dict]:
        ...

    async def append_blocks(self, row_id: str, blocks: list[dict]) -> None:
        ...


__all__ = ["RecordStore"]
