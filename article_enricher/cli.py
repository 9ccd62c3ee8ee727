"""CLI for the article enricher."""

import asyncio
import json
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from article_enricher.extractors.fetch import FetchError, make_client
from article_enricher.extractors.pipeline import extract_article_metadata
from article_enricher.models import FieldOverrides
from article_enricher.normalizers.properties import read_property_value
from article_enricher.pipeline import BatchAbortedError, enrich_collection
from article_enricher.stores.notion import NotionStore, get_notion_client

# Load environment variables (override=True to beat shell env vars)
load_dotenv(override=True)

app = typer.Typer(
    name="article-enricher",
    help="Fill article metadata (publication, author, date, summary) into Notion databases",
    add_completion=False,
)
console = Console()

API_KEY_OPTION = typer.Option(
    None, "--notion-api-key",
    help="Notion API key (default: NOTION_API_KEY env var)",
)


def open_store(api_key: Optional[str]) -> NotionStore:
    try:
        return NotionStore(get_notion_client(api_key))
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        console.print("[dim]Set NOTION_API_KEY in .env or pass --notion-api-key[/dim]")
        raise typer.Exit(1)


@app.command()
def extract(
    url: str = typer.Argument(..., help="Article URL"),
    show_attempts: bool = typer.Option(False, "--attempts", help="Show every candidate considered"),
):
    """Extract metadata from a single article URL."""
    try:
        metadata = asyncio.run(extract_article_metadata(url))
    except FetchError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    table = Table(title=url[:80])
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green", max_width=80)
    table.add_column("Strategy", style="dim")
    for field in ("publication", "author", "date", "content"):
        value = getattr(metadata, field)
        shown = value[:300] + ("..." if len(value) > 300 else "")
        table.add_row(field, shown or "-", metadata.strategy_for(field) or "-")
    console.print(table)

    if show_attempts:
        attempts = Table(title="Extraction attempts")
        attempts.add_column("Field", style="cyan")
        attempts.add_column("Strategy")
        attempts.add_column("Candidate", max_width=60)
        attempts.add_column("Accepted", justify="center")
        for attempt in metadata.attempts:
            attempts.add_row(
                attempt.field,
                attempt.strategy,
                attempt.value[:60],
                "[green]yes[/green]" if attempt.accepted else "[red]no[/red]",
            )
        console.print(attempts)


@app.command()
def enrich(
    database_id: str = typer.Argument(..., help="Notion database ID"),
    url_field: Optional[str] = typer.Option(None, "--url-field", help="Field holding the article URL"),
    publication_field: Optional[str] = typer.Option(None, "--publication-field"),
    author_field: Optional[str] = typer.Option(None, "--author-field"),
    date_field: Optional[str] = typer.Option(None, "--date-field"),
    summary_field: Optional[str] = typer.Option(None, "--summary-field"),
    batch_size: int = typer.Option(5, "--batch-size", "-b", min=1, help="Rows processed concurrently"),
    limit: int = typer.Option(50, "--limit", "-l", min=1, help="Max rows to process"),
    summary: bool = typer.Option(True, "--summary/--no-summary", help="Write a one-sentence summary"),
    silent_errors: bool = typer.Option(
        True, "--silent-errors/--verbose-errors",
        help="Hide error details in the report",
    ),
    delay: float = typer.Option(1.0, "--delay", "-d", help="Pause between batches (seconds)"),
    api_key: Optional[str] = API_KEY_OPTION,
):
    """Extract metadata for every URL in a database and write it back."""
    store = open_store(api_key)
    overrides = FieldOverrides(
        url=url_field,
        publication=publication_field,
        author=author_field,
        date=date_field,
        summary=summary_field,
    )

    async def run():
        async with make_client() as http:
            async def extract_with_client(url: str):
                return await extract_article_metadata(url, client=http)

            try:
                return await enrich_collection(
                    store,
                    database_id,
                    overrides=overrides,
                    batch_size=batch_size,
                    limit=limit,
                    generate_summary=summary,
                    silent_errors=silent_errors,
                    batch_delay=delay,
                    extract=extract_with_client,
                )
            finally:
                await store.aclose()

    try:
        report = asyncio.run(run())
    except BatchAbortedError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if report.mapping:
        console.print(f"\n[bold]{report.mapping.describe()}[/bold]\n")
    console.print(report.to_text(), markup=False, highlight=False)


@app.command()
def schema(
    database_id: str = typer.Argument(..., help="Notion database ID"),
    api_key: Optional[str] = API_KEY_OPTION,
):
    """Show database field names and kinds."""
    store = open_store(api_key)

    async def run():
        try:
            return await store.retrieve_schema(database_id)
        finally:
            await store.aclose()

    fields = asyncio.run(run())
    table = Table(title=f"Database {database_id}")
    table.add_column("Field", style="cyan")
    table.add_column("Kind", style="green")
    for name, kind in fields.items():
        table.add_row(name, kind or "?")
    console.print(table)


@app.command()
def query(
    database_id: str = typer.Argument(..., help="Notion database ID"),
    limit: int = typer.Option(20, "--limit", "-l", min=1, help="Max rows to show"),
    api_key: Optional[str] = API_KEY_OPTION,
):
    """Print database rows as JSON with plain field values."""
    store = open_store(api_key)

    async def run():
        try:
            return await store.query_rows(database_id, limit)
        finally:
            await store.aclose()

    rows = asyncio.run(run())
    formatted = [
        {
            "id": row.id,
            "properties": {name: read_property_value(value) for name, value in row.properties.items()},
        }
        for row in rows
    ]
    console.print_json(json.dumps(formatted))


@app.command()
def search(
    text: str = typer.Argument(..., help="Search query"),
    api_key: Optional[str] = API_KEY_OPTION,
):
    """Search pages and databases, most recently edited first."""
    store = open_store(api_key)

    async def run():
        try:
            return await store.search(text)
        finally:
            await store.aclose()

    results = asyncio.run(run())
    table = Table(title=f"Results for '{text}'")
    table.add_column("Type", style="yellow")
    table.add_column("Title", style="cyan", max_width=50)
    table.add_column("ID", style="dim")
    table.add_column("Last edited", style="dim")
    for item in results:
        title = "Untitled"
        properties = item.get("properties") or {}
        title_prop = properties.get("title") or properties.get("Name")
        if item.get("object") == "page" and title_prop:
            title = read_property_value(title_prop) or title
        table.add_row(item.get("object", "?"), title, item.get("id", ""), item.get("last_edited_time", ""))
    console.print(table)


if __name__ == "__main__":
    app()
