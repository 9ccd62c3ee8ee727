"""Batch enrichment of a destination collection.

1. Resolve destination field names (once per run)
2. Read the schema and up to `limit` rows
3. Process rows in fixed-size batches, all rows of a batch concurrently,
   pausing between batches
4. For each row: read its URL, extract metadata, write typed values back,
   append body content to near-empty pages
"""

import asyncio
from typing import Awaitable, Callable, Optional

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

from article_enricher.extractors.pipeline import extract_article_metadata
from article_enricher.models import (
    ArticleMetadata,
    BatchReport,
    FieldMapping,
    FieldOverrides,
    ResolvedField,
    Row,
)
from article_enricher.normalizers.properties import (
    UnsupportedFieldKind,
    build_property_value,
    create_content_blocks,
    create_simple_summary,
)
from article_enricher.stores import RecordStore

console = Console()

# Candidate field names, most specific first
URL_FIELD_NAMES = ["URL", "Link", "Website", "Address", "Source Link"]
PUBLICATION_FIELD_NAMES = ["Publication", "Publisher", "Source", "Site", "Website Name", "Origin"]
AUTHOR_FIELD_NAMES = ["Author", "Author(s)", "Writer", "Creator", "By"]
DATE_FIELD_NAMES = ["Date", "Published", "Published Date", "Publish Date", "Release Date", "Post Date"]
SUMMARY_FIELD_NAMES = ["Summary", "Article Summary", "TLDR", "Description", "Brief"]

# Pages with fewer blocks are treated as not yet populated. This is only an
# approximation of "title-only page".
MIN_EXISTING_BLOCKS = 3

DEFAULT_BATCH_DELAY = 1.0

Extractor = Callable[[str], Awaitable[ArticleMetadata]]


class BatchAbortedError(Exception):
    """The destination schema or rows could not be read; nothing was processed."""


def find_matching_field(schema: dict[str, str], candidates: list[str]) -> str:
    """Pick a schema field for a list of candidate names.

    Exact match, then case-insensitive, then substring in either direction,
    then the first candidate as-is.
    """
    available = list(schema)

    for name in candidates:
        if name in available:
            return name

    for name in candidates:
        for field in available:
            if field.lower() == name.lower():
                return field

    for name in candidates:
        for field in available:
            if field.lower() in name.lower() or name.lower() in field.lower():
                return field

    return candidates[0]


def resolve_field_mapping(
    schema: dict[str, str],
    overrides: Optional[FieldOverrides] = None,
) -> FieldMapping:
    """Destination field (and its kind) for each metadata value."""
    overrides = overrides or FieldOverrides()

    def resolve(override: Optional[str], candidates: list[str]) -> ResolvedField:
        name = override or find_matching_field(schema, candidates)
        return ResolvedField(name=name, kind=schema.get(name))

    return FieldMapping(
        url=resolve(overrides.url, URL_FIELD_NAMES),
        publication=resolve(overrides.publication, PUBLICATION_FIELD_NAMES),
        author=resolve(overrides.author, AUTHOR_FIELD_NAMES),
        date=resolve(overrides.date, DATE_FIELD_NAMES),
        summary=resolve(overrides.summary, SUMMARY_FIELD_NAMES),
    )


def read_row_url(row: Row, field: str) -> Optional[str]:
    """URL stored in a url, rich_text or title field of the row."""
    value = row.properties.get(field)
    if not value:
        return None

    kind = value.get("type")
    if kind == "url":
        return value.get("url")
    if kind in ("rich_text", "title"):
        texts = value.get(kind) or []
        if texts:
            return (texts[0].get("plain_text") or "").strip()
    return None


def build_row_properties(
    metadata: ArticleMetadata,
    mapping: FieldMapping,
    generate_summary: bool = True,
) -> tuple[dict, list[str]]:
    """Typed field values for the non-empty metadata, plus skip notes.

    Fields whose kind can't hold the value are skipped and reported.
    """
    values = [
        (mapping.publication, metadata.publication, False),
        (mapping.author, metadata.author, True),
        (mapping.date, metadata.date, False),
    ]
    if generate_summary and metadata.content:
        values.append((mapping.summary, create_simple_summary(metadata.content), False))

    properties: dict = {}
    notes: list[str] = []
    for field, value, split_authors in values:
        if not value or not field.kind:
            continue
        try:
            properties[field.name] = build_property_value(field.kind, value, split_authors=split_authors)
        except UnsupportedFieldKind as e:
            notes.append(f'skipped "{field.name}": {e}')

    return properties, notes


async def process_row(
    row: Row,
    store: RecordStore,
    mapping: FieldMapping,
    extract: Extractor,
    generate_summary: bool,
) -> tuple[str, str]:
    """Enrich one row. Returns (status, line) with status success/skipped.

    Raises on fetch, write or content-append failure.
    """
    url = read_row_url(row, mapping.url.name)
    if not url or not url.startswith("http"):
        return "skipped", f'Row {row.id}: No valid URL found in property "{mapping.url.name}"'

    metadata = await extract(url)

    properties, notes = build_row_properties(metadata, mapping, generate_summary)
    if properties:
        await store.update_row(row.id, properties)

    if metadata.content:
        blocks = await store.list_blocks(row.id)
        if len(blocks) < MIN_EXISTING_BLOCKS:
            await store.append_blocks(row.id, create_content_blocks(metadata.content))

    line = f"Row {row.id}: Successfully extracted metadata from {url}"
    if notes:
        line += f" ({'; '.join(notes)})"
    return "success", line


async def enrich_collection(
    store: RecordStore,
    collection_id: str,
    overrides: Optional[FieldOverrides] = None,
    batch_size: int = 5,
    limit: int = 50,
    generate_summary: bool = True,
    silent_errors: bool = True,
    batch_delay: float = DEFAULT_BATCH_DELAY,
    extract: Extractor = extract_article_metadata,
) -> BatchReport:
    """Extract article metadata for every row of a collection and write it back.

    Args:
        store: Destination record store
        collection_id: Database / collection to enrich
        overrides: Explicit field names, auto-detected otherwise
        batch_size: Rows processed concurrently per batch
        limit: Maximum number of rows to read
        generate_summary: Write a one-sentence summary when a summary field exists
        silent_errors: Replace error details with a generic message in the report
        batch_delay: Pause between batches, in seconds
        extract: URL -> ArticleMetadata coroutine

    Returns:
        BatchReport with one status line per row, in row order

    Raises:
        BatchAbortedError: if the schema or the rows cannot be read
    """
    if batch_size < 1:
        raise ValueError("batch_size must be at least 1")

    try:
        schema = await store.retrieve_schema(collection_id)
        mapping = resolve_field_mapping(schema, overrides)
        rows = await store.query_rows(collection_id, limit)
    except Exception as e:
        raise BatchAbortedError(f"Error extracting metadata: {e}") from e

    report = BatchReport(mapping=mapping)
    console.print(f"[dim]{mapping.describe()}[/dim]")

    async def run_row(row: Row) -> tuple[str, str]:
        try:
            return await process_row(row, store, mapping, extract, generate_summary)
        except Exception as e:
            message = "Error occurred" if silent_errors else str(e) or type(e).__name__
            console.print(f"[red]Row {row.id} failed: {e}[/red]")
            return "failed", f"Row {row.id}: Failed to extract metadata - {message}"

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        console=console,
    ) as progress:
        task = progress.add_task("Extracting metadata...", total=len(rows))

        for start in range(0, len(rows), batch_size):
            batch = rows[start:start + batch_size]
            results = await asyncio.gather(*[run_row(row) for row in batch])

            for status, line in results:
                if status == "success":
                    report.succeeded += 1
                elif status == "failed":
                    report.failed += 1
                else:
                    report.skipped += 1
                report.lines.append(line)
            progress.advance(task, len(batch))

            if start + batch_size < len(rows):
                await asyncio.sleep(batch_delay)

    console.print(
        f"[green]Processed {report.processed} URLs[/green] "
        f"[dim]({report.succeeded} ok, {report.failed} failed, {report.skipped} skipped)[/dim]"
    )
    return report
