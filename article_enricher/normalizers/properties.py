"""Shape metadata values into typed destination field payloads.

Values are always cut to the destination's limits before they are sent.
"""

import re
from typing import Any

from article_enricher.normalizers.dates import to_iso_date

# Notion limits
MAX_TEXT_LENGTH = 2000
MAX_OPTION_LENGTH = 100
MAX_CONTENT_BLOCKS = 15

SUMMARY_LENGTH = 150


class UnsupportedFieldKind(ValueError):
    """A metadata value cannot be written to a field of this kind."""

    def __init__(self, kind: str, field: str = ""):
        self.kind = kind
        self.field = field
        message = f"unsupported field kind '{kind}'"
        if field:
            message += f" for {field}"
        super().__init__(message)


def rich_text_value(text: str) -> dict:
    return {"rich_text": [{"text": {"content": text[:MAX_TEXT_LENGTH]}}]}


def title_value(text: str) -> dict:
    return {"title": [{"text": {"content": text[:MAX_TEXT_LENGTH]}}]}


def select_value(name: str) -> dict:
    return {"select": {"name": name[:MAX_OPTION_LENGTH]}}


def multi_select_value(names: list[str]) -> dict:
    return {"multi_select": [{"name": name[:MAX_OPTION_LENGTH]} for name in names]}


def date_value(date_str: str) -> dict:
    """Date payload, or {"date": None} when the text isn't a usable date."""
    iso = to_iso_date(date_str)
    if not iso:
        return {"date": None}
    return {"date": {"start": iso}}


def url_value(url: str) -> dict:
    return {"url": url}


def parse_authors(author_text: str) -> list[str]:
    """Split an author string on commas, "and", "&" and ";"."""
    if not author_text:
        return []

    authors = [a.strip() for a in re.split(r",|\band\b|&|;", author_text)]
    authors = [a for a in authors if a]
    return authors or [author_text]


def build_property_value(kind: str, value: str, split_authors: bool = False) -> dict:
    """Payload for a value written to a field of the given kind.

    Raises:
        UnsupportedFieldKind: for number, checkbox, email, phone_number
            and unknown kinds
    """
    if kind == "title":
        return title_value(value)
    if kind == "rich_text":
        return rich_text_value(value)
    if kind == "select":
        return select_value(value)
    if kind == "multi_select":
        return multi_select_value(parse_authors(value) if split_authors else [value])
    if kind == "date":
        return date_value(value)
    if kind == "url":
        if not value.startswith(("http://", "https://")):
            raise UnsupportedFieldKind(kind)
        return url_value(value)
    raise UnsupportedFieldKind(kind)


def create_simple_summary(content: str) -> str:
    """First sentence, or the first 150 characters."""
    if not content:
        return ""

    match = re.match(r"^[^.!?]*[.!?]", content)
    if match and match.group(0).strip():
        return match.group(0).strip()

    suffix = "..." if len(content) > SUMMARY_LENGTH else ""
    return content[:SUMMARY_LENGTH].strip() + suffix


def create_content_blocks(content: str) -> list[dict]:
    """Paragraph blocks for page content, each within the text limit."""
    paragraphs = [p.strip() for p in re.split(r"\r?\n\s*\r?\n", content) if p.strip()]

    blocks = []
    for paragraph in paragraphs:
        for start in range(0, len(paragraph), MAX_TEXT_LENGTH):
            blocks.append({
                "object": "block",
                "type": "paragraph",
                "paragraph": {
                    "rich_text": [{
                        "type": "text",
                        "text": {"content": paragraph[start:start + MAX_TEXT_LENGTH]},
                    }],
                },
            })
    return blocks[:MAX_CONTENT_BLOCKS]


def read_property_value(value: dict[str, Any]) -> Any:
    """Plain Python value of a typed field value, as read from a row."""
    kind = value.get("type")

    if kind in ("title", "rich_text"):
        return "".join(t.get("plain_text", "") for t in value.get(kind) or [])
    if kind == "select":
        return (value.get("select") or {}).get("name")
    if kind == "multi_select":
        return [s.get("name") for s in value.get("multi_select") or []]
    if kind == "date":
        return (value.get("date") or {}).get("start")
    if kind in ("number", "checkbox", "url", "email", "phone_number"):
        return value.get(kind)
    return f"Unsupported property type: {kind}"
