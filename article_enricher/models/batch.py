"""Destination rows, field mappings and batch reports."""

from typing import Any, Optional

from pydantic import BaseModel, Field

FIELD_KINDS = {
    "title",
    "rich_text",
    "select",
    "multi_select",
    "date",
    "url",
    "number",
    "checkbox",
    "email",
    "phone_number",
}


class Row(BaseModel):
    """A destination row with typed property values keyed by field name."""

    id: str
    properties: dict[str, dict[str, Any]] = Field(default_factory=dict)

    class Config:
        extra = "ignore"


class ResolvedField(BaseModel):
    """A destination field name and its kind (None when not in the schema)."""

    name: str
    kind: Optional[str] = None

    def describe(self) -> str:
        return f'"{self.name}" ({self.kind})'


class FieldMapping(BaseModel):
    """Destination fields for each metadata value, resolved once per batch."""

    url: ResolvedField
    publication: ResolvedField
    author: ResolvedField
    date: ResolvedField
    summary: ResolvedField

    def describe(self) -> str:
        return (
            "Using field mapping:\n"
            f"- URLs: {self.url.describe()}\n"
            f"- Publication: {self.publication.describe()}\n"
            f"- Author: {self.author.describe()}\n"
            f"- Date: {self.date.describe()}\n"
            f"- Summary: {self.summary.describe()}"
        )


class FieldOverrides(BaseModel):
    """Field names given explicitly by the caller."""

    url: Optional[str] = None
    publication: Optional[str] = None
    author: Optional[str] = None
    date: Optional[str] = None
    summary: Optional[str] = None


class BatchReport(BaseModel):
    """Outcome of a batch run, one status line per row in row order."""

    succeeded: int = 0
    failed: int = 0
    skipped: int = 0
    lines: list[str] = Field(default_factory=list)
    mapping: Optional[FieldMapping] = None

    @property
    def processed(self) -> int:
        return self.succeeded + self.failed

    def to_text(self) -> str:
        details = "\n".join(self.lines)
        return (
            f"Processed {self.processed} URLs\n"
            f"{self.succeeded} successful\n"
            f"{self.failed} failed\n\n"
            f"Details:\n{details}"
        )
