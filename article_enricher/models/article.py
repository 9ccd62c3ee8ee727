"""Article metadata extracted from a single page."""

from pydantic import BaseModel, Field


class ExtractionAttempt(BaseModel):
    """One candidate considered by an extraction cascade."""

    field: str  # publication, author, date, content
    strategy: str  # e.g. "og:site_name", "json-ld", "byline:.author"
    value: str
    accepted: bool = False


class ArticleMetadata(BaseModel):
    """Publication, author(s), date and body text of an article.

    Absence is always the empty string, never None.
    """

    publication: str = ""
    author: str = ""
    date: str = ""  # YYYY-MM-DD
    content: str = ""

    # Diagnostics only, never affects the fields above
    attempts: list[ExtractionAttempt] = Field(default_factory=list, exclude=True)

    class Config:
        extra = "ignore"

    def strategy_for(self, field: str) -> str:
        """Name of the strategy that produced a field, or ''."""
        for attempt in self.attempts:
            if attempt.field == field and attempt.accepted:
                return attempt.strategy
        return ""
