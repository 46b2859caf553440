# ABOUTME: Article store contract and the payload/record models exchanged with it
# ABOUTME: Field aliases follow the camelCase wire format of the article REST service

from datetime import datetime
from enum import Enum
from typing import Protocol

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ArticleType(str, Enum):
    """Origin of an article record."""

    ORIGINAL = "original"
    UPDATED = "updated"


class ArticlePayload(BaseModel):
    """Article fields written by the pipeline."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, use_enum_values=False)

    title: str = Field(min_length=1, description="Article title")
    content: str = Field(description="Current body: the original HTML, or the rewrite for updated records")
    original_content: str = Field(description="Body captured at ingestion, never mutated")
    source_url: str = Field(description="Absolute URL of the origin article")
    published_date: str | None = Field(default=None, description="Best-effort publication date as found on the page")
    type: ArticleType = Field(default=ArticleType.ORIGINAL, description="original or updated")
    references: list[str] = Field(default_factory=list, description="Reference URLs in acceptance order")


class ArticleRecord(ArticlePayload):
    """A persisted article as returned by a store."""

    id: str = Field(validation_alias=AliasChoices("_id", "id"), description="Store-assigned identifier")
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ArticleStore(Protocol):
    """Narrow contract the pipeline needs from an article store."""

    async def list_articles(self, article_type: ArticleType | None = None, limit: int = 20) -> list[ArticleRecord]:
        """Return up to ``limit`` articles, newest first, optionally filtered by type."""
        ...

    async def create(self, payload: ArticlePayload) -> ArticleRecord:
        """Persist a new article and return the saved record."""
        ...

    async def insert_if_absent(self, payload: ArticlePayload) -> tuple[ArticleRecord, bool]:
        """Insert unless a record with the same (title, source_url, type) exists.

        Returns:
            The stored record and whether it was created by this call.
            Existing records are returned untouched.
        """
        ...

    async def close(self) -> None: ...
