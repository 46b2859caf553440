# ABOUTME: SQLModel table for articles in the local store
# ABOUTME: A partial unique index on (title, source_url) for originals makes ingestion idempotent

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import Index
from sqlmodel import JSON, Column, Field, SQLModel

from article_forge.persistence.base import ArticlePayload, ArticleRecord, ArticleType


def utcnow() -> datetime:
    """Returns the current UTC timestamp."""

    return datetime.now(UTC)


class Article(SQLModel, table=True):
    """Persistent article, either an original capture or an enriched rewrite."""

    __tablename__ = "article"  # type: ignore[assignment]

    id: int | None = Field(default=None, primary_key=True, description="Primary key")
    title: str = Field(index=True, description="Article title")
    content: str = Field(description="Current body HTML")
    original_content: str = Field(description="Body HTML captured at ingestion")
    source_url: str = Field(index=True, description="Absolute URL of the origin article")
    published_date: str | None = Field(default=None, description="Publication date as found on the page")
    type: ArticleType = Field(default=ArticleType.ORIGINAL, index=True, description="original or updated")
    references: list[str] = Field(default_factory=list, sa_column=Column(JSON), description="Reference URLs")
    created_at: datetime = Field(default_factory=utcnow, index=True, description="Creation timestamp")
    updated_at: datetime = Field(default_factory=utcnow, description="Last modification timestamp")

    @classmethod
    def from_payload(cls, payload: ArticlePayload) -> Article:
        return cls(
            title=payload.title,
            content=payload.content,
            original_content=payload.original_content,
            source_url=payload.source_url,
            published_date=payload.published_date,
            type=payload.type,
            references=list(payload.references),
        )

    def to_record(self) -> ArticleRecord:
        return ArticleRecord(
            id=str(self.id),
            title=self.title,
            content=self.content,
            original_content=self.original_content,
            source_url=self.source_url,
            published_date=self.published_date,
            type=ArticleType(self.type),
            references=list(self.references or []),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


# Originals are unique per (title, source_url); updated rewrites may repeat
Index(
    "uq_article_original_identity",
    Article.__table__.c.title,  # type: ignore[attr-defined]
    Article.__table__.c.source_url,  # type: ignore[attr-defined]
    unique=True,
    sqlite_where=Article.__table__.c.type == ArticleType.ORIGINAL,  # type: ignore[attr-defined]
)
