# ABOUTME: Database manager for the local article store using SQLModel async sessions
# ABOUTME: Implements list/create plus insert-if-absent keyed by (title, source_url) within a type

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from article_forge.persistence.base import ArticlePayload, ArticleRecord, ArticleType
from article_forge.persistence.models import Article
from article_forge.utils.logging import get_logger


class DatabaseManager:
    """Manages async database operations for article persistence."""

    def __init__(self, database_url: str = "sqlite+aiosqlite:///./data/article_forge.db"):
        self.database_url = database_url
        self.logger = get_logger(__name__)
        self.engine = create_async_engine(database_url, echo=False)
        self.async_session = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_tables(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    async def list_articles(self, article_type: ArticleType | None = None, limit: int = 20) -> list[ArticleRecord]:
        """Return up to ``limit`` articles, newest first."""
        async with self.async_session() as session:
            statement = select(Article)
            if article_type is not None:
                statement = statement.where(Article.type == article_type)
            statement = statement.order_by(Article.created_at.desc(), Article.id.desc()).limit(limit)  # type: ignore[union-attr]
            result = await session.exec(statement)
            return [row.to_record() for row in result.all()]

    async def create(self, payload: ArticlePayload) -> ArticleRecord:
        """Persist a new article."""
        async with self.async_session() as session:
            row = Article.from_payload(payload)
            session.add(row)
            await session.commit()
            await session.refresh(row)
            return row.to_record()

    async def insert_if_absent(self, payload: ArticlePayload) -> tuple[ArticleRecord, bool]:
        """Insert the article unless one with the same title, source_url and type exists.

        Existing rows are never modified. A concurrent insert of the same key
        surfaces as an IntegrityError and resolves to the row that won.
        """
        existing = await self._find_by_key(payload)
        if existing:
            return existing.to_record(), False

        try:
            return await self.create(payload), True
        except IntegrityError:
            self.logger.debug("Concurrent insert detected", title=payload.title, source_url=payload.source_url)
            existing = await self._find_by_key(payload)
            if existing is None:
                raise
            return existing.to_record(), False

    async def _find_by_key(self, payload: ArticlePayload) -> Article | None:
        async with self.async_session() as session:
            statement = select(Article).where(
                Article.title == payload.title,
                Article.source_url == payload.source_url,
                Article.type == payload.type,
            )
            result = await session.exec(statement)
            return result.first()

    async def close(self) -> None:
        await self.engine.dispose()
