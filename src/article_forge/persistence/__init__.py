# ABOUTME: Article store adapters and the models exchanged with them
# ABOUTME: Local SQLModel database by default, or the external article REST service

"""
Persistence Layer: Store and list articles

This layer handles:
- The ArticleStore contract used by the pipeline
- A local SQLModel/SQLite implementation with a compound-key constraint
- An HTTP implementation for the external article service

Data Flow: core/ payloads → ArticleStore → stored ArticleRecord
"""

from pathlib import Path

from sqlalchemy.engine import make_url

from article_forge.config import Config

from .api import ArticleApiClient
from .base import ArticlePayload, ArticleRecord, ArticleStore, ArticleType
from .manager import DatabaseManager
from .models import Article


async def open_store(config: Config) -> ArticleStore:
    """Build the configured article store and make it ready for use."""
    if config.store_backend == "api":
        return ArticleApiClient(config.article_api_base, timeout=config.fetch_timeout)

    url = make_url(config.database_url)
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    database = DatabaseManager(config.database_url)
    await database.create_tables()
    return database


__all__ = [
    "Article",
    "ArticleApiClient",
    "ArticlePayload",
    "ArticleRecord",
    "ArticleStore",
    "ArticleType",
    "DatabaseManager",
    "open_store",
]
