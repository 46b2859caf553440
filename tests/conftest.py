# ABOUTME: Shared pytest fixtures
# ABOUTME: In-memory SQLite article store shared by persistence and pipeline tests

import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel.ext.asyncio.session import AsyncSession

from article_forge.persistence import DatabaseManager


@pytest_asyncio.fixture
async def temp_db() -> DatabaseManager:
    """Provide an in-memory database manager for async tests."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    db = DatabaseManager("sqlite+aiosqlite:///:memory:")
    await db.engine.dispose()
    db.engine = engine
    db.async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await db.create_tables()
    yield db
    await db.close()
