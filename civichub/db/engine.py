"""Async SQLAlchemy engine and session factory."""

from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from civichub.config import get_settings

logger = logging.getLogger(__name__)

_settings = get_settings()

engine = create_async_engine(_settings.database_url, echo=False)
async_session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db():
    """FastAPI dependency that yields an async DB session."""
    async with async_session_factory() as session:
        yield session


async def init_db():
    """Create all tables (and the SQLite data directory when needed)."""
    from civichub.models import Base

    if _settings.database_url.startswith("sqlite+aiosqlite:///"):
        db_path = _settings.database_url.replace("sqlite+aiosqlite:///", "")
        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database ready at %s", engine.url.render_as_string(hide_password=True))
