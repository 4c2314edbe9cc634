"""Shared test fixtures for bloglist."""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import insert

from bloglist.config import Settings
from bloglist.database import create_engine
from bloglist.main import create_app
from bloglist.models import Base, Post

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator
    from pathlib import Path

    from sqlalchemy.ext.asyncio import AsyncEngine

BASE_TIME = datetime(2026, 2, 2, 9, 0, 0)


def make_posts(count: int, **overrides: Any) -> list[dict[str, Any]]:
    """Build ``count`` post rows; ``Post N`` is N hours after ``BASE_TIME``."""
    rows = []
    for n in range(1, count + 1):
        row: dict[str, Any] = {
            "title": f"Post {n}",
            "content": f"Content of post {n}.",
            "created_at": BASE_TIME + timedelta(hours=n),
        }
        row.update(overrides)
        rows.append(row)
    return rows


async def insert_posts(engine: AsyncEngine, rows: list[dict[str, Any]]) -> None:
    if not rows:
        return
    async with engine.begin() as conn:
        await conn.execute(insert(Post), rows)


@asynccontextmanager
async def create_test_client(
    settings: Settings, engine: AsyncEngine | None = None
) -> AsyncGenerator[AsyncClient]:
    """Create an HTTP test client for the app.

    ASGITransport does not run the lifespan, so the engine is attached to the
    app state here.
    """
    app = create_app(settings)
    owns_engine = engine is None
    if engine is None:
        engine = create_engine(settings)
    app.state.engine = engine

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    if owns_engine:
        await engine.dispose()


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Create test settings backed by a temporary SQLite file."""
    db_path = tmp_path / "test.db"
    return Settings(
        _env_file=None,
        debug=True,
        database_url=f"sqlite+aiosqlite:///{db_path}",
    )


@pytest.fixture
async def db_engine(test_settings: Settings) -> AsyncGenerator[AsyncEngine]:
    """Create a test database engine with an empty ``posts`` table."""
    engine = create_engine(test_settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()
