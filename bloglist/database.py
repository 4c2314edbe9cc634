"""Database engine creation and per-request connections."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

if TYPE_CHECKING:
    from bloglist.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConnectionFailure:
    """The store could not be reached or rejected the credentials."""

    reason: str


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine.

    Connections are not pooled: each request opens its own connection and
    closes it when the response is done.
    """
    return create_async_engine(
        settings.sqlalchemy_url(),
        echo=settings.debug,
        poolclass=NullPool,
    )


async def connect(engine: AsyncEngine) -> AsyncConnection | ConnectionFailure:
    """Open a connection, returning a ``ConnectionFailure`` instead of raising."""
    try:
        return await engine.connect()
    except (DBAPIError, OSError) as exc:
        logger.error("Database connection failed: %s", exc)
        return ConnectionFailure(reason=str(exc))
