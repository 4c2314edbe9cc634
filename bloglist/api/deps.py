"""Shared API dependencies: settings and the per-request database connection."""

from __future__ import annotations

from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncConnection

from bloglist.config import Settings
from bloglist.database import ConnectionFailure, connect


def get_settings(request: Request) -> Settings:
    """Get application settings from app state."""
    settings: Settings = request.app.state.settings
    return settings


async def get_connection(
    request: Request,
) -> AsyncGenerator[AsyncConnection | ConnectionFailure]:
    """Open a connection for the duration of the request.

    Yields a ``ConnectionFailure`` instead of raising when the store is
    unreachable, so routes can render a friendly page.
    """
    result = await connect(request.app.state.engine)
    if isinstance(result, ConnectionFailure):
        yield result
        return
    try:
        yield result
    finally:
        await result.close()
