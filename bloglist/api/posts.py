"""Post listing page."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncConnection

from bloglist.api.deps import get_connection, get_settings
from bloglist.config import Settings
from bloglist.database import ConnectionFailure
from bloglist.rendering.page import render_connection_error, render_listing
from bloglist.services.post_service import load_listing

logger = logging.getLogger(__name__)

router = APIRouter(tags=["posts"])


@router.get("/", response_class=HTMLResponse)
async def list_posts_page(
    connection: Annotated[AsyncConnection | ConnectionFailure, Depends(get_connection)],
    settings: Annotated[Settings, Depends(get_settings)],
    page: Annotated[str | None, Query()] = None,
    search: Annotated[str | None, Query()] = None,
) -> HTMLResponse:
    """Render one page of posts, optionally filtered by a search term.

    ``page`` is taken as a raw string so malformed values fall back to the
    first page instead of failing validation.
    """
    if isinstance(connection, ConnectionFailure):
        return HTMLResponse(
            render_connection_error(settings, connection.reason),
            status_code=503,
        )

    listing = await load_listing(connection, settings, raw_page=page, raw_search=search)
    return HTMLResponse(render_listing(listing, settings))
