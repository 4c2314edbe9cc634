"""Post service: search filter, count and page queries, listing preparation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, get_args

from sqlalchemy import String, bindparam, func, or_, select, type_coerce

from bloglist.config import SearchCase
from bloglist.models.post import Post
from bloglist.schemas.post import PostItem, PostListing
from bloglist.services.datetime_service import parse_timestamp
from bloglist.services.pagination_service import (
    build_pagination_links,
    clamp_page,
    compute_offset,
    compute_total_pages,
    normalize_search,
    parse_page,
)

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement
    from sqlalchemy.ext.asyncio import AsyncConnection

    from bloglist.config import Settings

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "/"

_SEARCH_CASES = get_args(SearchCase)


def like_pattern(search: str) -> str:
    """Wrap ``search`` in ``%`` after escaping LIKE wildcards in it."""
    escaped = (
        search.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def search_filter(search: str, *, case: SearchCase = "collation") -> ColumnElement[bool] | None:
    """Build the title-or-content substring predicate, or None for no search.

    The pattern is a single bound parameter shared by both comparisons.
    """
    if case not in _SEARCH_CASES:
        msg = f"Unknown search case mode: {case!r}"
        raise ValueError(msg)
    if not search:
        return None
    pattern = bindparam("search", like_pattern(search))
    if case == "insensitive":
        return or_(
            func.lower(Post.title).like(func.lower(pattern), escape=LIKE_ESCAPE),
            func.lower(Post.content).like(func.lower(pattern), escape=LIKE_ESCAPE),
        )
    return or_(
        Post.title.like(pattern, escape=LIKE_ESCAPE),
        Post.content.like(pattern, escape=LIKE_ESCAPE),
    )


async def count_posts(
    conn: AsyncConnection, search: str, *, case: SearchCase = "collation"
) -> int:
    """Count posts matching the search text."""
    stmt = select(func.count()).select_from(Post)
    predicate = search_filter(search, case=case)
    if predicate is not None:
        stmt = stmt.where(predicate)
    result = await conn.execute(stmt)
    return result.scalar() or 0


async def fetch_page(
    conn: AsyncConnection,
    search: str,
    *,
    offset: int,
    limit: int,
    case: SearchCase = "collation",
) -> list[PostItem]:
    """Fetch one page of matching posts, newest first.

    ``created_at`` is read as the stored text where the driver allows it and
    parsed by ``parse_timestamp``, so loosely formatted values still display.
    """
    stmt = select(
        Post.id,
        Post.title,
        Post.content,
        type_coerce(Post.created_at, String).label("created_at"),
    )
    predicate = search_filter(search, case=case)
    if predicate is not None:
        stmt = stmt.where(predicate)
    stmt = stmt.order_by(Post.created_at.desc()).offset(offset).limit(limit)

    result = await conn.execute(stmt)
    return [
        PostItem(
            id=row.id,
            title=row.title,
            content=row.content,
            created_at=parse_timestamp(row.created_at),
        )
        for row in result.all()
    ]


async def load_listing(
    conn: AsyncConnection,
    settings: Settings,
    *,
    raw_page: str | None = None,
    raw_search: str | None = None,
) -> PostListing:
    """Run the count and page queries and assemble the listing for rendering.

    ``raw_page`` and ``raw_search`` are the untrusted query parameters. The
    page is normalised to 1 when invalid and clamped to the last page once
    the matching total is known.
    """
    page = parse_page(raw_page)
    search = normalize_search(raw_search)
    limit = settings.page_size

    total = await count_posts(conn, search, case=settings.search_case)
    total_pages = compute_total_pages(total, limit)
    page = clamp_page(page, total_pages)
    offset = compute_offset(page, limit)

    posts = await fetch_page(
        conn, search, offset=offset, limit=limit, case=settings.search_case
    )
    logger.debug(
        "Listing page %d/%d (total=%d, offset=%d, search=%r)",
        page,
        total_pages,
        total,
        offset,
        search,
    )

    return PostListing(
        posts=posts,
        page=page,
        total_pages=total_pages,
        total=total,
        search=search,
        page_size=limit,
        offset=offset,
        pagination_links=build_pagination_links(
            page,
            total_pages,
            search,
            total=total,
            window=settings.pagination_window,
        ),
    )
