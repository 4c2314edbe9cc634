"""Pagination: query parameter normalisation, page arithmetic and link building."""

from __future__ import annotations

import math
import re
from urllib.parse import urlencode

from bloglist.schemas.post import PageLink

# Optional sign, then a decimal integer without leading zeros.
_INT_RE = re.compile(r"[+-]?(?:0|[1-9][0-9]*)")

ELLIPSIS = "…"

# Pages above a signed 64-bit integer are malformed input, not a far page.
MAX_PAGE = 2**63 - 1
_MAX_PAGE_DIGITS = len(str(MAX_PAGE))


def parse_page(raw: str | None) -> int:
    """Return the requested page number, or 1 when missing, malformed or out of range."""
    if raw is None:
        return 1
    value = raw.strip()
    if not _INT_RE.fullmatch(value) or len(value.lstrip("+-")) > _MAX_PAGE_DIGITS:
        return 1
    page = int(value)
    if page < 1 or page > MAX_PAGE:
        return 1
    return page


def normalize_search(raw: str | None) -> str:
    """Trim the search text; an empty result means no filter."""
    if raw is None:
        return ""
    return raw.strip()


def compute_total_pages(total: int, page_size: int) -> int:
    """Number of pages for ``total`` rows, never less than 1."""
    if total <= 0:
        return 1
    return math.ceil(total / page_size)


def clamp_page(page: int, total_pages: int) -> int:
    return min(page, total_pages)


def compute_offset(page: int, page_size: int) -> int:
    return (page - 1) * page_size


def page_href(page: int, search: str) -> str:
    """Build the query string for a listing link, keeping the search text."""
    params: dict[str, str | int] = {}
    if search:
        params["search"] = search
    params["page"] = page
    return "?" + urlencode(params)


def build_pagination_links(
    page: int,
    total_pages: int,
    search: str,
    *,
    total: int | None = None,
    window: int = 3,
) -> list[PageLink]:
    """Build the pagination control strip for the current page.

    Returns an empty list when there is nothing to paginate. Otherwise the
    strip is Previous, an optional first page and ellipsis, the window of
    pages around ``page``, an optional ellipsis and last page, then Next.
    """
    if total_pages <= 1 or total == 0:
        return []

    links: list[PageLink] = []

    prev_page = max(1, page - 1)
    links.append(
        PageLink(
            kind="previous",
            label="Previous",
            page=prev_page,
            href=page_href(prev_page, search),
            disabled=page <= 1,
        )
    )

    start = max(1, page - window)
    end = min(total_pages, page + window)

    if start > 1:
        links.append(PageLink(kind="page", label="1", page=1, href=page_href(1, search)))
        if start > 2:
            links.append(PageLink(kind="ellipsis", label=ELLIPSIS, disabled=True))

    for number in range(start, end + 1):
        links.append(
            PageLink(
                kind="page",
                label=str(number),
                page=number,
                href=page_href(number, search),
                active=number == page,
            )
        )

    if end < total_pages:
        if end < total_pages - 1:
            links.append(PageLink(kind="ellipsis", label=ELLIPSIS, disabled=True))
        links.append(
            PageLink(
                kind="page",
                label=str(total_pages),
                page=total_pages,
                href=page_href(total_pages, search),
            )
        )

    next_page = min(total_pages, page + 1)
    links.append(
        PageLink(
            kind="next",
            label="Next",
            page=next_page,
            href=page_href(next_page, search),
            disabled=page >= total_pages,
        )
    )
    return links
