"""HTML rendering for the post listing and the error pages.

Every piece of text that comes from the request or the store goes through
``html.escape`` before it is placed in markup.
"""

from __future__ import annotations

import html
import re
from typing import TYPE_CHECKING

from bloglist.services.datetime_service import format_timestamp

if TYPE_CHECKING:
    from bloglist.config import Settings
    from bloglist.schemas.post import PageLink, PostItem, PostListing

PREVIEW_ELLIPSIS = "..."

_LINE_BREAK_RE = re.compile(r"\r\n|\n\r|\n|\r")

_STYLE = """
    body { background:#f8f9fa; }
    .post-preview { white-space:pre-wrap; }
"""


def make_preview(content: str, length: int = 200) -> str:
    """Cut ``content`` to ``length`` characters, marking the cut with an ellipsis."""
    if len(content) <= length:
        return content
    return content[:length] + PREVIEW_ELLIPSIS


def nl2br(text: str) -> str:
    """Insert ``<br />`` before every line break, keeping the break itself."""
    return _LINE_BREAK_RE.sub(lambda m: "<br />" + m.group(0), text)


def _document(title: str, stylesheet_url: str, body: str) -> str:
    return "\n".join(
        [
            "<!doctype html>",
            '<html lang="en">',
            "<head>",
            '  <meta charset="utf-8">',
            f"  <title>{html.escape(title)}</title>",
            '  <meta name="viewport" content="width=device-width,initial-scale=1">',
            f'  <link href="{html.escape(stylesheet_url)}" rel="stylesheet">',
            f"  <style>{_STYLE}  </style>",
            "</head>",
            "<body>",
            body,
            "</body>",
            "</html>",
            "",
        ]
    )


def _render_search_form(search: str) -> str:
    value = html.escape(search)
    return (
        '  <form class="row g-2 mb-4" method="get" action="">\n'
        '    <div class="col-md-10">\n'
        '      <input type="text" name="search" class="form-control" '
        f'placeholder="Search by title or content" value="{value}">\n'
        "    </div>\n"
        '    <div class="col-md-2 d-grid">\n'
        '      <button class="btn btn-primary" type="submit">Search</button>\n'
        "    </div>\n"
        "  </form>"
    )


def _render_post(post: PostItem, preview_length: int) -> str:
    preview = nl2br(html.escape(make_preview(post.content, preview_length)))
    return (
        '      <div class="list-group-item shadow-sm mb-2 rounded">\n'
        '        <div class="d-flex justify-content-between align-items-start">\n'
        f'          <h5 class="mb-1">{html.escape(post.title)}</h5>\n'
        f'          <small class="text-muted">'
        f"{html.escape(format_timestamp(post.created_at))}</small>\n"
        "        </div>\n"
        f'        <p class="mb-0 post-preview">{preview}</p>\n'
        "      </div>"
    )


def _render_posts(posts: list[PostItem], preview_length: int) -> str:
    if not posts:
        return '  <div class="alert alert-warning">No posts found.</div>'
    items = "\n".join(_render_post(post, preview_length) for post in posts)
    return f'  <div class="list-group mb-4">\n{items}\n  </div>'


def _render_link(link: PageLink) -> str:
    classes = ["page-item"]
    if link.active:
        classes.append("active")
    if link.disabled:
        classes.append("disabled")
    css = " ".join(classes)
    label = html.escape(link.label)

    if link.kind == "ellipsis":
        return f'        <li class="{css}"><span class="page-link">{label}</span></li>'
    if link.active:
        return (
            f'        <li class="{css}" aria-current="page">'
            f'<span class="page-link">{label}</span></li>'
        )

    href = html.escape(link.href or "")
    aria = f' aria-label="{label}"' if link.kind in ("previous", "next") else ""
    if link.disabled:
        return (
            f'        <li class="{css}"><a class="page-link" href="{href}"{aria} '
            f'tabindex="-1" aria-disabled="true">{label}</a></li>'
        )
    return f'        <li class="{css}"><a class="page-link" href="{href}"{aria}>{label}</a></li>'


def _render_pagination(links: list[PageLink]) -> str:
    if not links:
        return ""
    items = "\n".join(_render_link(link) for link in links)
    return (
        '  <nav aria-label="Posts pagination">\n'
        '    <ul class="pagination justify-content-center">\n'
        f"{items}\n"
        "    </ul>\n"
        "  </nav>"
    )


def render_listing(listing: PostListing, settings: Settings) -> str:
    """Render a complete listing page."""
    sections = [
        '<div class="container py-4">',
        f'  <h1 class="text-center mb-4">{html.escape(settings.site_title)}</h1>',
        _render_search_form(listing.search),
        _render_posts(listing.posts, settings.preview_length),
    ]
    pagination = _render_pagination(listing.pagination_links)
    if pagination:
        sections.append(pagination)
    sections.extend(
        [
            '  <div class="text-center text-muted small mt-3">',
            f"    Showing page {listing.page} of {listing.total_pages} "
            f"({listing.total} total posts)",
            "  </div>",
            "</div>",
        ]
    )
    return _document(
        f"{settings.site_title} - Search & Pagination",
        settings.stylesheet_url,
        "\n".join(sections),
    )


def render_connection_error(settings: Settings, detail: str | None = None) -> str:
    """Render the page shown when the database cannot be reached.

    ``detail`` is the driver message; it is only included in debug mode.
    """
    parts = [
        '<div class="container py-4">',
        "  <h2>Database connection error</h2>",
        "  <p>Unable to connect to the database. "
        "Please check your DB credentials and that the database server is running.</p>",
    ]
    if settings.debug and detail:
        parts.append(f"  <pre>{html.escape(detail)}</pre>")
    parts.append("</div>")
    return _document(settings.site_title, settings.stylesheet_url, "\n".join(parts))


def render_server_error(settings: Settings) -> str:
    """Render the generic page for failures while running the queries."""
    body = (
        '<div class="container py-4">\n'
        "  <h2>Internal server error</h2>\n"
        "  <p>The posts could not be loaded. Please try again later.</p>\n"
        "</div>"
    )
    return _document(settings.site_title, settings.stylesheet_url, body)
