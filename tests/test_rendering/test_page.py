"""Tests for the listing HTML renderer."""

from __future__ import annotations

from datetime import datetime

from bloglist.config import Settings
from bloglist.rendering.page import (
    make_preview,
    nl2br,
    render_connection_error,
    render_listing,
    render_server_error,
)
from bloglist.schemas.post import PostItem, PostListing
from bloglist.services.pagination_service import build_pagination_links

SETTINGS = Settings(_env_file=None)


def _listing(
    posts: list[PostItem] | None = None,
    *,
    page: int = 1,
    total_pages: int = 1,
    total: int | None = None,
    search: str = "",
) -> PostListing:
    posts = posts or []
    if total is None:
        total = len(posts)
    return PostListing(
        posts=posts,
        page=page,
        total_pages=total_pages,
        total=total,
        search=search,
        page_size=5,
        offset=(page - 1) * 5,
        pagination_links=build_pagination_links(page, total_pages, search, total=total),
    )


def _post(title: str = "Title", content: str = "Body") -> PostItem:
    return PostItem(id=1, title=title, content=content, created_at=datetime(2026, 2, 2, 9, 0, 0))


class TestPreview:
    def test_short_content_unchanged(self) -> None:
        text = "x" * 200
        assert make_preview(text) == text

    def test_long_content_truncated_with_ellipsis(self) -> None:
        text = "a" * 199 + "bc"
        assert make_preview(text) == "a" * 199 + "b..."

    def test_truncates_by_character_not_byte(self) -> None:
        text = "é" * 201
        assert make_preview(text) == "é" * 200 + "..."

    def test_custom_length(self) -> None:
        assert make_preview("abcdef", 3) == "abc..."


class TestNl2br:
    def test_all_line_break_styles(self) -> None:
        assert nl2br("a\nb\r\nc\rd") == "a<br />\nb<br />\r\nc<br />\rd"

    def test_no_breaks(self) -> None:
        assert nl2br("plain") == "plain"


class TestRenderListing:
    def test_empty_listing(self) -> None:
        html = render_listing(_listing(), SETTINGS)
        assert "No posts found." in html
        assert "pagination" not in html
        assert "Showing page 1 of 1 (0 total posts)" in html

    def test_post_fields(self) -> None:
        html = render_listing(_listing([_post("First post", "line one\nline two")]), SETTINGS)
        assert "First post" in html
        assert "2026-02-02 09:00:00" in html
        assert "line one<br />\nline two" in html
        assert "No posts found." not in html

    def test_stylesheet_link(self) -> None:
        html = render_listing(_listing(), SETTINGS)
        assert f'<link href="{SETTINGS.stylesheet_url}" rel="stylesheet">' in html

    def test_search_box_prefilled(self) -> None:
        html = render_listing(_listing(search="hello"), SETTINGS)
        assert 'name="search"' in html
        assert 'value="hello"' in html

    def test_untrusted_text_is_escaped(self) -> None:
        post = _post('<script>alert("t")</script> & co', 'x < y > z & "q"')
        html = render_listing(_listing([post], search='"><img src=x>'), SETTINGS)

        assert "<script>" not in html
        assert "&lt;script&gt;alert(&quot;t&quot;)&lt;/script&gt; &amp; co" in html
        assert "x &lt; y &gt; z &amp; &quot;q&quot;" in html
        assert 'value="&quot;&gt;&lt;img src=x&gt;"' in html
        assert "<img" not in html

    def test_escaping_applies_before_truncation_marker(self) -> None:
        post = _post(content="&" * 250)
        html = render_listing(_listing([post]), SETTINGS)
        assert "&amp;" * 200 + "..." in html

    def test_pagination_strip(self) -> None:
        listing = _listing([_post()], page=2, total_pages=3, total=12, search="foo")
        html = render_listing(listing, SETTINGS)

        assert '<nav aria-label="Posts pagination">' in html
        assert 'href="?search=foo&amp;page=1" aria-label="Previous">Previous</a>' in html
        assert 'href="?search=foo&amp;page=3" aria-label="Next">Next</a>' in html
        assert '<li class="page-item active" aria-current="page"><span class="page-link">2</span>' in html
        assert "Showing page 2 of 3 (12 total posts)" in html
        assert 'href="?page=' not in html

    def test_disabled_previous_still_rendered(self) -> None:
        listing = _listing([_post()], page=1, total_pages=3, total=12)
        html = render_listing(listing, SETTINGS)
        assert '<li class="page-item disabled"><a class="page-link" href="?page=1"' in html
        assert 'aria-disabled="true">Previous</a>' in html

    def test_links_without_search_omit_parameter(self) -> None:
        listing = _listing([_post()], page=2, total_pages=3, total=12)
        html = render_listing(listing, SETTINGS)
        assert "search=" not in html
        assert 'href="?page=3"' in html

    def test_site_title_setting(self) -> None:
        settings = Settings(_env_file=None, site_title="Notes & Essays")
        html = render_listing(_listing(), settings)
        assert '<h1 class="text-center mb-4">Notes &amp; Essays</h1>' in html


class TestErrorPages:
    def test_connection_error_hides_detail(self) -> None:
        html = render_connection_error(SETTINGS, "Access denied for user 'root'")
        assert "Database connection error" in html
        assert "Access denied" not in html

    def test_connection_error_shows_escaped_detail_in_debug(self) -> None:
        settings = Settings(_env_file=None, debug=True)
        html = render_connection_error(settings, "bad <host>")
        assert "<pre>bad &lt;host&gt;</pre>" in html

    def test_server_error(self) -> None:
        html = render_server_error(SETTINGS)
        assert "Internal server error" in html
