"""Post listing schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class PostItem(BaseModel):
    """A post row as returned by the page query."""

    id: int
    title: str
    content: str
    created_at: datetime


class PageLink(BaseModel):
    """One entry of the pagination control strip.

    ``page`` is ``None`` only for ellipsis placeholders. ``href`` is the raw
    (unescaped) query string the entry links to.
    """

    kind: Literal["previous", "page", "ellipsis", "next"]
    label: str
    page: int | None = None
    href: str | None = None
    active: bool = False
    disabled: bool = False


class PostListing(BaseModel):
    """Everything needed to render one listing page."""

    posts: list[PostItem]
    page: int = Field(ge=1)
    total_pages: int = Field(ge=1)
    total: int = Field(ge=0)
    search: str = ""
    page_size: int = Field(ge=1)
    offset: int = Field(ge=0)
    pagination_links: list[PageLink] = Field(default_factory=list)
