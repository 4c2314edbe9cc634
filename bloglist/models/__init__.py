"""SQLAlchemy ORM models for the blog listing."""

from bloglist.models.base import Base
from bloglist.models.post import Post

__all__ = [
    "Base",
    "Post",
]
