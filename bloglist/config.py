"""Application configuration loaded from environment variables."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

SearchCase = Literal["collation", "insensitive"]

BOOTSTRAP_CSS_URL = "https://cdn.jsdelivr.net/npm/bootstrap@5.3.2/dist/css/bootstrap.min.css"


class Settings(BaseSettings):
    """Blog listing settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core
    debug: bool = False

    # Database
    database_url: str = ""
    db_driver: str = "sqlite+aiosqlite"
    db_host: str = "localhost"
    db_name: str = "data/blog.db"
    db_user: str = "root"
    db_password: str = ""
    db_charset: str = "utf8mb4"

    # Listing
    page_size: int = Field(default=5, ge=1)
    preview_length: int = Field(default=200, ge=1)
    pagination_window: int = Field(default=3, ge=0)
    # "collation" defers case sensitivity to the column collation of the store,
    # "insensitive" lowercases both sides of the LIKE comparison.
    search_case: SearchCase = "collation"

    # Presentation
    site_title: str = "Blog Posts"
    stylesheet_url: str = BOOTSTRAP_CSS_URL

    # Server
    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)
    trusted_hosts: list[str] = Field(default_factory=list)

    # Response hardening
    security_headers_enabled: bool = True
    content_security_policy: str = (
        "default-src 'self'; "
        "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
        "img-src 'self' data:; "
        "base-uri 'self'; "
        "form-action 'self'; "
        "frame-ancestors 'none'"
    )

    def sqlalchemy_url(self) -> str | URL:
        """Return the database URL for the engine.

        An explicit ``database_url`` wins. SQLite drivers only use ``db_name``
        as the database file path; every other driver gets host, credentials
        and the connection charset.
        """
        if self.database_url:
            return self.database_url
        if self.db_driver.startswith("sqlite"):
            return URL.create(self.db_driver, database=self.db_name)
        return URL.create(
            self.db_driver,
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            database=self.db_name,
            query={"charset": self.db_charset},
        )
