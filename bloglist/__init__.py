"""Paginated, searchable blog post listing."""

__version__ = "0.1.0"
