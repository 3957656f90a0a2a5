"""Output rendering (json / table / markdown)."""

from .formatter import (
    format_metadata,
    format_number,
    format_repositories,
    trending_title,
    truncate,
)

__all__ = [
    "format_metadata",
    "format_number",
    "format_repositories",
    "trending_title",
    "truncate",
]
