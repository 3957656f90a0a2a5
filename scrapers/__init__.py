"""
Scrapers Module
"""
from .base import PageFetcher, DEFAULT_TIMEOUT_MS, DEFAULT_USER_AGENT
from .trending_extractor import parse_trending_html, GITHUB_BASE_URL
from .metadata_extractor import parse_page_metadata, parse_timestamp, MAX_CONTENT_PREVIEW

__all__ = [
    # Fetcher
    "PageFetcher",
    "DEFAULT_TIMEOUT_MS",
    "DEFAULT_USER_AGENT",
    # Trending
    "parse_trending_html",
    "GITHUB_BASE_URL",
    # Metadata
    "parse_page_metadata",
    "parse_timestamp",
    "MAX_CONTENT_PREVIEW",
]
