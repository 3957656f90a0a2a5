"""
Data Models
"""
from .schemas import (
    TrendPeriod,
    ExtractionDepth,
    SummaryLength,
    OutputFormat,
    TopicMatch,
    Repository,
    PageMetadata,
    FilterOptions,
)

__all__ = [
    "TrendPeriod",
    "ExtractionDepth",
    "SummaryLength",
    "OutputFormat",
    "TopicMatch",
    "Repository",
    "PageMetadata",
    "FilterOptions",
]
