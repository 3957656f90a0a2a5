"""
Aggregator Module
"""
from .trend_service import TrendService, create_trend_service, TRENDING_CACHE_TTL

__all__ = [
    "TrendService",
    "create_trend_service",
    "TRENDING_CACHE_TTL",
]
