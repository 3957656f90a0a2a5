"""
Processing Module
数据处理模块 - 数值归一化、过滤
"""
from .normalize import parse_count, collapse_whitespace
from .filters import filter_repositories, build_filter_options

__all__ = [
    # Normalize
    "parse_count",
    "collapse_whitespace",
    # Filters
    "filter_repositories",
    "build_filter_options",
]
