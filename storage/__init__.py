"""
Storage Module
存储模块 - 内存缓存和输出文件
"""
from .cache import (
    CacheEntry,
    MemoryCache,
    DEFAULT_TTL,
    DEFAULT_MAX_SIZE,
)
from .output import save_to_file, extension_for

__all__ = [
    # Cache
    "CacheEntry",
    "MemoryCache",
    "DEFAULT_TTL",
    "DEFAULT_MAX_SIZE",
    # Output
    "save_to_file",
    "extension_for",
]
