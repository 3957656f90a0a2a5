"""
Cache
内存缓存模块 - 带过期时间与容量上限
"""
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Optional, TypeVar
import logging
import time


logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TTL = 3600  # 1小时
DEFAULT_MAX_SIZE = 100


@dataclass
class CacheEntry(Generic[T]):
    """缓存条目"""
    key: str
    value: T
    expires_at: int  # 过期时间 (epoch 毫秒)


class MemoryCache(Generic[T]):
    """
    内存缓存

    进程内字典缓存，不持久化。
    - 读取时惰性删除过期条目
    - 写入后若超过 max_size，按过期时间从早到晚淘汰多余条目
    - enabled=False 时 get 永远未命中、set 为空操作，调用方无需分支
    """

    def __init__(
        self,
        enabled: bool = True,
        max_size: int = DEFAULT_MAX_SIZE,
        ttl: int = DEFAULT_TTL,
        clock: Callable[[], float] = time.time,
    ):
        """
        初始化内存缓存

        Args:
            enabled: 是否启用
            max_size: 最大缓存条目数
            ttl: 默认过期时间 (秒)
            clock: 当前时间 (秒)，测试中可替换
        """
        self.enabled = enabled
        self.max_size = max_size
        self.ttl = ttl
        self._clock = clock
        self._cache: Dict[str, CacheEntry[T]] = {}

    @staticmethod
    def make_key(*parts) -> str:
        """用冒号拼接缓存键，如 trending:python:daily"""
        return ":".join(str(part) for part in parts)

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def get(self, key: str) -> Optional[T]:
        """获取缓存值，未命中或已过期返回 None"""
        if not self.enabled:
            return None

        entry = self._cache.get(key)
        if entry is None:
            return None

        if self._now_ms() > entry.expires_at:
            del self._cache[key]
            logger.debug(f"Cache expired: {key}")
            return None

        return entry.value

    def set(self, key: str, value: T, ttl: Optional[int] = None) -> None:
        """设置缓存值 (覆盖已有条目)"""
        if not self.enabled:
            return

        ttl = self.ttl if ttl is None else ttl
        self._cache[key] = CacheEntry(
            key=key,
            value=value,
            expires_at=self._now_ms() + int(ttl * 1000),
        )

        if len(self._cache) > self.max_size:
            self._prune()

    def _prune(self) -> None:
        """淘汰最早过期的条目，使条目数回到 max_size"""
        overflow = len(self._cache) - self.max_size
        if overflow <= 0:
            return

        oldest = sorted(self._cache.values(), key=lambda entry: entry.expires_at)[:overflow]
        for entry in oldest:
            del self._cache[entry.key]
        logger.debug(f"Cache pruned {overflow} entries")

    def delete(self, key: str) -> None:
        """删除缓存"""
        self._cache.pop(key, None)

    def clear(self) -> None:
        """清空缓存 (无论是否启用)"""
        self._cache.clear()

    def size(self) -> int:
        """返回缓存大小"""
        return len(self._cache)

    def __len__(self) -> int:
        return len(self._cache)
