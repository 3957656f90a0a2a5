"""
Trend Service
抓取编排层 - 缓存 → HTTP 抓取 → 解析 → 过滤 → 写入缓存
"""
import asyncio
from typing import Awaitable, Callable, Dict, Iterable, List, Optional, TypeVar, Union
from urllib.parse import quote
import logging

import httpx

from config import Settings
from models import (
    ExtractionDepth,
    PageMetadata,
    Repository,
    TopicMatch,
    TrendPeriod,
)
from processing.filters import build_filter_options, filter_repositories
from scrapers import PageFetcher, parse_page_metadata, parse_trending_html
from storage.cache import MemoryCache
from utils.exceptions import FetchError


logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TRENDING_URL = "https://github.com/trending"
TRENDING_CACHE_TTL = 3600  # 1小时
DEFAULT_METADATA_TIMEOUT_MS = 30000

TRENDING_FAILURE = "Failed to retrieve trending repositories"
CONTENT_FAILURE = "Failed to retrieve content"


def _describe(error: httpx.HTTPError) -> str:
    # 部分 httpx 超时异常的 str() 为空
    return str(error) or error.__class__.__name__


class TrendService:
    """
    趋势与网页元数据抓取服务

    所有协作者显式注入：
    - fetcher: 唯一的网络出口
    - repo_cache / metadata_cache: 两个独立的内存缓存，生命周期由调用方掌握

    同一事件循环内，相同缓存键的并发未命中共享一次抓取 (single-flight)。
    网络错误统一包装为 FetchError，不重试、不吞掉。
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        repo_cache: Optional[MemoryCache[List[Repository]]] = None,
        metadata_cache: Optional[MemoryCache[PageMetadata]] = None,
        trending_url: str = DEFAULT_TRENDING_URL,
        request_timeout_ms: Optional[int] = None,
    ):
        """
        初始化服务

        Args:
            fetcher: 页面抓取器
            repo_cache: 趋势列表缓存
            metadata_cache: 网页元数据缓存
            trending_url: 趋势页面基础地址
            request_timeout_ms: 趋势页面请求超时 (毫秒)，默认使用 fetcher 配置
        """
        self.fetcher = fetcher
        self.repo_cache: MemoryCache[List[Repository]] = repo_cache if repo_cache is not None else MemoryCache()
        self.metadata_cache: MemoryCache[PageMetadata] = (
            metadata_cache if metadata_cache is not None else MemoryCache()
        )
        self.trending_url = trending_url.rstrip("/")
        self.request_timeout_ms = request_timeout_ms

        self._inflight: Dict[str, asyncio.Task] = {}

    @staticmethod
    def trending_cache_key(language: Optional[str], period: Union[str, TrendPeriod]) -> str:
        """趋势列表缓存键: trending:<language|all>:<period>"""
        return MemoryCache.make_key("trending", language or "all", TrendPeriod(period).value)

    @staticmethod
    def metadata_cache_key(url: str, depth: Union[str, ExtractionDepth]) -> str:
        """元数据缓存键: metadata:<url>:<depth>"""
        return MemoryCache.make_key("metadata", url, ExtractionDepth(depth).value)

    def build_trending_url(self, language: Optional[str], period: Union[str, TrendPeriod]) -> str:
        """构造趋势页面地址，语言名做 URL 编码 (c++ → c%2B%2B)"""
        url = self.trending_url
        if language:
            url = f"{url}/{quote(language, safe='')}"
        return f"{url}?since={TrendPeriod(period).value}"

    async def _single_flight(self, key: str, factory: Callable[[], Awaitable[T]]) -> T:
        """相同键的并发调用共享同一个抓取任务"""
        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(factory())
            self._inflight[key] = task
            task.add_done_callback(lambda _: self._inflight.pop(key, None))
        else:
            logger.debug(f"Joined in-flight fetch: {key}")
        return await asyncio.shield(task)

    async def fetch_trending(
        self,
        language: Optional[str] = None,
        period: Union[str, TrendPeriod] = TrendPeriod.DAILY,
    ) -> List[Repository]:
        """
        获取趋势仓库列表

        缓存命中时不发起任何网络请求。

        Args:
            language: 编程语言 (None 表示全部)
            period: 时间周期 daily / weekly / monthly

        Returns:
            Repository 列表 (按页面顺序)

        Raises:
            FetchError: 网络请求失败
        """
        period = TrendPeriod(period)
        key = self.trending_cache_key(language, period)

        cached = self.repo_cache.get(key)
        if cached is not None:
            logger.info(f"[Trending] Cache hit: {key}")
            return cached

        async def load() -> List[Repository]:
            url = self.build_trending_url(language, period)
            try:
                html = await self.fetcher.fetch_text(url, timeout_ms=self.request_timeout_ms)
            except httpx.HTTPError as e:
                raise FetchError(TRENDING_FAILURE, _describe(e), url=url) from e

            repositories = parse_trending_html(html)
            self.repo_cache.set(key, repositories, ttl=TRENDING_CACHE_TTL)
            return repositories

        return await self._single_flight(key, load)

    async def get_trending(
        self,
        language: Optional[str] = None,
        period: Union[str, TrendPeriod] = TrendPeriod.DAILY,
        limit: int = 25,
        topics: Optional[Union[str, Iterable[str]]] = None,
        match: TopicMatch = TopicMatch.TOPICS,
    ) -> List[Repository]:
        """
        获取趋势仓库并按话题过滤、截断

        Args:
            language: 编程语言
            period: 时间周期
            limit: 最大返回数量
            topics: 话题关键词 (列表或逗号分隔字符串)
            match: 话题匹配策略

        Returns:
            过滤后的 Repository 列表
        """
        repositories = await self.fetch_trending(language=language, period=period)
        options = build_filter_options(limit, topics=topics, match=match)
        return filter_repositories(repositories, options)

    async def fetch_metadata(
        self,
        url: str,
        depth: Union[str, ExtractionDepth] = ExtractionDepth.NORMAL,
        include_images: bool = True,
        timeout_ms: int = DEFAULT_METADATA_TIMEOUT_MS,
    ) -> PageMetadata:
        """
        获取网页元数据

        缓存键不含 include_images，同一 url/depth 的第一次结果会被复用。

        Args:
            url: 页面地址
            depth: 提取深度
            include_images: 是否提取图片
            timeout_ms: 请求超时 (毫秒)

        Returns:
            PageMetadata

        Raises:
            FetchError: 网络请求失败
        """
        depth = ExtractionDepth(depth)
        key = self.metadata_cache_key(url, depth)

        cached = self.metadata_cache.get(key)
        if cached is not None:
            logger.info(f"[Metadata] Cache hit: {key}")
            return cached

        async def load() -> PageMetadata:
            try:
                html = await self.fetcher.fetch_text(url, timeout_ms=timeout_ms)
            except httpx.HTTPError as e:
                raise FetchError(CONTENT_FAILURE, _describe(e), url=url) from e

            metadata = parse_page_metadata(url, html, depth=depth, include_images=include_images)
            self.metadata_cache.set(key, metadata)
            return metadata

        return await self._single_flight(key, load)

    def clear_cache(self) -> None:
        """清空两个缓存"""
        self.repo_cache.clear()
        self.metadata_cache.clear()
        logger.debug("Caches cleared")

    async def close(self) -> None:
        """释放抓取器资源"""
        await self.fetcher.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


def create_trend_service(settings: Settings, use_cache: bool = True) -> TrendService:
    """
    根据配置创建 TrendService

    Args:
        settings: 全局配置
        use_cache: 为 False 时两个缓存均禁用 (--no-cache)

    Returns:
        TrendService
    """
    cache_enabled = settings.cache.enabled and use_cache
    fetcher = PageFetcher(
        user_agent=settings.general.user_agent,
        timeout_ms=settings.general.request_timeout_ms,
    )
    return TrendService(
        fetcher=fetcher,
        repo_cache=MemoryCache(
            enabled=cache_enabled,
            max_size=settings.cache.max_size,
            ttl=settings.cache.ttl,
        ),
        metadata_cache=MemoryCache(
            enabled=cache_enabled,
            max_size=settings.cache.max_size,
            ttl=settings.cache.ttl,
        ),
        trending_url=settings.github.trending_url,
        request_timeout_ms=settings.general.request_timeout_ms,
    )
