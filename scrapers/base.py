"""
Page Fetcher
HTTP 抓取层 - 所有网络请求的唯一出口
"""
from typing import Dict, Optional
import logging

import httpx


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 30000
DEFAULT_USER_AGENT = "gh-explorer/0.1.0"
HTML_ACCEPT = "text/html,application/xhtml+xml,application/xml"


class PageFetcher:
    """
    页面抓取器

    持有一个 httpx.AsyncClient，声明 User-Agent，按需设置超时。
    非 2xx 响应与传输错误以 httpx 异常原样抛出，由上层统一包装。
    """

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        初始化抓取器

        Args:
            user_agent: 请求头中的 User-Agent
            timeout_ms: 默认超时时间 (毫秒)
            transport: 自定义传输层 (测试时可注入 httpx.MockTransport)
        """
        self.user_agent = user_agent
        self.timeout_ms = timeout_ms
        self._transport = transport
        self._session: Optional[httpx.AsyncClient] = None

    def _get_session(self) -> httpx.AsyncClient:
        """获取或创建 HTTP 会话"""
        if self._session is None or self._session.is_closed:
            self._session = httpx.AsyncClient(
                headers={"User-Agent": self.user_agent, "Accept": HTML_ACCEPT},
                timeout=httpx.Timeout(self.timeout_ms / 1000),
                follow_redirects=True,
                transport=self._transport,
            )
        return self._session

    async def fetch_text(
        self,
        url: str,
        timeout_ms: Optional[int] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> str:
        """
        GET 请求并返回响应文本

        Args:
            url: 请求地址
            timeout_ms: 本次请求超时 (毫秒)，默认使用构造时的值
            headers: 额外请求头

        Returns:
            响应正文

        Raises:
            httpx.HTTPStatusError: 非 2xx 响应
            httpx.HTTPError: 超时、DNS、连接等传输错误
        """
        session = self._get_session()
        timeout = httpx.Timeout((timeout_ms or self.timeout_ms) / 1000)

        logger.debug(f"GET {url}")
        response = await session.get(url, headers=headers, timeout=timeout)
        response.raise_for_status()
        return response.text

    async def __aenter__(self):
        """异步上下文管理器入口"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """异步上下文管理器出口"""
        await self.close()

    async def close(self):
        """清理资源"""
        if self._session:
            await self._session.aclose()
            self._session = None
