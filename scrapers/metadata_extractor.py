"""
Page Metadata Extractor
解析任意网页的标准元数据 (title / meta / Open Graph)，deep 模式下提取正文
"""
from datetime import datetime
from typing import List, Optional, Union
from urllib.parse import urljoin
import logging

from bs4 import BeautifulSoup, Tag

from models import ExtractionDepth, PageMetadata
from processing.normalize import collapse_whitespace


logger = logging.getLogger(__name__)

MAX_CONTENT_PREVIEW = 5000
MIN_FALLBACK_PARAGRAPH = 40

CONTENT_CONTAINER_SELECTOR = "article, main, .content, #content, .article"
CONTENT_ELEMENT_SELECTOR = "p, h1, h2, h3, h4, h5, h6"
TAG_SELECTOR = 'a[rel~="tag"], .tags a, .categories a, .topics a'


def _meta(soup: BeautifulSoup, *, name: str = None, prop: str = None) -> Optional[str]:
    if name:
        node = soup.find("meta", attrs={"name": name})
    else:
        node = soup.find("meta", attrs={"property": prop})
    if node is None:
        return None
    content = (node.get("content") or "").strip()
    return content or None


def _first_meta(soup: BeautifulSoup, *candidates: dict) -> Optional[str]:
    for candidate in candidates:
        value = _meta(soup, **candidate)
        if value:
            return value
    return None


def parse_timestamp(raw: Optional[str]) -> Optional[datetime]:
    """
    解析 ISO-8601 时间字符串

    无法解析时返回 None (字段保持缺省)，不引入无效日期。
    """
    if not raw:
        return None
    try:
        return datetime.fromisoformat(raw.strip().replace("Z", "+00:00"))
    except ValueError:
        logger.debug(f"Unparsable timestamp: {raw!r}")
        return None


def _resolve_icon(soup: BeautifulSoup, page_url: str) -> Optional[str]:
    link = soup.select_one('link[rel="icon"]') or soup.select_one('link[rel="shortcut icon"]')
    href = (link.get("href") or "").strip() if link is not None else ""
    if not href:
        return None
    if href.startswith("http"):
        return href
    return urljoin(page_url, href)


def _extract_content_preview(soup: BeautifulSoup) -> str:
    fragments: List[str] = []

    containers = soup.select(CONTENT_CONTAINER_SELECTOR)
    if containers:
        container_ids = {id(node) for node in containers}
        for element in soup.select(CONTENT_ELEMENT_SELECTOR):
            if not any(id(parent) in container_ids for parent in element.parents):
                continue
            text = collapse_whitespace(element.get_text(" "))
            if text:
                fragments.append(text)
    else:
        for element in soup.find_all("p"):
            text = collapse_whitespace(element.get_text(" "))
            if len(text) > MIN_FALLBACK_PARAGRAPH:
                fragments.append(text)

    return " ".join(fragments)[:MAX_CONTENT_PREVIEW]


def _extract_tags(soup: BeautifulSoup) -> List[str]:
    tags = []
    for element in soup.select(TAG_SELECTOR):
        text = collapse_whitespace(element.get_text(" "))
        if text:
            tags.append(text)
    return tags


def parse_page_metadata(
    url: str,
    html: str,
    depth: Union[str, ExtractionDepth] = ExtractionDepth.NORMAL,
    include_images: bool = True,
) -> PageMetadata:
    """
    解析网页元数据

    对任意 HTML 都不会抛出异常，缺失字段使用默认值。

    Args:
        url: 页面原始地址 (用于补全相对图标地址)
        html: 页面 HTML
        depth: 提取深度 basic / normal / deep
        include_images: 是否提取图片和图标

    Returns:
        PageMetadata
    """
    depth = ExtractionDepth(depth)
    soup = BeautifulSoup(html or "", "lxml")

    title_node = soup.find("title")
    html_node = soup.find("html")

    metadata = PageMetadata(
        url=url,
        title=collapse_whitespace(title_node.get_text()) if isinstance(title_node, Tag) else "",
        description=_first_meta(soup, {"name": "description"}, {"prop": "og:description"}) or "",
        author=_first_meta(soup, {"name": "author"}, {"prop": "article:author"}),
        publisher=_meta(soup, prop="og:site_name"),
        document_type=_meta(soup, prop="og:type"),
        language=(html_node.get("lang") or None) if isinstance(html_node, Tag) else None,
        published_at=parse_timestamp(_meta(soup, prop="article:published_time")),
        modified_at=parse_timestamp(_meta(soup, prop="article:modified_time")),
    )

    if include_images:
        metadata.image = _first_meta(soup, {"prop": "og:image"}, {"name": "twitter:image"})
        metadata.icon = _resolve_icon(soup, url)

    keywords = _meta(soup, name="keywords")
    if keywords:
        metadata.keywords = [k.strip() for k in keywords.split(",") if k.strip()]

    if depth == ExtractionDepth.DEEP:
        metadata.content_preview = _extract_content_preview(soup)
        tags = _extract_tags(soup)
        if tags:
            metadata.tags = tags

    return metadata
