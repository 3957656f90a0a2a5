"""
GitHub Trending Extractor
解析 GitHub 趋势页面 HTML，生成 Repository 列表
"""
from typing import List, Optional
import logging
import re

from bs4 import BeautifulSoup, Tag

from models import Repository
from processing.normalize import collapse_whitespace, parse_count


logger = logging.getLogger(__name__)

GITHUB_BASE_URL = "https://github.com"

# 本周期新增 Star 文本的尾部说明
_PERIOD_SUFFIX = re.compile(r"\s*stars?\s+(today|this\s+week|this\s+month)\s*$", re.IGNORECASE)
_COLOR_PREFIX = re.compile(r"^\s*(background-color|color)\s*:\s*", re.IGNORECASE)


def _text(node: Optional[Tag]) -> str:
    if node is None:
        return ""
    return collapse_whitespace(node.get_text(" "))


def _attr(node: Optional[Tag], name: str) -> Optional[str]:
    if node is None:
        return None
    value = node.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    return value or None


def _parse_language_color(style: Optional[str]) -> Optional[str]:
    if not style:
        return None
    color = _COLOR_PREFIX.sub("", style).strip().rstrip(";").strip()
    return color or None


def _split_repo_path(href: str) -> List[str]:
    path = href.split("?", 1)[0].split("#", 1)[0]
    if path.startswith(GITHUB_BASE_URL):
        path = path[len(GITHUB_BASE_URL):]
    parts = path[1:].split("/") if path.startswith("/") else path.split("/")
    return [part.strip() for part in parts]


def _parse_entry(element: Tag, rank: int) -> Optional[Repository]:
    title_link = element.select_one("h2.h3 a") or element.select_one("h2 a")
    href = _attr(title_link, "href")
    if not href:
        return None

    parts = _split_repo_path(href)
    owner = parts[0] if parts else ""
    name = parts[1] if len(parts) > 1 else ""
    if not owner or not name:
        return None

    stars_text = _text(element.select_one('a[href$="/stargazers"]'))
    forks_text = _text(element.select_one('a[href$="/forks"]'))
    gained_text = _PERIOD_SUFFIX.sub("", _text(element.select_one(".d-inline-block.float-sm-right")))

    return Repository(
        rank=rank,
        owner=owner,
        name=name,
        url=f"{GITHUB_BASE_URL}/{owner}/{name}",
        description=_text(element.find("p")),
        language=_text(element.select_one('[itemprop="programmingLanguage"]')),
        language_color=_parse_language_color(_attr(element.select_one(".repo-language-color"), "style")),
        star_count=parse_count(stars_text),
        fork_count=parse_count(forks_text),
        stars_gained=parse_count(gained_text),
        avatar_url=_attr(element.select_one("img.avatar"), "src"),
    )


def parse_trending_html(html: str) -> List[Repository]:
    """
    解析趋势页面

    rank 取自条目在所有 article.Box-row 中的原始位置，
    无效条目被丢弃后排名可能出现空缺。

    Args:
        html: 趋势页面 HTML

    Returns:
        按文档顺序排列的有效仓库列表
    """
    soup = BeautifulSoup(html or "", "lxml")
    repositories: List[Repository] = []

    entries = soup.select("article.Box-row")
    for index, element in enumerate(entries, start=1):
        repo = _parse_entry(element, rank=index)
        if repo is None:
            logger.debug(f"Skipped trending entry #{index}: missing owner/name")
            continue
        repositories.append(repo)

    logger.info(f"[Trending] Parsed {len(repositories)} of {len(entries)} entries")
    return repositories
