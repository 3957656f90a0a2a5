"""
Repository Filter
抓取后的话题过滤与数量截断
"""
from typing import Iterable, List, Optional, Sequence
import logging

from models import FilterOptions, Repository, TopicMatch


logger = logging.getLogger(__name__)


def _matches_topic_list(repo: Repository, keywords: Sequence[str]) -> bool:
    if not repo.topics:
        return False
    repo_topics = {topic.lower() for topic in repo.topics}
    return any(keyword in repo_topics for keyword in keywords)


def _matches_text(repo: Repository, keywords: Sequence[str]) -> bool:
    haystack = f"{repo.name} {repo.description} {repo.language}".lower()
    return any(keyword in haystack for keyword in keywords)


def filter_repositories(
    repositories: Iterable[Repository],
    options: FilterOptions,
) -> List[Repository]:
    """
    按话题关键词过滤仓库并截断数量

    保持原有相对顺序；limit 不做范围校验 (由调用方在边界处完成)。

    Args:
        repositories: 仓库列表
        options: 过滤选项 (limit, topics, match)

    Returns:
        过滤后的仓库列表
    """
    filtered = list(repositories)

    keywords = [topic.strip().lower() for topic in options.topics if topic and topic.strip()]
    if keywords:
        matcher = _matches_text if options.match == TopicMatch.TEXT else _matches_topic_list
        filtered = [repo for repo in filtered if matcher(repo, keywords)]
        logger.debug(f"Topic filter {keywords} ({options.match.value}) kept {len(filtered)} repositories")

    return filtered[:max(0, options.limit)]


def build_filter_options(
    limit: int,
    topics: Optional[Iterable[str]] = None,
    match: TopicMatch = TopicMatch.TOPICS,
) -> FilterOptions:
    """根据命令行风格参数构造 FilterOptions (topics 可为逗号分隔的字符串)"""
    if isinstance(topics, str):
        topics = topics.split(",")
    return FilterOptions(
        limit=limit,
        topics=[t.strip() for t in (topics or []) if t and t.strip()],
        match=match,
    )
