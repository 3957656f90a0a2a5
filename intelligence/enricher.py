"""
AI Enricher
AI 增强层 - 为仓库与网页元数据生成摘要、特点、分类等字段
"""
import asyncio
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union
import json
import logging
import re

from pydantic import ValidationError

from config import Settings
from models import PageMetadata, Repository, SummaryLength
from utils.exceptions import ConfigurationError, LLMError
from .llm import BaseLLM, get_llm


logger = logging.getLogger(__name__)

GenerateText = Callable[[str, str], Awaitable[str]]

SYSTEM_PROMPT = (
    "You are an expert technical analyst. Provide concise, objective, and accurate "
    "analysis following the requested format exactly."
)

LENGTH_HINTS = {
    SummaryLength.SHORT: "within 50 words",
    SummaryLength.MEDIUM: "within 100 words",
    SummaryLength.LONG: "within 200 words",
}

PROMPT_PREVIEW_CHARS = 1000

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)

# 模型输出键 → 记录字段 (驼峰与下划线写法均接受)
REPOSITORY_FIELDS = {
    "summary": "summary",
    "aiSummary": "summary",
    "ai_summary": "summary",
    "keyFeatures": "key_features",
    "key_features": "key_features",
    "useCases": "use_cases",
    "use_cases": "use_cases",
}

METADATA_FIELDS = {
    "summary": "summary",
    "aiSummary": "summary",
    "ai_summary": "summary",
    "keyPoints": "key_points",
    "key_points": "key_points",
    "category": "category",
    "categories": "category",
    "readingTime": "reading_time_minutes",
    "reading_time": "reading_time_minutes",
    "readingTimeMinutes": "reading_time_minutes",
    "reading_time_minutes": "reading_time_minutes",
}

LIST_FIELDS = {"key_features", "use_cases", "key_points", "category"}


@dataclass
class ParseResult:
    """AI 响应解析结果"""
    ok: bool
    data: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None


def _try_object(text: str) -> Optional[Dict[str, Any]]:
    try:
        value = json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return None
    return value if isinstance(value, dict) else None


def _first_brace_object(text: str) -> Optional[Dict[str, Any]]:
    decoder = json.JSONDecoder()
    start = text.find("{")
    while start != -1:
        try:
            value, _ = decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            value = None
        if isinstance(value, dict):
            return value
        start = text.find("{", start + 1)
    return None


def parse_ai_response(text: str) -> ParseResult:
    """
    解析模型输出中的 JSON 对象

    依次尝试：
    1. ```json 或 ``` 代码块
    2. 文本中第一个花括号包围的 JSON 对象
    3. 整段文本

    第一个得到 JSON 对象的层级生效，本函数不抛出异常。

    Args:
        text: 模型原始输出

    Returns:
        ParseResult
    """
    if not text or not text.strip():
        return ParseResult(ok=False, error="empty response")

    match = _FENCED_BLOCK.search(text)
    if match:
        data = _try_object(match.group(1).strip())
        if data is not None:
            return ParseResult(ok=True, data=data)

    data = _first_brace_object(text)
    if data is not None:
        return ParseResult(ok=True, data=data)

    data = _try_object(text.strip())
    if data is not None:
        return ParseResult(ok=True, data=data)

    return ParseResult(ok=False, error="no JSON object found in response")


def _coerce_reading_time(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str):
        found = re.search(r"\d+(?:\.\d+)?", value)
        if found:
            return int(float(found.group()))
    return None


def normalize_fields(data: Dict[str, Any], mapping: Dict[str, str]) -> Dict[str, Any]:
    """
    将模型输出映射为记录字段

    - 未识别的键被忽略
    - 列表字段若为字符串则包装为单元素列表 (如 category)
    - reading_time_minutes 尽量转为整数，失败则丢弃

    Args:
        data: 解析得到的 JSON 对象
        mapping: 输出键到字段名的映射

    Returns:
        可直接合并到记录上的字段字典
    """
    updates: Dict[str, Any] = {}
    for key, value in data.items():
        target = mapping.get(key)
        if target is None or value is None:
            continue

        if target in LIST_FIELDS and isinstance(value, str):
            value = [value]
        elif target == "reading_time_minutes":
            value = _coerce_reading_time(value)
            if value is None:
                continue

        updates[target] = value
    return updates


def build_repository_prompt(repo: Repository, summary_length: SummaryLength) -> str:
    """构造仓库分析提示词"""
    length_hint = LENGTH_HINTS[SummaryLength(summary_length)]
    return (
        "Please analyze the following GitHub repository information and provide a concise analysis:\n"
        f"Repository: {repo.full_name}\n"
        f"Description: {repo.description or 'No description'}\n"
        f"Language: {repo.language or 'Unknown'}\n"
        f"Stars: {repo.star_count}\n"
        f"New stars this period: {repo.stars_gained}\n"
        "\n"
        "Please provide the following in JSON format:\n"
        f"1. summary: Repository summary {length_hint}\n"
        "2. keyFeatures: 3 key features of the project (array)\n"
        "3. useCases: 2-3 potential use cases (array)\n"
    )


def build_metadata_prompt(metadata: PageMetadata, summary_length: SummaryLength) -> str:
    """构造网页元数据分析提示词"""
    length_hint = LENGTH_HINTS[SummaryLength(summary_length)]
    lines = [
        "Please analyze the following webpage metadata and provide a concise analysis:",
        f"URL: {metadata.url}",
        f"Title: {metadata.title or 'No title'}",
        f"Description: {metadata.description or 'No description'}",
    ]
    if metadata.author:
        lines.append(f"Author: {metadata.author}")
    if metadata.document_type:
        lines.append(f"Type: {metadata.document_type}")
    if metadata.content_preview:
        lines.append(f"Content preview: {metadata.content_preview[:PROMPT_PREVIEW_CHARS]}...")

    lines += [
        "",
        "Please provide the following in JSON format:",
        f"1. summary: Content summary {length_hint}",
        "2. keyPoints: 3-5 key points of the content (array)",
        "3. category: Array of content categories (1-5 items)",
        "4. readingTime: Estimated reading time in minutes (number)",
    ]
    return "\n".join(lines) + "\n"


class AIEnricher:
    """
    AI 增强器

    只依赖一个 generate_text(prompt, system_prompt) 协程函数。
    单条记录的任何失败 (模型调用、解析、校验) 都只记录日志，并原样返回该记录。
    """

    def __init__(
        self,
        generate_text: GenerateText,
        summary_length: Union[str, SummaryLength] = SummaryLength.MEDIUM,
        system_prompt: str = SYSTEM_PROMPT,
        llm: Optional[BaseLLM] = None,
    ):
        """
        初始化增强器

        Args:
            generate_text: 文本生成协程函数
            summary_length: 默认摘要长度
            system_prompt: 系统提示词
            llm: 生成函数所属的 LLM 实例 (用于 aclose)
        """
        self.generate_text = generate_text
        self.summary_length = SummaryLength(summary_length)
        self.system_prompt = system_prompt
        self._llm = llm

    async def _enrich_record(self, record, prompt: str, mapping: Dict[str, str], label: str):
        try:
            text = await self.generate_text(prompt, self.system_prompt)
        except LLMError as e:
            logger.warning(f"[AI] Enrichment failed for {label}: {e}")
            return record
        except Exception as e:
            logger.warning(f"[AI] Unexpected generation error for {label}: {e}")
            return record

        result = parse_ai_response(text)
        if not result.ok:
            logger.warning(f"[AI] Could not parse response for {label}: {result.error}")
            return record

        updates = normalize_fields(result.data, mapping)
        if not updates:
            logger.warning(f"[AI] Response for {label} contained no recognized fields")
            return record

        try:
            merged = {**record.model_dump(), **updates}
            return type(record).model_validate(merged)
        except ValidationError as e:
            logger.warning(f"[AI] Enriched {label} failed validation: {e.error_count()} errors")
            return record

    async def enrich_repository(
        self,
        repo: Repository,
        summary_length: Optional[Union[str, SummaryLength]] = None,
    ) -> Repository:
        """
        增强单个仓库

        Args:
            repo: 仓库
            summary_length: 摘要长度 (默认使用构造时的值)

        Returns:
            增强后的仓库；失败时返回原对象
        """
        length = SummaryLength(summary_length or self.summary_length)
        prompt = build_repository_prompt(repo, length)
        return await self._enrich_record(repo, prompt, REPOSITORY_FIELDS, repo.full_name)

    async def enrich_repositories(
        self,
        repositories: List[Repository],
        summary_length: Optional[Union[str, SummaryLength]] = None,
    ) -> List[Repository]:
        """并发增强仓库列表，输出顺序与输入一致"""
        if not repositories:
            return []
        logger.info(f"[AI] Enriching {len(repositories)} repositories")
        return list(await asyncio.gather(
            *(self.enrich_repository(repo, summary_length) for repo in repositories)
        ))

    async def enrich_metadata(
        self,
        metadata: PageMetadata,
        summary_length: Optional[Union[str, SummaryLength]] = None,
    ) -> PageMetadata:
        """增强网页元数据，失败时返回原对象"""
        length = SummaryLength(summary_length or self.summary_length)
        prompt = build_metadata_prompt(metadata, length)
        return await self._enrich_record(metadata, prompt, METADATA_FIELDS, metadata.url)

    async def enrich(
        self,
        target: Union[Repository, PageMetadata, List[Repository]],
        summary_length: Optional[Union[str, SummaryLength]] = None,
    ):
        """
        统一入口

        Args:
            target: Repository、PageMetadata 或 Repository 列表

        Returns:
            与输入同类型的增强结果
        """
        if isinstance(target, Repository):
            return await self.enrich_repository(target, summary_length)
        if isinstance(target, PageMetadata):
            return await self.enrich_metadata(target, summary_length)
        if isinstance(target, list):
            return await self.enrich_repositories(target, summary_length)
        raise TypeError(f"Unsupported enrichment target: {type(target).__name__}")

    async def aclose(self) -> None:
        """释放 LLM 客户端"""
        if self._llm is not None:
            await self._llm.aclose()


def create_enricher(
    settings: Settings,
    summary_length: Optional[Union[str, SummaryLength]] = None,
) -> AIEnricher:
    """
    根据配置创建 AI 增强器

    Args:
        settings: 全局配置
        summary_length: 摘要长度 (默认取 ai.summary_length)

    Returns:
        AIEnricher

    Raises:
        ConfigurationError: AI 未启用或未配置 API Key
    """
    ai = settings.ai
    if not ai.enabled:
        raise ConfigurationError(
            "AI features are not enabled. Run `gh-explorer config set ai.enabled true` to enable."
        )
    if not ai.api_key:
        raise ConfigurationError(
            "AI API key not configured. Run `gh-explorer config set ai.api_key YOUR_API_KEY` to configure."
        )

    llm = get_llm(ai)
    return AIEnricher(
        generate_text=llm.achat,
        summary_length=summary_length or ai.summary_length,
        llm=llm,
    )
