"""
Intelligence Module
智能层 - LLM 抽象 + AI 增强
"""
from .llm import (
    BaseLLM,
    OpenAILLM,
    AnthropicLLM,
    get_llm,
)
from .enricher import (
    AIEnricher,
    ParseResult,
    SYSTEM_PROMPT,
    build_metadata_prompt,
    build_repository_prompt,
    create_enricher,
    normalize_fields,
    parse_ai_response,
)

__all__ = [
    # LLM
    "BaseLLM",
    "OpenAILLM",
    "AnthropicLLM",
    "get_llm",
    # Enricher
    "AIEnricher",
    "ParseResult",
    "SYSTEM_PROMPT",
    "build_metadata_prompt",
    "build_repository_prompt",
    "create_enricher",
    "normalize_fields",
    "parse_ai_response",
]
