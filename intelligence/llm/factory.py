"""
LLM Factory
工厂函数 - 根据 AI 配置创建 LLM 实例
"""
import logging

from config import AISettings
from utils.exceptions import ConfigurationError
from .base import BaseLLM
from .openai_llm import OpenAILLM
from .anthropic_llm import AnthropicLLM


logger = logging.getLogger(__name__)


SUPPORTED_PROVIDERS = ("openai", "anthropic")

# 默认模型配置
DEFAULT_MODELS = {
    "openai": "gpt-4o-mini",
    "anthropic": "claude-3-5-haiku-latest",
}


def get_llm(ai_settings: AISettings) -> BaseLLM:
    """
    获取 LLM 实例

    Args:
        ai_settings: AI 配置 (provider, api_key, default_model 等)

    Returns:
        BaseLLM 实例

    Raises:
        ConfigurationError: 不支持的供应商

    Example:
        llm = get_llm(ConfigManager().load().ai)
        text = await llm.achat("hello")
    """
    provider = (ai_settings.provider or "openai").lower()

    # 未改动默认模型时使用该供应商的默认模型
    model = ai_settings.default_model
    if provider != "openai" and model == DEFAULT_MODELS["openai"]:
        model = DEFAULT_MODELS.get(provider, model)

    common = {
        "model": model,
        "api_key": ai_settings.api_key,
        "temperature": ai_settings.temperature,
        "max_tokens": ai_settings.max_tokens,
        "timeout": ai_settings.timeout,
    }

    if provider == "openai":
        llm = OpenAILLM(base_url=ai_settings.base_url, **common)
    elif provider == "anthropic":
        llm = AnthropicLLM(**common)
    else:
        raise ConfigurationError(
            f"Unsupported LLM provider: {provider}",
            {"supported": list(SUPPORTED_PROVIDERS)},
        )

    logger.debug(f"Created {llm!r}")
    return llm
