"""
Settings Configuration
使用 Pydantic 进行配置验证和管理
"""
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings

from models import OutputFormat, SummaryLength, TopicMatch, TrendPeriod


APP_NAME = "gh-explorer"
APP_VERSION = "0.1.0"


class GitHubSettings(BaseSettings):
    """GitHub Trending 配置"""
    trending_url: str = Field(default="https://github.com/trending", description="趋势页面地址")
    default_language: Optional[str] = Field(default=None, description="默认编程语言")
    default_period: TrendPeriod = Field(default=TrendPeriod.DAILY, description="默认时间周期")
    default_limit: int = Field(default=25, ge=1, le=100, description="默认返回数量")
    topic_match: TopicMatch = Field(default=TopicMatch.TEXT, description="话题过滤策略: text, topics")

    class Config:
        env_prefix = "GH_EXPLORER_GITHUB_"
        extra = "ignore"


class OutputSettings(BaseSettings):
    """输出配置"""
    default_format: OutputFormat = Field(default=OutputFormat.TABLE, description="默认输出格式")
    color_enabled: bool = Field(default=True, description="是否启用终端颜色")

    class Config:
        env_prefix = "GH_EXPLORER_OUTPUT_"
        extra = "ignore"


class AISettings(BaseSettings):
    """AI 增强配置"""
    enabled: bool = Field(default=False, description="是否启用 AI 增强")
    provider: str = Field(default="openai", description="LLM提供商: openai, anthropic")
    api_key: Optional[str] = Field(default=None, description="LLM API Key")
    base_url: Optional[str] = Field(default=None, description="OpenAI 兼容接口地址 (可选)")
    default_model: str = Field(default="gpt-4o-mini", description="模型名称")
    summary_length: SummaryLength = Field(default=SummaryLength.MEDIUM, description="摘要长度")
    temperature: float = Field(default=0.3, description="生成温度")
    max_tokens: int = Field(default=1024, description="最大生成token数")
    timeout: float = Field(default=60.0, description="请求超时时间(秒)")

    class Config:
        env_prefix = "GH_EXPLORER_AI_"
        extra = "ignore"


class CacheSettings(BaseSettings):
    """缓存配置"""
    enabled: bool = Field(default=True, description="是否启用缓存")
    ttl: int = Field(default=3600, ge=0, description="缓存过期时间(秒)")
    max_size: int = Field(default=100, ge=1, description="最大缓存条目数")

    class Config:
        env_prefix = "GH_EXPLORER_CACHE_"
        extra = "ignore"


class GeneralSettings(BaseSettings):
    """通用设置"""
    request_timeout_ms: int = Field(default=30000, ge=1, description="请求超时时间(毫秒)")
    user_agent: str = Field(default=f"{APP_NAME}/{APP_VERSION}", description="User Agent")
    log_level: str = Field(default="WARNING", description="日志级别")

    class Config:
        env_prefix = "GH_EXPLORER_"
        extra = "ignore"


class Settings(BaseSettings):
    """主配置类 - 聚合所有子配置"""

    github: GitHubSettings = Field(default_factory=GitHubSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)
    ai: AISettings = Field(default_factory=AISettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    general: GeneralSettings = Field(default_factory=GeneralSettings)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"
