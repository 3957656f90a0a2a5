"""
Data Models / Schemas
定义统一的数据结构
"""
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class TrendPeriod(str, Enum):
    """趋势时间周期"""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class ExtractionDepth(str, Enum):
    """页面元数据提取深度"""
    BASIC = "basic"
    NORMAL = "normal"
    DEEP = "deep"


class SummaryLength(str, Enum):
    """AI 摘要长度档位"""
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class OutputFormat(str, Enum):
    """输出格式"""
    JSON = "json"
    TABLE = "table"
    MARKDOWN = "markdown"


class TopicMatch(str, Enum):
    """话题过滤匹配策略"""
    TOPICS = "topics"  # 与仓库自身的 topics 列表精确匹配 (忽略大小写)
    TEXT = "text"      # 在 名称 + 描述 + 语言 中做子串匹配 (忽略大小写)


class Repository(BaseModel):
    """GitHub 趋势仓库模型"""
    rank: int = Field(..., description="在原始列表中的排名 (从1开始)")
    owner: str = Field(..., description="所有者")
    name: str = Field(..., description="仓库名称")
    url: str = Field(..., description="仓库链接")
    description: str = Field(default="", description="描述")
    language: str = Field(default="", description="主要语言 (空串表示未指定)")
    language_color: Optional[str] = Field(None, description="语言颜色")
    star_count: int = Field(default=0, ge=0, description="Star数")
    fork_count: int = Field(default=0, ge=0, description="Fork数")
    stars_gained: int = Field(default=0, ge=0, description="本周期新增Star数")
    avatar_url: Optional[str] = Field(None, description="所有者头像")
    topics: Optional[List[str]] = Field(None, description="话题标签 (仅用于过滤)")

    # AI 增强字段
    summary: Optional[str] = Field(None, description="AI 摘要")
    key_features: Optional[List[str]] = Field(None, description="AI 提炼的主要特点")
    use_cases: Optional[List[str]] = Field(None, description="AI 提炼的使用场景")

    @property
    def full_name(self) -> str:
        """完整名称 (owner/repo)"""
        return f"{self.owner}/{self.name}"


class PageMetadata(BaseModel):
    """网页元数据模型"""
    url: str = Field(..., description="页面链接")
    title: str = Field(default="", description="标题")
    description: str = Field(default="", description="描述")
    image: Optional[str] = Field(None, description="主图")
    icon: Optional[str] = Field(None, description="网站图标 (绝对地址)")
    author: Optional[str] = Field(None, description="作者")
    publisher: Optional[str] = Field(None, description="发布方")
    document_type: Optional[str] = Field(None, description="文档类型 (og:type)")
    language: Optional[str] = Field(None, description="页面语言")
    keywords: Optional[List[str]] = Field(None, description="关键词")
    tags: Optional[List[str]] = Field(None, description="标签 (仅 deep)")
    published_at: Optional[datetime] = Field(None, description="发布时间")
    modified_at: Optional[datetime] = Field(None, description="修改时间")
    content_preview: Optional[str] = Field(None, description="正文预览 (仅 deep, 最多5000字符)")

    # AI 增强字段
    summary: Optional[str] = Field(None, description="AI 摘要")
    key_points: Optional[List[str]] = Field(None, description="关键点")
    category: Optional[List[str]] = Field(None, description="内容分类")
    reading_time_minutes: Optional[int] = Field(None, ge=0, description="预计阅读时间 (分钟)")


class FilterOptions(BaseModel):
    """过滤选项"""
    limit: int = Field(..., description="最大返回数量")
    topics: List[str] = Field(default_factory=list, description="话题关键词")
    match: TopicMatch = Field(default=TopicMatch.TOPICS, description="话题匹配策略")
