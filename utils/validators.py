"""
Input Validators
边界参数校验 - 在进入核心逻辑之前拒绝非法输入
"""
from enum import Enum
from typing import Type, TypeVar, Union
from urllib.parse import urlparse

from models import ExtractionDepth, OutputFormat, SummaryLength, TrendPeriod

from .exceptions import InvalidInputError


E = TypeVar("E", bound=Enum)

MIN_LIMIT = 1
MAX_LIMIT = 100


def _validate_choice(field: str, value: Union[str, E], enum_cls: Type[E]) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        raise InvalidInputError(field, value, allowed=[member.value for member in enum_cls]) from None


def validate_period(value: Union[str, TrendPeriod]) -> TrendPeriod:
    """校验时间周期 (daily / weekly / monthly)"""
    return _validate_choice("period", value, TrendPeriod)


def validate_output_format(value: Union[str, OutputFormat]) -> OutputFormat:
    """校验输出格式 (json / table / markdown)"""
    return _validate_choice("format", value, OutputFormat)


def validate_depth(value: Union[str, ExtractionDepth]) -> ExtractionDepth:
    """校验提取深度 (basic / normal / deep)"""
    return _validate_choice("depth", value, ExtractionDepth)


def validate_summary_length(value: Union[str, SummaryLength]) -> SummaryLength:
    """校验摘要长度 (short / medium / long)"""
    return _validate_choice("summary length", value, SummaryLength)


def validate_limit(value) -> int:
    """
    校验结果数量限制

    Args:
        value: 原始值 (int 或数字字符串)

    Returns:
        1-100 之间的整数

    Raises:
        InvalidInputError: 非数字或超出范围
    """
    try:
        limit = int(str(value).strip())
    except (TypeError, ValueError):
        limit = None
    if limit is None or limit < MIN_LIMIT or limit > MAX_LIMIT:
        raise InvalidInputError(
            "limit",
            value,
            message=f"Invalid limit: {value!r} (allowed: a number between {MIN_LIMIT} and {MAX_LIMIT})",
        )
    return limit


def validate_url(value: str) -> str:
    """校验 URL，仅接受带主机名的 http / https 地址"""
    text = str(value or "").strip()
    try:
        parsed = urlparse(text)
    except ValueError as e:
        raise InvalidInputError("url", value, message=f"Invalid URL: {value!r} ({e})") from e
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidInputError("url", value, message=f"Invalid URL: {value!r} (allowed schemes: http, https)")
    return text
