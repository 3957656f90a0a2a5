"""
Text / Number Normalizer
抓取文本的数值归一化
"""
import re
from typing import Optional


# 第一个数字片段: 可带千分位逗号和小数部分
_NUMBER_PATTERN = re.compile(r"\d[\d,]*(?:\.\d+)?")
# 末尾的小写 k 表示千, 如 "1.2k"
_THOUSANDS_SUFFIX = re.compile(r"\d\s*k\s*$")
_WHITESPACE = re.compile(r"\s+")


def parse_count(text: Optional[str]) -> int:
    """
    将抓取到的计数文本转换为整数

    对任意字符串输入都不会抛出异常。

    Examples:
        >>> parse_count("1,234")
        1234
        >>> parse_count("1.2k")
        1200
        >>> parse_count("abc")
        0

    Args:
        text: 原始文本，如 "1.2k"、"1,234"、"300"

    Returns:
        解析出的非负整数，无法解析时返回 0
    """
    if not text or not text.strip():
        return 0

    match = _NUMBER_PATTERN.search(text)
    if match is None:
        return 0

    number = float(match.group(0).replace(",", ""))

    if _THOUSANDS_SUFFIX.search(text):
        return int(round(number * 1000))

    return int(number)


def collapse_whitespace(text: Optional[str]) -> str:
    """合并连续空白并去除首尾空白"""
    return _WHITESPACE.sub(" ", text or "").strip()
