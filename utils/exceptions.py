"""
Custom Exceptions
自定义异常类
"""
from typing import Iterable, Optional


class GhExplorerError(Exception):
    """gh-explorer 基础异常类"""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(GhExplorerError):
    """配置错误 (AI 未启用、缺少密钥、配置文件无法读写等)"""
    pass


class InvalidInputError(GhExplorerError):
    """调用方输入非法 (在边界处校验)"""

    def __init__(self, field: str, value, allowed: Optional[Iterable] = None, message: str = None):
        self.field = field
        self.value = value
        self.allowed = list(allowed) if allowed is not None else []
        if message is None:
            message = f"Invalid {field}: {value!r}"
            if self.allowed:
                message += f" (allowed: {', '.join(str(a) for a in self.allowed)})"
        super().__init__(message)


class FetchError(GhExplorerError):
    """网络抓取错误 (非 2xx、超时、DNS 等)"""

    def __init__(self, operation: str, cause: str, url: str = None):
        self.operation = operation
        self.cause = cause
        self.url = url
        super().__init__(f"{operation}: {cause}")


class LLMError(GhExplorerError):
    """LLM 调用错误"""

    def __init__(self, message: str, provider: str = None, **kwargs):
        super().__init__(message, kwargs)
        self.provider = provider


class OutputError(GhExplorerError):
    """输出文件保存错误"""
    pass
