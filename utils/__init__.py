"""
Utils Module
通用工具 - 异常、日志、参数校验
"""
from .exceptions import (
    GhExplorerError,
    ConfigurationError,
    InvalidInputError,
    FetchError,
    LLMError,
    OutputError,
)
from .logger import setup_logger, console
from .validators import (
    validate_period,
    validate_limit,
    validate_output_format,
    validate_depth,
    validate_summary_length,
    validate_url,
)

__all__ = [
    # Exceptions
    "GhExplorerError",
    "ConfigurationError",
    "InvalidInputError",
    "FetchError",
    "LLMError",
    "OutputError",
    # Logging
    "setup_logger",
    "console",
    # Validators
    "validate_period",
    "validate_limit",
    "validate_output_format",
    "validate_depth",
    "validate_summary_length",
    "validate_url",
]
