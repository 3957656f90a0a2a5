"""
Configuration Management Module
统一配置管理 - 环境变量 + 用户配置文件
"""
from .settings import (
    APP_NAME,
    APP_VERSION,
    Settings,
    GitHubSettings,
    OutputSettings,
    AISettings,
    CacheSettings,
    GeneralSettings,
)
from .manager import ConfigManager, DEFAULT_CONFIG_PATH, mask_secret

__all__ = [
    "APP_NAME",
    "APP_VERSION",
    "Settings",
    "GitHubSettings",
    "OutputSettings",
    "AISettings",
    "CacheSettings",
    "GeneralSettings",
    "ConfigManager",
    "DEFAULT_CONFIG_PATH",
    "mask_secret",
]
