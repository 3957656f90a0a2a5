"""
Config Manager
用户配置文件 (~/.gh-explorer/config.json) 的加载、合并与修改
"""
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import json
import logging
import re

from pydantic import ValidationError

from utils.exceptions import ConfigurationError, InvalidInputError

from .settings import Settings


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".gh-explorer"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.json"

_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_NUMBER = re.compile(r"^-?\d+(\.\d+)?$")


def _to_snake(name: str) -> str:
    """apiKey -> api_key, baseURL -> base_url"""
    return _CAMEL_BOUNDARY.sub(r"\1_\2", name).lower()


def _normalize_keys(data: Any) -> Any:
    if isinstance(data, dict):
        return {_to_snake(str(k)): _normalize_keys(v) for k, v in data.items()}
    return data


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _coerce_value(raw: str) -> Union[str, bool, int, float]:
    text = raw.strip()
    if text.lower() == "true":
        return True
    if text.lower() == "false":
        return False
    if _NUMBER.match(text):
        return float(text) if "." in text else int(text)
    return raw


def mask_secret(value: Optional[str]) -> Optional[str]:
    """只保留前4位"""
    if not value:
        return value
    return value[:4] + "..."


class ConfigManager:
    """
    配置管理器

    默认值来自环境变量 / .env (pydantic-settings)，
    用户配置文件中的值按层级深度合并覆盖默认值。
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    def _read_file(self) -> Dict[str, Any]:
        if not self.config_path.exists():
            return {}
        try:
            data = json.loads(self.config_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load config file {self.config_path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.error(f"Config file {self.config_path} must contain a JSON object")
            return {}
        return _normalize_keys(data)

    @staticmethod
    def _defaults() -> Dict[str, Any]:
        return Settings().model_dump(mode="json")

    def load(self) -> Settings:
        """
        加载配置

        Returns:
            合并后的 Settings；配置文件无效时退回默认值
        """
        dotenv_path = Path.cwd() / ".env"
        if dotenv_path.exists():
            from dotenv import load_dotenv
            load_dotenv(dotenv_path)

        merged = _deep_merge(self._defaults(), self._read_file())
        try:
            return Settings.model_validate(merged)
        except ValidationError as e:
            logger.error(f"Invalid config file {self.config_path}, using defaults: {e}")
            return Settings()

    def _split_key(self, key: str) -> List[str]:
        parts = [_to_snake(part) for part in key.split(".") if part]
        node: Any = self._defaults()
        for part in parts:
            if not isinstance(node, dict) or part not in node:
                raise InvalidInputError("config key", key, allowed=self.available_keys())
            node = node[part]
        if isinstance(node, dict):
            raise InvalidInputError("config key", key, allowed=self.available_keys())
        return parts

    def available_keys(self) -> List[str]:
        """所有可设置的配置键 (点号分隔)"""
        keys = []
        for section, values in self._defaults().items():
            for name in values:
                keys.append(f"{section}.{name}")
        return keys

    def get_value(self, key: str, settings: Optional[Settings] = None) -> Any:
        """
        读取单个配置值

        Args:
            key: 点号分隔的键，如 ai.api_key / ai.apiKey
            settings: 已加载的配置 (不传则重新加载)

        Returns:
            配置值；键不存在时返回 None
        """
        settings = settings or self.load()
        node: Any = settings.model_dump(mode="json")
        for part in (_to_snake(p) for p in key.split(".") if p):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node

    def set_value(self, key: str, raw_value: str) -> Any:
        """
        修改配置并写回文件

        "true"/"false" 转为布尔值，数字字符串转为数字。

        Args:
            key: 点号分隔的键
            raw_value: 原始字符串值

        Returns:
            实际写入的值

        Raises:
            InvalidInputError: 键不存在
            ConfigurationError: 值校验失败或文件无法写入
        """
        parts = self._split_key(key)
        value = _coerce_value(raw_value)

        data = self._read_file()
        node = data
        for part in parts[:-1]:
            if not isinstance(node.get(part), dict):
                node[part] = {}
            node = node[part]
        node[parts[-1]] = value

        try:
            Settings.model_validate(_deep_merge(self._defaults(), data))
        except ValidationError as e:
            raise ConfigurationError(f"Invalid value for {key}: {raw_value!r}", {"errors": e.error_count()}) from e

        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            self.config_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
            self.config_path.chmod(0o600)
        except OSError as e:
            raise ConfigurationError(f"Failed to write config file: {e}", {"path": str(self.config_path)}) from e

        logger.info(f"Config updated: {'.'.join(parts)}")
        return value

    def masked(self, settings: Optional[Settings] = None) -> Dict[str, Any]:
        """返回隐藏了 API Key 的完整配置"""
        settings = settings or self.load()
        dump = settings.model_dump(mode="json")
        dump["ai"]["api_key"] = mask_secret(dump["ai"].get("api_key"))
        return dump
