"""
Output Writer
渲染结果写入文件
"""
from pathlib import Path
from typing import Union
import logging

from models import OutputFormat
from utils.exceptions import OutputError


logger = logging.getLogger(__name__)

_EXTENSIONS = {
    OutputFormat.JSON: ".json",
    OutputFormat.MARKDOWN: ".md",
    OutputFormat.TABLE: ".txt",
}


def extension_for(fmt: Union[str, OutputFormat]) -> str:
    """根据输出格式获取默认扩展名"""
    try:
        return _EXTENSIONS[OutputFormat(fmt)]
    except ValueError:
        return ".txt"


def save_to_file(content: str, file_path: Union[str, Path], fmt: Union[str, OutputFormat]) -> Path:
    """
    保存内容到文件

    未指定扩展名时按格式补全；父目录不存在时自动创建。

    Args:
        content: 文件内容
        file_path: 文件路径
        fmt: 输出格式

    Returns:
        实际写入的路径

    Raises:
        OutputError: 写入失败
    """
    path = Path(file_path).expanduser()
    if not path.suffix:
        path = path.with_name(path.name + extension_for(fmt))

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise OutputError(f"Failed to save file: {e}", {"path": str(path)}) from e

    logger.info(f"Saved output to {path}")
    return path
