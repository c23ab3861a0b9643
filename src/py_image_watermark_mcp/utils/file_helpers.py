"""文件工具模块。

提供目录枚举、照片筛选和残缺输出清理等实用函数。
"""

from collections.abc import Iterable
from pathlib import Path

from ..models.constants import ImageFormats
from .logging_helpers import get_logger
from .message_formatter import MessageFormatter


logger = get_logger()


def list_source_entries(directory: str | Path) -> list[Path]:
    """列出源目录下的全部条目（包括子目录），按名称排序。

    Args:
        directory: 源目录

    Returns:
        list[Path]: 目录项路径列表

    Raises:
        FileNotFoundError: 目录不存在
        NotADirectoryError: 路径不是目录
    """
    directory = Path(directory)

    if not directory.exists():
        raise FileNotFoundError(MessageFormatter.directory_not_found(directory))

    if not directory.is_dir():
        raise NotADirectoryError(MessageFormatter.path_not_directory(directory))

    return sorted(directory.iterdir(), key=lambda p: p.name)


def split_eligible(entries: Iterable[Path]) -> tuple[list[Path], list[Path]]:
    """按扩展名拆分合格照片和跳过的条目

    Returns:
        tuple: (合格照片, 跳过的条目)
    """
    eligible: list[Path] = []
    skipped: list[Path] = []
    for entry in entries:
        if ImageFormats.is_photo_name(entry.name):
            eligible.append(entry)
        else:
            skipped.append(entry)
    return eligible, skipped


def remove_partial_output(file_path: Path) -> None:
    """删除写入失败留下的残缺输出文件"""
    try:
        file_path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning(MessageFormatter.operation_failed("清理残缺输出", file_path, e))
