"""消息格式化工具模块。

提供统一的错误消息、提示消息格式化功能。
"""

from pathlib import Path


class MessageFormatter:
    """统一的消息格式化器"""

    @staticmethod
    def directory_not_found(directory: str | Path) -> str:
        """目录不存在错误消息"""
        return f"目录不存在: {directory}"

    @staticmethod
    def path_not_directory(path: str | Path) -> str:
        """路径不是目录错误消息"""
        return f"路径不是目录: {path}"

    @staticmethod
    def operation_failed(
        operation: str, target: str | Path, error: Exception | None = None
    ) -> str:
        """操作失败消息"""
        msg = f"{operation}失败: {target}"
        if error:
            msg += f" - {error}"
        return msg

    @staticmethod
    def format_error(operation: str, path: str | Path, error: Exception) -> str:
        """格式化通用错误消息"""
        return f"{operation}失败 [{path}]: {error}"

    @staticmethod
    def skipped_file(name: str) -> str:
        """跳过非 JPEG 文件的提示"""
        return f"跳过 '{name}'，不是 .jpg 或 .jpeg 文件"

    @staticmethod
    def task_cancelled(path: str | Path) -> str:
        """任务取消提示"""
        return f"任务已取消: {path}"

    @staticmethod
    def target_exists(directory: str | Path, force: bool) -> str:
        """目标目录已存在的警告"""
        if force:
            return f"目标目录 '{directory}' 已存在，使用 -force，将覆盖已有文件"
        return f"目标目录 '{directory}' 已存在，使用 -force 覆盖已有文件"
