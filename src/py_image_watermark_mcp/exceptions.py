"""水印处理异常模块。

定义统一的异常类和错误处理机制，包含图像异常转换装饰器。
"""

from collections.abc import Callable
from functools import wraps
from pathlib import Path
from typing import TypeVar

from PIL.Image import DecompressionBombError, UnidentifiedImageError

from .models.watermark_result import BatchResult, WatermarkResult
from .utils.logging_helpers import get_logger
from .utils.message_formatter import MessageFormatter


logger = get_logger()
T = TypeVar("T")


# 统一的异常类型
class WatermarkError(Exception):
    """水印处理相关错误基类"""

    def __init__(self, message: str, input_path: Path | None = None):
        super().__init__(message)
        self.message = message
        self.input_path = input_path


class ValidationError(WatermarkError):
    """参数验证错误 - 配置错误和退化输入"""

    pass


class ProcessingError(WatermarkError):
    """处理过程错误"""

    pass


class UnsupportedFormatError(WatermarkError):
    """不支持的格式错误"""

    pass


def handle_image_errors(operation_name: str = "图像处理"):
    """统一的图像处理异常转换装饰器

    把 Pillow 和文件系统异常转换为本模块的异常类型，
    已经是 WatermarkError 的异常原样抛出。

    Args:
        operation_name: 操作名称，用于日志记录
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except WatermarkError:
                raise
            except UnidentifiedImageError as e:
                logger.debug(f"{operation_name} - 无法识别图像格式: {e}")
                raise UnsupportedFormatError(f"无法识别的图像: {e}") from e
            except DecompressionBombError as e:
                logger.debug(f"{operation_name} - 图像过大: {e}")
                raise ProcessingError(f"图像文件过大，可能存在安全风险: {e}") from e
            except OSError as e:
                logger.debug(f"{operation_name} - 文件操作失败: {e}")
                raise ProcessingError(f"文件操作失败: {e}") from e
            except (ValueError, TypeError) as e:
                logger.debug(f"{operation_name} - 参数错误: {e}")
                raise ValidationError(f"参数错误: {e}") from e

        return wrapper

    return decorator


class ErrorHandler:
    """统一错误处理器

    把任务中的异常转换为失败的 WatermarkResult，并记录标准化日志。
    """

    @staticmethod
    def _log_error(
        operation: str, path: Path, error: Exception, level: str = "error"
    ) -> None:
        """标准化的错误日志记录

        Args:
            operation: 操作名称
            path: 相关文件路径
            error: 异常对象
            level: 日志级别 ("error", "warning", "debug")
        """
        log_msg = MessageFormatter.format_error(operation, path, error)
        getattr(logger, level, logger.error)(log_msg)

    @staticmethod
    def _create_error_result(
        input_path: Path,
        error_msg: str,
        output_path: Path | None = None,
    ) -> WatermarkResult:
        """创建标准化的错误结果"""
        return WatermarkResult(
            input_path=input_path,
            output_path=output_path or input_path,
            success=False,
            error=error_msg,
        )

    @staticmethod
    def handle_with_context(
        error: Exception,
        input_path: Path,
        operation: str = "未知操作",
        output_path: Path | None = None,
        log_level: str = "error",
    ) -> WatermarkResult:
        """记录错误并返回失败结果

        Args:
            error: 异常对象
            input_path: 输入文件路径
            operation: 操作名称（如"水印合成"、"照片解码"等）
            output_path: 输出文件路径（可选）
            log_level: 日志级别 ("error", "warning", "debug")

        Returns:
            WatermarkResult: 标准化的错误结果
        """
        ErrorHandler._log_error(operation, input_path, error, log_level)
        return ErrorHandler._create_error_result(
            input_path=input_path,
            error_msg=f"{operation}: {error}",
            output_path=output_path,
        )

    @staticmethod
    def handle_processing_error(
        error: Exception,
        input_path: Path,
        operation: str = "水印处理",
        output_path: Path | None = None,
    ) -> WatermarkResult:
        """按异常类型分发的任务错误处理"""
        match error:
            case ValidationError() as ve:
                return ErrorHandler.handle_with_context(
                    ve, input_path, f"{operation} - 参数验证", output_path, "warning"
                )
            case UnsupportedFormatError() as ufe:
                return ErrorHandler.handle_with_context(
                    ufe, input_path, operation, output_path, "warning"
                )
            case FileNotFoundError() as fnfe:
                return ErrorHandler.handle_with_context(
                    fnfe, input_path, operation, output_path, "warning"
                )
            case PermissionError() as pe:
                return ErrorHandler.handle_with_context(
                    pe, input_path, f"{operation} - 权限错误", output_path
                )
            case OSError() as ose:
                return ErrorHandler.handle_with_context(
                    ose, input_path, f"{operation} - 系统错误", output_path
                )
            case _:
                return ErrorHandler.handle_with_context(
                    error, input_path, operation, output_path
                )

    @staticmethod
    def create_cancelled_result(
        input_path: Path, output_path: Path | None = None
    ) -> WatermarkResult:
        """创建被取消任务的结果"""
        logger.info(MessageFormatter.task_cancelled(input_path))
        return ErrorHandler._create_error_result(
            input_path=input_path,
            error_msg="任务已取消",
            output_path=output_path,
        )

    @staticmethod
    def create_error_batch_result(
        source_dir: Path,
        target_dir: Path | None,
        error_message: str,
    ) -> BatchResult:
        """创建错误的批量处理结果"""
        return BatchResult(
            source_dir=source_dir,
            target_dir=target_dir,
            results=[],
            success=False,
            error=error_message,
        )
