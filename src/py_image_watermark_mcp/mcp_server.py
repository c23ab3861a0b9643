"""图像水印 MCP 服务器。

把批量水印和水印布局预览暴露为 MCP 工具。
"""

import logging
from typing import Any

from fastmcp import FastMCP

from .core.placement import compute_offset
from .core.scaling import target_dimensions
from .exceptions import ValidationError
from .utils.message_formatter import MessageFormatter
from .watermarker import ImageWatermarker


# MCP 服务器响应类型定义
MCPWatermarkResponse = dict[str, Any]
MCPLayoutResponse = dict[str, Any]


class MCPResponseBuilder:
    """MCP 服务器响应构建器，专门用于构建符合 MCP 协议的响应格式。"""

    @staticmethod
    def error(
        message: str,
        error_type: str = "general",
        details: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """构建错误结果。

        Args:
            message: 错误消息
            error_type: 错误类型
            details: 额外的错误详情

        Returns:
            dict: 标准化的错误响应
        """
        result = {
            "success": False,
            "error": message,
            "error_type": error_type,
        }

        if details:
            result["details"] = details

        return result

    @staticmethod
    def validation_error(message: str, field: str | None = None) -> dict[str, Any]:
        """构建验证错误结果。"""
        details = {"field": field} if field else None
        return MCPResponseBuilder.error(
            message=message,
            error_type="validation",
            details=details,
        )

    @staticmethod
    def processing_error(message: str, operation: str | None = None) -> dict[str, Any]:
        """构建处理错误结果。"""
        details = {"operation": operation} if operation else None
        return MCPResponseBuilder.error(
            message=message,
            error_type="processing",
            details=details,
        )


# 配置日志
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# 创建MCP应用
mcp: FastMCP[Any] = FastMCP("批量图像水印服务")

# 全局水印器实例
watermarker = ImageWatermarker()


@mcp.tool()
def watermark_photos(
    source_dir: str,
    target_dir: str,
    watermark_path: str,
    opacity: int = 70,
    location: str = "right",
    scale: float = 0.2,
    force: bool = False,
    max_workers: int | None = None,
) -> MCPWatermarkResponse:
    """为目录中的所有 .jpg/.jpeg 照片添加 PNG 水印

    水印底边与照片底边对齐，位于左下角或右下角，高度为照片高度 × scale。
    输出为目标目录下的同名 JPEG（质量 95）。

    Args:
        source_dir: 源照片目录
        target_dir: 输出目录，已存在时需要 force=True
        watermark_path: PNG 水印路径
        opacity: 不透明度 0-100
        location: "left" 或 "right"
        scale: 水印高度占照片高度的比例
        force: 目标目录已存在时是否覆盖
        max_workers: 最大并发数，默认每个文件一个线程

    Returns:
        dict: 处理统计和每个文件的结果
    """
    try:
        result = watermarker.watermark_directory(
            source_dir=source_dir,
            target_dir=target_dir,
            watermark_path=watermark_path,
            opacity=opacity,
            location=location,
            scale=scale,
            force=force,
            max_workers=max_workers,
        )
    except ValidationError as e:
        logger.error(MessageFormatter.operation_failed("参数验证", source_dir, e))
        return MCPResponseBuilder.validation_error(e.message)
    except Exception as e:
        logger.error(MessageFormatter.operation_failed("批量水印", source_dir, e))
        return MCPResponseBuilder.processing_error(str(e), "批量水印")

    return {
        "success": result.success,
        "summary": result.get_summary(),
        "processed": result.processed_count,
        "succeeded": result.get_success_count(),
        "failed": result.get_failure_count(),
        "skipped": result.skipped,
        "elapsed_seconds": round(result.elapsed_seconds, 3),
        "files": [
            {
                "input": str(r.input_path),
                "output": str(r.output_path),
                "success": r.success,
                "offset": r.offset,
                "watermark_size": r.watermark_dimensions,
                "error": r.error,
            }
            for r in result.results
        ],
        "error": result.error,
    }


@mcp.tool()
def preview_watermark_layout(
    image_width: int,
    image_height: int,
    watermark_width: int,
    watermark_height: int,
    location: str = "right",
    scale: float = 0.2,
) -> MCPLayoutResponse:
    """预览水印缩放后的尺寸和放置位置，不读写任何文件

    Args:
        image_width: 照片宽度
        image_height: 照片高度
        watermark_width: 原始水印宽度
        watermark_height: 原始水印高度
        location: "left" 或 "right"
        scale: 水印高度占照片高度的比例

    Returns:
        dict: 缩放后的水印尺寸和左上角偏移
    """
    try:
        size = target_dimensions((watermark_width, watermark_height), scale, image_height)
    except ValidationError as e:
        return MCPResponseBuilder.validation_error(e.message, "scale")

    offset = compute_offset((image_width, image_height), size, location)
    return {
        "success": True,
        "watermark_size": size,
        "offset": offset.as_tuple(),
        "clipped": offset.x < 0
        or offset.y < 0
        or offset.x + size[0] > image_width
        or offset.y + size[1] > image_height,
    }


# ============================================================================
# 应用入口
# ============================================================================


def main() -> None:
    """启动 MCP 服务器"""
    logger.info("启动图像水印 MCP 服务器")
    mcp.run()


if __name__ == "__main__":
    main()
