"""Python 批量图像水印库。

基于 Pillow 的并发水印合成：解码、缩放、定位、alpha 混合、JPEG 编码。
"""

__version__ = "0.1.0"
__author__ = "crper"
__description__ = "批量图像水印工具，基于 Pillow 11"

# 核心功能导出
from .models.watermark_result import BatchResult, WatermarkResult
from .watermarker import ImageWatermarker, watermark_universal


__all__ = [
    "BatchResult",
    "ImageWatermarker",
    "WatermarkResult",
    "get_version",
    "watermark_universal",
]


def get_version() -> str:
    """获取版本号。"""
    return __version__
