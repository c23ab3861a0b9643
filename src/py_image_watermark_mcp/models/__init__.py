"""数据模型包。

定义水印处理相关的数据结构和模型。
"""

from .constants import (
    ImageFormats,
    QualityDefaults,
    ResampleFilters,
    get_resample_filter,
)
from .watermark_config import WatermarkConfig, WatermarkLocation
from .watermark_result import (
    BatchResult,
    ProcessingResult,
    WatermarkResult,
)


__all__ = [
    # 核心模型
    "BatchResult",
    # 常量和工具
    "ImageFormats",
    # 类型定义
    "ProcessingResult",
    "QualityDefaults",
    "ResampleFilters",
    "WatermarkConfig",
    "WatermarkLocation",
    "WatermarkResult",
    "get_resample_filter",
]
