"""水印处理引擎模块。

包含批量处理、并发执行和配置构建等处理逻辑。
"""

from .batch import BatchRunner
from .concurrent_executor import ConcurrentExecutor
from .config import WatermarkConfigBuilder


__all__ = [
    "BatchRunner",
    "ConcurrentExecutor",
    "WatermarkConfigBuilder",
]
