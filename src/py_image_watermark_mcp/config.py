"""统一配置管理模块。

提供应用程序的全局默认配置，支持环境变量覆盖。
"""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class WatermarkDefaults:
    """水印相关的默认配置"""

    # 水印参数
    OPACITY: int = 70
    LOCATION: str = "right"
    SCALE: float = 0.2

    # 默认路径
    WATERMARK_PATH: str = "watermark.png"
    SOURCE_DIR: str = "photos"
    TARGET_DIR: str = "watermarked"

    # 输出质量
    JPEG_QUALITY: int = 95

    # 缩放滤镜
    RESAMPLE: str = "nearest"


@dataclass(frozen=True)
class ProcessingDefaults:
    """处理相关的默认配置"""

    # 并发设置，None 表示每个文件一个线程
    MAX_WORKERS: int | None = None

    # 首个失败后是否取消剩余任务
    FAIL_FAST: bool = False


@dataclass(frozen=True)
class LoggingDefaults:
    """日志相关的默认配置"""

    # 日志级别
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # 文件日志
    ENABLE_FILE_LOGGING: bool = False
    LOG_FILE_PATH: str = "py_image_watermark.log"
    LOG_FILE_MAX_SIZE: int = 10 * 1024 * 1024  # 10MB
    LOG_FILE_BACKUP_COUNT: int = 5


class AppConfig:
    """应用程序配置管理器

    支持环境变量覆盖默认配置
    """

    def __init__(self):
        self.watermark = WatermarkDefaults()
        self.processing = ProcessingDefaults()
        self.logging = LoggingDefaults()

        # 从环境变量加载配置
        self._load_from_env()

    def _load_from_env(self):
        """从环境变量加载配置"""
        # 水印配置
        if opacity := os.getenv("PIW_OPACITY"):
            object.__setattr__(self.watermark, "OPACITY", int(opacity))

        if location := os.getenv("PIW_LOCATION"):
            object.__setattr__(self.watermark, "LOCATION", location.lower())

        if scale := os.getenv("PIW_SCALE"):
            object.__setattr__(self.watermark, "SCALE", float(scale))

        if jpeg_quality := os.getenv("PIW_JPEG_QUALITY"):
            object.__setattr__(self.watermark, "JPEG_QUALITY", int(jpeg_quality))

        if resample := os.getenv("PIW_RESAMPLE"):
            object.__setattr__(self.watermark, "RESAMPLE", resample.lower())

        # 并发配置
        if max_workers := os.getenv("PIW_MAX_WORKERS"):
            object.__setattr__(self.processing, "MAX_WORKERS", int(max_workers))

        # 日志配置
        if log_level := os.getenv("PIW_LOG_LEVEL"):
            object.__setattr__(self.logging, "LOG_LEVEL", log_level.upper())

        if enable_file_log := os.getenv("PIW_ENABLE_FILE_LOGGING"):
            object.__setattr__(
                self.logging,
                "ENABLE_FILE_LOGGING",
                enable_file_log.lower() in ("true", "1", "yes"),
            )


# 全局配置实例
config = AppConfig()


def get_config() -> AppConfig:
    """获取全局配置实例"""
    return config


def reset_config():
    """重置配置（主要用于测试）"""
    global config
    config = AppConfig()
