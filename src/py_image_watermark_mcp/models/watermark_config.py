"""水印配置模型。

定义一次批处理运行的不可变配置参数。
"""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import QualityDefaults, ResampleFilters


class WatermarkLocation(str, Enum):
    """水印位置枚举"""

    LEFT = "left"  # 左下角
    RIGHT = "right"  # 右下角


class WatermarkConfig(BaseModel):
    """水印批处理配置

    启动时构建一次，之后只读地传递给批处理器。
    """

    model_config = ConfigDict(frozen=True)

    # 水印参数
    opacity: int = Field(70, ge=0, le=100, description="水印不透明度百分比")
    location: WatermarkLocation = Field(
        WatermarkLocation.RIGHT, description="水印位置"
    )
    scale: float = Field(0.2, gt=0, description="水印高度占照片高度的比例")

    # 输入输出
    watermark_path: Path = Field(Path("watermark.png"), description="PNG 水印路径")
    source_dir: Path = Field(Path("photos"), description="源照片目录")
    target_dir: Path = Field(Path("watermarked"), description="输出目录")
    force: bool = Field(False, description="目标目录已存在时是否覆盖")

    # 输出和并发
    jpeg_quality: int = Field(
        QualityDefaults.DEFAULT,
        ge=QualityDefaults.MIN_QUALITY,
        le=QualityDefaults.MAX_QUALITY,
        description="JPEG 编码质量",
    )
    max_workers: int | None = Field(
        None, ge=1, description="最大并发数，None 表示每个文件一个线程"
    )
    fail_fast: bool = Field(False, description="首个失败后取消未开始的任务")
    resample: str = Field(ResampleFilters.DEFAULT, description="水印缩放滤镜")

    @field_validator("location", mode="before")
    @classmethod
    def normalize_location(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("resample")
    @classmethod
    def validate_resample(cls, v: str) -> str:
        name = v.lower()
        if name not in ResampleFilters.FILTERS:
            raise ValueError(
                f"不支持的缩放滤镜: {v}，可用滤镜: {ResampleFilters.names()}"
            )
        return name
