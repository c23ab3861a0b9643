"""水印处理相关常量定义。

集中管理照片扩展名、水印格式以及缩放滤镜映射，避免硬编码重复。
"""

from typing import Final

from PIL import Image


class ImageFormats:
    """水印流程支持的图像格式"""

    # 照片只处理 JPEG，大小写敏感
    PHOTO_EXTENSIONS: Final[tuple[str, ...]] = (".jpg", ".jpeg")

    # 水印必须是带透明通道的 PNG
    WATERMARK_EXTENSION: Final[str] = ".png"

    PHOTO_FORMAT: Final[str] = "JPEG"
    WATERMARK_FORMAT: Final[str] = "PNG"

    @classmethod
    def is_photo_name(cls, name: str) -> bool:
        """按文件名判断是否为待处理照片"""
        return name.endswith(cls.PHOTO_EXTENSIONS)

    @classmethod
    def is_watermark_name(cls, name: str) -> bool:
        """按文件名判断是否为 PNG 水印"""
        return name.endswith(cls.WATERMARK_EXTENSION)


class QualityDefaults:
    """JPEG 输出质量"""

    DEFAULT: Final[int] = 95
    MIN_QUALITY: Final[int] = 1
    MAX_QUALITY: Final[int] = 100


class ResampleFilters:
    """可插拔的缩放滤镜"""

    DEFAULT: Final[str] = "nearest"

    FILTERS: Final[dict[str, Image.Resampling]] = {
        "nearest": Image.Resampling.NEAREST,
        "box": Image.Resampling.BOX,
        "bilinear": Image.Resampling.BILINEAR,
        "hamming": Image.Resampling.HAMMING,
        "bicubic": Image.Resampling.BICUBIC,
        "lanczos": Image.Resampling.LANCZOS,
    }

    @classmethod
    def names(cls) -> list[str]:
        return sorted(cls.FILTERS)


def get_resample_filter(name: str) -> Image.Resampling:
    """获取滤镜名称对应的 Pillow 重采样常量"""
    try:
        return ResampleFilters.FILTERS[name.lower()]
    except KeyError:
        from ..exceptions import ValidationError

        raise ValidationError(
            f"不支持的缩放滤镜: {name}，可用滤镜: {', '.join(ResampleFilters.names())}"
        ) from None
