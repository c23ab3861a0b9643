"""水印缩放模块。

按照片高度的比例缩放水印，保持水印宽高比。
"""

from PIL import Image

from ..exceptions import ValidationError
from ..models.constants import ResampleFilters, get_resample_filter


def target_dimensions(
    watermark_size: tuple[int, int], target_height_fraction: float, base_height: int
) -> tuple[int, int]:
    """计算缩放后的水印尺寸

    Args:
        watermark_size: 原始水印 (宽, 高)
        target_height_fraction: 水印高度占照片高度的比例
        base_height: 照片高度

    Returns:
        tuple[int, int]: 缩放后的 (宽, 高)

    Raises:
        ValidationError: 目标高度小于等于 0
    """
    wm_width, wm_height = watermark_size
    target_height = round(target_height_fraction * base_height)
    if target_height <= 0:
        raise ValidationError(
            f"水印目标高度无效: {target_height_fraction} × {base_height} = {target_height}"
        )
    if wm_width <= 0 or wm_height <= 0:
        raise ValidationError(f"水印尺寸无效: {watermark_size}")

    target_width = max(1, round(wm_width * target_height / wm_height))
    return target_width, target_height


def scale_watermark(
    watermark: Image.Image,
    target_height_fraction: float,
    base_height: int,
    resample: str = ResampleFilters.DEFAULT,
) -> Image.Image:
    """返回缩放后的水印副本，不修改原水印"""
    size = target_dimensions(watermark.size, target_height_fraction, base_height)
    return watermark.resize(size, get_resample_filter(resample))
