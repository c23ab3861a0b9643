"""水印定位模块。

根据照片和缩放后水印的尺寸计算水印左上角的偏移量。
"""

from dataclasses import dataclass

from ..models.watermark_config import WatermarkLocation
from ..utils.logging_helpers import get_logger


logger = get_logger()


@dataclass(frozen=True)
class PlacementOffset:
    """水印左上角在照片坐标系中的位置，可以为负"""

    x: int
    y: int

    def as_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)


def compute_offset(
    base_size: tuple[int, int],
    watermark_size: tuple[int, int],
    location: WatermarkLocation | str,
) -> PlacementOffset:
    """计算水印偏移量

    两种位置都把水印底边对齐照片底边；LEFT 对齐左边，RIGHT 对齐右边。
    无法识别的位置返回 (0, 0)。水印比照片大时不报错，由合成步骤裁剪。

    Args:
        base_size: 照片 (宽, 高)
        watermark_size: 缩放后水印 (宽, 高)
        location: 水印位置

    Returns:
        PlacementOffset: 偏移量
    """
    base_width, base_height = base_size
    wm_width, wm_height = watermark_size

    try:
        location = WatermarkLocation(location)
    except ValueError:
        logger.warning(f"未知的水印位置 {location!r}，使用 (0, 0)")
        return PlacementOffset(0, 0)

    y = base_height - wm_height
    match location:
        case WatermarkLocation.LEFT:
            return PlacementOffset(0, y)
        case WatermarkLocation.RIGHT:
            return PlacementOffset(base_width - wm_width, y)
