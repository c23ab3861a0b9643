"""水印合成模块。

把缩放后的水印按 "over" 规则混合到照片上。
"""

from PIL import Image

from .mask import OpacityMask
from .placement import PlacementOffset


def visible_region(
    base_size: tuple[int, int],
    watermark_size: tuple[int, int],
    offset: PlacementOffset,
) -> tuple[tuple[int, int, int, int], tuple[int, int]] | None:
    """计算水印落在画布内的部分

    Returns:
        (水印裁剪框, 画布上的左上角)，完全落在画布外时返回 None
    """
    base_width, base_height = base_size
    wm_width, wm_height = watermark_size

    left = max(offset.x, 0)
    top = max(offset.y, 0)
    right = min(offset.x + wm_width, base_width)
    bottom = min(offset.y + wm_height, base_height)
    if left >= right or top >= bottom:
        return None

    crop_box = (left - offset.x, top - offset.y, right - offset.x, bottom - offset.y)
    return crop_box, (left, top)


def compose(
    base: Image.Image,
    watermark: Image.Image,
    mask: OpacityMask,
    offset: PlacementOffset,
) -> Image.Image:
    """合成水印

    先把照片不透明地复制到新画布，再把水印以 alpha × 遮罩值 / 255 的
    有效透明度叠加到 offset 处。超出画布的部分被裁剪。

    Args:
        base: 照片
        watermark: 缩放后的水印
        mask: 不透明度遮罩
        offset: 水印左上角位置

    Returns:
        Image.Image: 与照片同尺寸的 RGBA 画布，alpha 全为 255
    """
    canvas = Image.new("RGBA", base.size)
    canvas.paste(base.convert("RGB"))

    region = visible_region(base.size, watermark.size, offset)
    if region is None:
        return canvas

    crop_box, dest = region
    overlay = watermark.convert("RGBA").crop(crop_box)
    overlay.putalpha(mask.apply(overlay.getchannel("A")))

    canvas.alpha_composite(overlay, dest=dest)
    return canvas
