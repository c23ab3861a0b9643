"""核心模块包。

水印定位、缩放、合成以及单张照片处理流程。
"""

from .codec import load_photo, load_watermark, open_image, save_jpeg
from .compositor import compose, visible_region
from .mask import OpacityMask
from .placement import PlacementOffset, compute_offset
from .scaling import scale_watermark, target_dimensions
from .watermark_engine import WatermarkTask, process_photo, render_watermarked


__all__ = [
    "OpacityMask",
    "PlacementOffset",
    "WatermarkTask",
    "compose",
    "compute_offset",
    "load_photo",
    "load_watermark",
    "open_image",
    "process_photo",
    "render_watermarked",
    "save_jpeg",
    "scale_watermark",
    "target_dimensions",
    "visible_region",
]
