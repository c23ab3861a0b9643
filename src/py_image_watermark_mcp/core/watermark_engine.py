"""水印处理引擎模块。

单张照片的完整流程：解码、缩放水印、定位、合成、编码。
"""

from dataclasses import dataclass
from pathlib import Path

from PIL import Image

from ..models.constants import QualityDefaults, ResampleFilters
from ..models.watermark_config import WatermarkLocation
from ..models.watermark_result import WatermarkResult
from ..utils.logging_helpers import get_logger
from .codec import load_photo, save_jpeg
from .compositor import compose
from .mask import OpacityMask
from .placement import compute_offset
from .scaling import scale_watermark


logger = get_logger()


@dataclass(frozen=True, eq=False)
class WatermarkTask:
    """单个文件的独立工作单元

    watermark 和 mask 为所有任务共享的只读对象，
    output_path 由源文件名派生，任务间互不冲突。
    """

    input_path: Path
    output_path: Path
    watermark: Image.Image
    mask: OpacityMask
    location: WatermarkLocation | str = WatermarkLocation.RIGHT
    scale: float = 0.2
    jpeg_quality: int = QualityDefaults.DEFAULT
    resample: str = ResampleFilters.DEFAULT


def render_watermarked(
    photo: Image.Image,
    watermark: Image.Image,
    mask: OpacityMask,
    location: WatermarkLocation | str,
    scale: float,
    resample: str = ResampleFilters.DEFAULT,
) -> tuple[Image.Image, Image.Image, tuple[int, int]]:
    """在内存中完成缩放、定位和合成

    Returns:
        tuple: (合成结果, 缩放后的水印, 偏移量)
    """
    scaled = scale_watermark(watermark, scale, photo.height, resample)
    offset = compute_offset(photo.size, scaled.size, location)
    return compose(photo, scaled, mask, offset), scaled, offset.as_tuple()


def process_photo(task: WatermarkTask) -> WatermarkResult:
    """处理单张照片。

    任何处理异常都转换为失败结果，不影响其他任务；
    MemoryError 继续向上传播。

    Args:
        task: 工作单元

    Returns:
        WatermarkResult: 处理结果
    """
    try:
        photo = load_photo(task.input_path)
        canvas, scaled, offset = render_watermarked(
            photo,
            task.watermark,
            task.mask,
            task.location,
            task.scale,
            task.resample,
        )
        output_size = save_jpeg(canvas, task.output_path, task.jpeg_quality)

        logger.info(f"已添加水印: {task.input_path.name} → {task.output_path}")
        return WatermarkResult(
            input_path=task.input_path,
            output_path=task.output_path,
            success=True,
            original_dimensions=photo.size,
            watermark_dimensions=scaled.size,
            offset=offset,
            output_size=output_size,
            error=None,
        )

    except MemoryError:
        raise
    except Exception as e:
        from ..exceptions import ErrorHandler

        return ErrorHandler.handle_processing_error(
            e, task.input_path, "水印处理引擎", task.output_path
        )
