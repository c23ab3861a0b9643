"""图像水印器接口。

基于核心水印引擎的简洁用户接口，提供目录批处理和单张照片处理。
"""

from pathlib import Path
from typing import Any

from .config import get_config
from .core.codec import load_watermark
from .core.mask import OpacityMask
from .core.watermark_engine import WatermarkTask, process_photo
from .engine.batch import BatchRunner
from .engine.config import WatermarkConfigBuilder
from .exceptions import ErrorHandler, ValidationError
from .models import BatchResult, ProcessingResult, WatermarkResult
from .utils.logging_helpers import get_logger


logger = get_logger()


class ImageWatermarker:
    """图像水印器。

    负责配置验证，再把工作交给 BatchRunner 或单张照片处理流程。
    """

    def __init__(self, config_builder: WatermarkConfigBuilder | None = None):
        self.config_builder = config_builder or WatermarkConfigBuilder()
        logger.debug("初始化图像水印器")

    def watermark_directory(
        self,
        source_dir: str | Path | None = None,
        target_dir: str | Path | None = None,
        watermark_path: str | Path | None = None,
        **kwargs: Any,
    ) -> BatchResult:
        """为目录中的所有 JPEG 照片添加水印。

        配置错误（水印缺失、源目录缺失、目标目录已存在且未 force）
        以 ValidationError 抛出，此时不会开始任何处理。

        Args:
            source_dir: 源照片目录
            target_dir: 输出目录
            watermark_path: PNG 水印路径
            **kwargs: 其他 WatermarkConfig 字段（opacity、location、scale、force 等）

        Returns:
            BatchResult: 批量处理结果

        Examples:
            >>> watermarker = ImageWatermarker()
            >>> result = watermarker.watermark_directory("photos", "out", "logo.png")
            >>> print(result.get_summary())
        """
        config = self.config_builder.validate_and_build(
            source_dir=source_dir,
            target_dir=target_dir,
            watermark_path=watermark_path,
            **kwargs,
        )
        return BatchRunner.from_config(config).process_directory(config)

    def watermark_image(
        self,
        input_path: str | Path,
        output_path: str | Path,
        watermark_path: str | Path,
        **kwargs: Any,
    ) -> WatermarkResult:
        """为单张照片添加水印，输出到指定路径。

        Args:
            input_path: JPEG 照片路径
            output_path: 输出文件路径
            watermark_path: PNG 水印路径
            **kwargs: opacity、location、scale、jpeg_quality、resample

        Returns:
            WatermarkResult: 处理结果
        """
        input_path = Path(input_path)
        output_path = Path(output_path)

        try:
            config = self.config_builder.build(
                watermark_path=watermark_path,
                source_dir=input_path.parent,
                target_dir=output_path.parent,
                **kwargs,
            )
            if not input_path.is_file():
                raise ValidationError(f"输入文件不存在: {input_path}", input_path)

            output_path.parent.mkdir(parents=True, exist_ok=True)
            task = WatermarkTask(
                input_path=input_path,
                output_path=output_path,
                watermark=load_watermark(config.watermark_path),
                mask=OpacityMask.from_percentage(config.opacity),
                location=config.location,
                scale=config.scale,
                jpeg_quality=config.jpeg_quality,
                resample=config.resample,
            )
            return process_photo(task)

        except Exception as e:
            return ErrorHandler.handle_processing_error(
                e, input_path, "单张照片水印", output_path
            )


def watermark_universal(input_path: str | Path, **kwargs: Any) -> ProcessingResult:
    """便捷的通用水印函数

    输入为目录时批量处理，为文件时处理单张照片。

    Args:
        input_path: 源目录或照片路径
        **kwargs: 其他参数，包括：
            - output: 输出目录（目录输入）或输出文件（文件输入）
            - watermark_path: PNG 水印路径
            - opacity / location / scale / force 等

    Returns:
        ProcessingResult: 统一的处理结果格式
    """
    input_path = Path(input_path)
    output = kwargs.pop("output", None)
    watermarker = ImageWatermarker()

    try:
        match input_path:
            case path if path.is_dir():
                result: BatchResult | WatermarkResult = watermarker.watermark_directory(
                    source_dir=path, target_dir=output, **kwargs
                )
            case path if path.is_file():
                result = watermarker.watermark_image(
                    path,
                    output or path.with_name(f"{path.stem}_watermarked{path.suffix}"),
                    kwargs.pop("watermark_path", None)
                    or get_config().watermark.WATERMARK_PATH,
                    **kwargs,
                )
            case _:
                raise ValidationError(f"输入路径不存在: {input_path}", input_path)

        return {"success": result.success, "result": result, "error": result.error}

    except ValidationError as e:
        logger.error(f"通用水印处理失败: {e}")
        error_result = ErrorHandler.create_error_batch_result(
            source_dir=input_path,
            target_dir=Path(output) if output else None,
            error_message=e.message,
        )
        return {"success": False, "result": error_result, "error": e.message}
