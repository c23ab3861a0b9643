"""配置构建器模块。

统一的水印配置构建逻辑，集成启动前的参数和目录检查。
"""

import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..config import get_config
from ..exceptions import ValidationError as CustomValidationError
from ..models.constants import ImageFormats
from ..models.watermark_config import WatermarkConfig
from ..utils.message_formatter import MessageFormatter


logger = logging.getLogger(__name__)


class WatermarkConfigBuilder:
    """水印配置构建器

    所有配置错误都在并发开始前以 ValidationError 抛出。
    """

    def build(self, **kwargs: Any) -> WatermarkConfig:
        """构建配置（只做字段验证，不检查文件系统）

        未提供的参数使用 AppConfig 中的默认值。

        Raises:
            CustomValidationError: 参数验证失败
        """
        params = {**self._defaults(), **{k: v for k, v in kwargs.items() if v is not None}}

        try:
            return WatermarkConfig(**params)
        except PydanticValidationError as e:
            raise CustomValidationError(
                self._format_validation_error(e),
                Path(params["source_dir"]),
            ) from e

    def validate_and_build(
        self, prepare_target: bool = True, **kwargs: Any
    ) -> WatermarkConfig:
        """验证参数和输入路径并构建配置

        Args:
            prepare_target: 是否检查并创建目标目录
            **kwargs: WatermarkConfig 字段

        Returns:
            WatermarkConfig: 构建的配置对象

        Raises:
            CustomValidationError: 参数或路径验证失败
        """
        config = self.build(**kwargs)

        self._validate_watermark(config.watermark_path)
        self._validate_source(config.source_dir)
        if prepare_target:
            self.prepare_target_directory(config.target_dir, config.force)

        return config

    def prepare_target_directory(self, target_dir: Path, force: bool) -> None:
        """目标目录已存在时，没有 force 则拒绝；不存在则创建"""
        if target_dir.exists():
            logger.warning(MessageFormatter.target_exists(target_dir, force))
            if not target_dir.is_dir():
                raise CustomValidationError(
                    MessageFormatter.path_not_directory(target_dir), target_dir
                )
            if not force:
                raise CustomValidationError(
                    f"目标目录已存在，为避免覆盖已退出: {target_dir}", target_dir
                )
            return

        target_dir.mkdir(parents=True)
        logger.debug(f"已创建目标目录: {target_dir}")

    def _validate_watermark(self, watermark_path: Path) -> None:
        """水印文件必须存在且为 .png"""
        if not watermark_path.is_file():
            raise CustomValidationError(
                f"水印文件不存在: {watermark_path}", watermark_path
            )
        if not ImageFormats.is_watermark_name(watermark_path.name):
            raise CustomValidationError(
                f"水印文件不是 PNG 文件: {watermark_path}", watermark_path
            )

    def _validate_source(self, source_dir: Path) -> None:
        """源目录必须存在"""
        if not source_dir.exists():
            raise CustomValidationError(
                MessageFormatter.directory_not_found(source_dir), source_dir
            )
        if not source_dir.is_dir():
            raise CustomValidationError(
                MessageFormatter.path_not_directory(source_dir), source_dir
            )

    @staticmethod
    def _defaults() -> dict[str, Any]:
        app_config = get_config()
        return {
            "opacity": app_config.watermark.OPACITY,
            "location": app_config.watermark.LOCATION,
            "scale": app_config.watermark.SCALE,
            "watermark_path": app_config.watermark.WATERMARK_PATH,
            "source_dir": app_config.watermark.SOURCE_DIR,
            "target_dir": app_config.watermark.TARGET_DIR,
            "jpeg_quality": app_config.watermark.JPEG_QUALITY,
            "resample": app_config.watermark.RESAMPLE,
            "max_workers": app_config.processing.MAX_WORKERS,
            "fail_fast": app_config.processing.FAIL_FAST,
        }

    def _format_validation_error(self, error: PydanticValidationError) -> str:
        """格式化验证错误"""
        messages = []
        for err in error.errors():
            field = ".".join(str(loc) for loc in err["loc"])
            msg = err["msg"]
            if field:
                messages.append(f"{field}: {msg}")
            else:
                messages.append(msg)
        return "; ".join(messages)
