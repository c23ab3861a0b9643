"""批量处理器模块。

筛选合格照片，为每张照片并发执行一个独立的水印任务，汇总耗时和结果。
"""

import time
from collections.abc import Sequence
from pathlib import Path

from PIL import Image

from ..core.codec import load_watermark
from ..core.mask import OpacityMask
from ..core.watermark_engine import WatermarkTask, process_photo
from ..models.watermark_config import WatermarkConfig
from ..models.watermark_result import BatchResult, WatermarkResult
from ..utils.file_helpers import list_source_entries, split_eligible
from ..utils.logging_helpers import get_logger
from ..utils.message_formatter import MessageFormatter
from .concurrent_executor import ConcurrentExecutor


logger = get_logger()


class BatchRunner:
    """批量水印处理器

    水印和遮罩在任何任务开始前构建一次，之后只读共享。
    """

    def __init__(
        self,
        max_workers: int | None = None,
        fail_fast: bool = False,
    ):
        """初始化批量处理器

        Args:
            max_workers: 最大并发数，None 表示每个文件一个线程
            fail_fast: 首个失败后取消剩余任务
        """
        self.concurrent_executor = ConcurrentExecutor(max_workers, fail_fast)

    @classmethod
    def from_config(cls, config: WatermarkConfig) -> "BatchRunner":
        return cls(max_workers=config.max_workers, fail_fast=config.fail_fast)

    def process_directory(self, config: WatermarkConfig) -> BatchResult:
        """处理源目录中的全部照片

        目标目录的存在性检查由 WatermarkConfigBuilder 负责，这里只保证它存在。

        Args:
            config: 已验证的水印配置

        Returns:
            BatchResult: 批量处理结果
        """
        try:
            entries = list_source_entries(config.source_dir)
            watermark = load_watermark(config.watermark_path)
            mask = OpacityMask.from_percentage(config.opacity)
            config.target_dir.mkdir(parents=True, exist_ok=True)

        except Exception as e:
            from ..exceptions import ErrorHandler

            ErrorHandler._log_error("目录批量处理", config.source_dir, e, "error")
            return ErrorHandler.create_error_batch_result(
                source_dir=config.source_dir,
                target_dir=config.target_dir,
                error_message=str(e),
            )

        logger.info(f"开始处理 {len(entries)} 个目录项")
        return self.run(entries, watermark, mask, config)

    def run(
        self,
        files: Sequence[Path],
        watermark: Image.Image,
        mask: OpacityMask,
        config: WatermarkConfig,
    ) -> BatchResult:
        """对给定的文件列表执行水印处理

        Args:
            files: 源目录条目
            watermark: 已解码的水印（只读共享）
            mask: 不透明度遮罩（只读共享）
            config: 水印配置

        Returns:
            BatchResult: 批量处理结果，processed_count 为合格文件数
        """
        eligible, skipped = split_eligible(files)
        for entry in skipped:
            logger.info(MessageFormatter.skipped_file(entry.name))

        tasks = self._build_tasks(eligible, watermark, mask, config)

        start = time.perf_counter()
        results = self.concurrent_executor.execute_tasks(
            tasks=tasks,
            task_function=process_photo,
        )
        elapsed = time.perf_counter() - start

        return self._create_batch_result(
            config, results, [entry.name for entry in skipped], elapsed
        )

    def _build_tasks(
        self,
        eligible: list[Path],
        watermark: Image.Image,
        mask: OpacityMask,
        config: WatermarkConfig,
    ) -> list[WatermarkTask]:
        """为每张合格照片创建任务，输出路径为目标目录下的同名文件"""
        return [
            WatermarkTask(
                input_path=file_path,
                output_path=config.target_dir / file_path.name,
                watermark=watermark,
                mask=mask,
                location=config.location,
                scale=config.scale,
                jpeg_quality=config.jpeg_quality,
                resample=config.resample,
            )
            for file_path in eligible
        ]

    def _create_batch_result(
        self,
        config: WatermarkConfig,
        results: list[WatermarkResult],
        skipped: list[str],
        elapsed: float,
    ) -> BatchResult:
        """创建批量处理结果"""
        results = sorted(results, key=lambda r: r.input_path.name)
        failures = sum(1 for r in results if not r.success)

        return BatchResult(
            source_dir=config.source_dir,
            target_dir=config.target_dir,
            results=results,
            skipped=skipped,
            elapsed_seconds=elapsed,
            success=failures == 0,
            error=None if failures == 0 else f"{failures} 个文件处理失败",
        )
