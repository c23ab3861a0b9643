"""水印处理结果模型。

定义单个文件和整批处理的结果数据结构。
"""

from datetime import timedelta
from pathlib import Path
from typing import Any, TypedDict

from humanize import naturalsize, precisedelta
from pydantic import BaseModel, Field


class BaseResult(BaseModel):
    """结果基类，包含通用字段和方法"""

    success: bool = Field(description="是否成功")
    error: str | None = Field(None, description="错误信息")

    @staticmethod
    def format_size(size_bytes: int) -> str:
        """格式化文件大小为人类可读格式"""
        return naturalsize(size_bytes, binary=True)


class ResultCollection(BaseResult):
    """结果集合基类，提供通用的统计方法"""

    results: list[Any] = Field(description="结果列表")

    def get_successful_items(self) -> list[Any]:
        """获取成功的结果项"""
        return [r for r in self.results if getattr(r, "success", False)]

    def get_failed_items(self) -> list[Any]:
        """获取失败的结果项"""
        return [r for r in self.results if not getattr(r, "success", False)]

    def get_total_count(self) -> int:
        """获取总数量"""
        return len(self.results)

    def get_success_count(self) -> int:
        """获取成功数量"""
        return len(self.get_successful_items())

    def get_failure_count(self) -> int:
        """获取失败数量"""
        return len(self.get_failed_items())

    def get_success_rate(self) -> float:
        """获取成功率（百分比）"""
        total = self.get_total_count()
        if total == 0:
            return 0.0
        return (self.get_success_count() / total) * 100


class WatermarkResult(BaseResult):
    """单张照片加水印结果"""

    input_path: Path = Field(description="输入文件路径")
    output_path: Path = Field(description="输出文件路径")

    original_dimensions: tuple[int, int] | None = Field(None, description="照片尺寸")
    watermark_dimensions: tuple[int, int] | None = Field(
        None, description="缩放后的水印尺寸"
    )
    offset: tuple[int, int] | None = Field(None, description="水印左上角偏移")
    output_size: int = Field(0, description="输出文件大小（字节）")

    def get_output_size_human(self) -> str:
        """人类可读的输出文件大小"""
        return self.format_size(self.output_size)

    def get_summary(self) -> str:
        """处理结果摘要"""
        if not self.success:
            return f"失败: {self.error}"

        return (
            f"{self.input_path.name} → {self.output_path} "
            f"(水印 {self.watermark_dimensions} @ {self.offset}, "
            f"{self.get_output_size_human()})"
        )


class BatchResult(ResultCollection):
    """批量处理结果"""

    source_dir: Path = Field(description="源目录")
    target_dir: Path | None = Field(None, description="输出目录")
    results: list[WatermarkResult] = Field(description="所有合格文件的处理结果")
    skipped: list[str] = Field(default_factory=list, description="跳过的目录项")
    elapsed_seconds: float = Field(0.0, description="处理耗时（秒）")

    @property
    def processed_count(self) -> int:
        """合格文件数量"""
        return self.get_total_count()

    def get_total_output_size(self) -> int:
        """输出文件总大小"""
        return sum(r.output_size for r in self.results if r.success)

    def get_elapsed_human(self) -> str:
        """人类可读的耗时"""
        return precisedelta(
            timedelta(seconds=self.elapsed_seconds), minimum_unit="milliseconds"
        )

    def get_summary(self) -> str:
        """批量处理摘要"""
        if not self.success and not self.results:
            return f"批量处理失败: {self.error}"

        total = self.get_total_count()
        successful = self.get_success_count()

        summary = (
            f"处理 {successful}/{total} 个文件，耗时 {self.get_elapsed_human()}，"
            f"输出 {self.format_size(self.get_total_output_size())}"
        )
        if self.skipped:
            summary += f"，跳过 {len(self.skipped)} 项"
        if self.get_failure_count():
            summary += f"，失败 {self.get_failure_count()} 个"
        return summary


class ProcessingResult(TypedDict):
    """统一的处理结果类型定义"""

    success: bool
    result: BatchResult | WatermarkResult
    error: str | None
