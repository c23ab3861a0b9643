"""并发执行器模块。

提供 fork-join 式的并发任务执行：每个任务独立提交，全部完成后统一返回。
"""

import logging
import threading
from collections.abc import Callable, Sequence
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor, as_completed
from typing import Any

from ..exceptions import ErrorHandler
from ..models.watermark_result import WatermarkResult


logger = logging.getLogger(__name__)


class ConcurrentExecutor:
    """通用并发执行器

    max_workers 为 None 时不做并发限制，线程数等于任务数。
    fail_fast 为 True 时，首个失败会广播取消信号：排队中的任务被取消，
    尚未开始工作的任务直接返回取消结果。
    """

    def __init__(self, max_workers: int | None = None, fail_fast: bool = False):
        """初始化并发执行器

        Args:
            max_workers: 最大并发数，None 表示不限制
            fail_fast: 首个失败后是否取消剩余任务
        """
        self.max_workers = max_workers
        self.fail_fast = fail_fast
        self.cancel_event = threading.Event()

    def execute_tasks(
        self,
        tasks: Sequence[Any],  # WatermarkTask objects
        task_function: Callable[[Any], WatermarkResult],
    ) -> list[WatermarkResult]:
        """执行并发任务

        Args:
            tasks: 任务列表，每个任务需要有 input_path 属性
            task_function: 要执行的任务函数

        Returns:
            list[WatermarkResult]: 任务执行结果列表（完成顺序）
        """
        if not tasks:
            return []

        self.cancel_event.clear()
        results: list[WatermarkResult] = []
        workers = self.max_workers or len(tasks)
        logger.debug(f"使用 ThreadPoolExecutor: 任务数={len(tasks)}, 线程数={workers}")

        with ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="watermark"
        ) as executor:
            # 提交任务阶段
            future_to_task = self._submit_tasks(executor, tasks, task_function, results)

            # 收集结果阶段
            self._collect_results(future_to_task, results)

        return results

    def _run_guarded(
        self, task_function: Callable[[Any], WatermarkResult], task: Any
    ) -> WatermarkResult:
        """开始工作前检查取消信号"""
        if self.cancel_event.is_set():
            return ErrorHandler.create_cancelled_result(
                task.input_path, getattr(task, "output_path", None)
            )
        return task_function(task)

    def _submit_tasks(
        self,
        executor: ThreadPoolExecutor,
        tasks: Sequence[Any],
        task_function: Callable[[Any], WatermarkResult],
        results: list[WatermarkResult],
    ) -> dict[Future, Any]:
        """提交任务到执行器"""
        future_to_task = {}

        for task in tasks:
            try:
                future = executor.submit(self._run_guarded, task_function, task)
                future_to_task[future] = task

            except RuntimeError as e:
                error_result = ErrorHandler.handle_with_context(
                    e, task.input_path, "任务提交", log_level="error"
                )
                results.append(error_result)

        return future_to_task

    def _collect_results(
        self, future_to_task: dict[Future, Any], results: list[WatermarkResult]
    ) -> None:
        """收集任务执行结果"""
        for future in as_completed(future_to_task):
            task = future_to_task[future]
            file_path = task.input_path

            try:
                result = future.result()
            except CancelledError:
                result = ErrorHandler.create_cancelled_result(
                    file_path, getattr(task, "output_path", None)
                )
            except MemoryError:
                self._cancel_pending(future_to_task)
                raise
            except Exception as e:
                result = ErrorHandler.handle_with_context(
                    e, file_path, "并发任务处理", log_level="error"
                )

            results.append(result)

            if result.success:
                logger.debug(f"处理成功: {file_path}")
            elif self.fail_fast and not self.cancel_event.is_set():
                logger.warning(f"处理失败，取消剩余任务: {file_path} - {result.error}")
                self._cancel_pending(future_to_task)

    def _cancel_pending(self, future_to_task: dict[Future, Any]) -> None:
        """广播取消信号并取消排队中的任务"""
        self.cancel_event.set()
        cancelled = sum(1 for f in future_to_task if f.cancel())
        if cancelled:
            logger.info(f"已取消 {cancelled} 个排队任务")
