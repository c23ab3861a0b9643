"""工具模块包。

提供纯工具函数，不包含业务逻辑。
"""

from .file_helpers import list_source_entries, remove_partial_output, split_eligible
from .logging_helpers import get_logger, setup_logging
from .message_formatter import MessageFormatter


__all__ = [
    "MessageFormatter",
    "get_logger",
    "list_source_entries",
    "remove_partial_output",
    "setup_logging",
    "split_eligible",
]
