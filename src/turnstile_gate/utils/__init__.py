"""
工具模块
========

包含日志记录、重试退避等工具功能。
"""

from .logger import get_logger, setup_logger, set_log_level, format_hex
from .retry import linear_backoff, backoff_sleep

__all__ = [
    "get_logger",
    "setup_logger",
    "set_log_level",
    "format_hex",
    "linear_backoff",
    "backoff_sleep",
]
