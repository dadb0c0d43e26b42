"""重试与退避工具
====================

闸机命令重试采用线性退避：第 N 次重试前等待 N 个步长。
"""

from __future__ import annotations

import time

from ..config.constants import RETRY_BACKOFF_STEP


def linear_backoff(attempt: int, step: float = RETRY_BACKOFF_STEP) -> float:
    """计算线性退避时间

    Args:
        attempt: 第 *attempt* 次尝试（从 0 开始，0 表示首次发送，不等待）
        step: 退避步长（秒）

    Returns:
        等待时间，秒
    """
    if attempt <= 0:
        return 0.0
    return attempt * step


def backoff_sleep(attempt: int, step: float = RETRY_BACKOFF_STEP, logger=None) -> float:
    """按线性退避等待，返回实际等待的秒数"""
    wait = linear_backoff(attempt, step)
    if wait > 0:
        if logger:
            logger.debug(f"第{attempt}次重试将在 {wait:.2f}s 后进行 …")
        time.sleep(wait)
    return wait
