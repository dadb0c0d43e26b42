"""
配置模块
=======

包含协议常量定义和会话配置。
"""

from .constants import *
from .settings import *

__all__ = [
    # 常量
    "GateCommand",
    "COMMAND_FRAME_SIZE",
    "RESPONSE_FRAME_SIZE",
    "EXECUTION_SUCCESS",
    "DEFAULT_BAUDRATE",
    "DEFAULT_TIMEOUT",
    "DEFAULT_RETRY_COUNT",
    # 配置
    "SessionConfig",
]
