"""
闸机串口驱动
============

通过半双工串口（RS485）控制单台闸机（转闸/翼闸）的命令/应答驱动。

主要功能：
- 8字节命令帧封装与18字节应答帧解析
- 应答帧同步（丢弃噪声、拼接分段数据）
- 写入/读取失败的线性退避重试
- 状态查询、开闸、常开、关闸、通行限制、计数清零、参数设置、重启

版本: 1.0.0
"""

__version__ = "1.0.0"
__description__ = "闸机串口命令/应答驱动"

# 导出主要类
from .config.settings import SessionConfig
from .config.constants import GateCommand
from .core.gate_device import GateDevice
from .core.gate_structures import DeviceInfo, DeviceStatus, ResponseFrame
from .errors import *

__all__ = [
    "SessionConfig",
    "GateCommand",
    "GateDevice",
    "DeviceInfo",
    "DeviceStatus",
    "ResponseFrame",
    "GateError",
    "InvalidConfigError",
    "DataTooLargeError",
    "NotOpenError",
    "TransportError",
    "OperationCancelledError",
    "FramingError",
    "FrameTooShortError",
    "InvalidHeaderError",
    "IncompleteFrameError",
    "NoDataError",
    "ProtocolError",
    "DeviceIDMismatchError",
    "CommandFailedError",
    "CommandError",
]
