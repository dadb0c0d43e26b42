"""
核心模块
========

包含帧编解码、校验算法、应答帧同步读取、串口管理和设备会话等核心功能。
"""

from .checksum import calculate_tx_checksum, validate_rx_checksum
from .frame_handler import FrameHandler, build_command, parse_response
from .frame_reader import read_response_frame
from .gate_structures import DeviceInfo, DeviceStatus, ResponseFrame
from .serial_manager import SerialManager, TransportPort
from .gate_device import GateDevice

__all__ = [
    "calculate_tx_checksum",
    "validate_rx_checksum",
    "FrameHandler",
    "build_command",
    "parse_response",
    "read_response_frame",
    "DeviceInfo",
    "DeviceStatus",
    "ResponseFrame",
    "SerialManager",
    "TransportPort",
    "GateDevice",
]
