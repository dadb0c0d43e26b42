"""
异常定义
========

闸机驱动的异常体系，全部派生自 GateError：

- 配置错误：InvalidConfigError，在任何串口操作之前抛出
- 编程错误：DataTooLargeError、NotOpenError，立即失败，不重试
- 传输错误：TransportError，在重试预算内重试
- 帧错误：FramingError 及其子类，读取阶段出现时按传输错误处理
- 协议错误：ProtocolError 及其子类，交互已完成但被拒绝，不重试
- CommandError：重试耗尽后抛出，__cause__ 为最后一次失败原因
"""

from typing import Optional


class GateError(Exception):
    """闸机驱动异常基类"""


class InvalidConfigError(GateError, ValueError):
    """配置参数非法"""


class DataTooLargeError(GateError, ValueError):
    """命令数据超过3字节"""

    def __init__(self, size: int, limit: int):
        super().__init__(f"数据过长: {size} 字节 (最大 {limit})")
        self.size = size
        self.limit = limit


class NotOpenError(GateError):
    """设备未打开"""

    def __init__(self, message: str = "设备未打开"):
        super().__init__(message)


class TransportError(GateError):
    """串口打开/读/写失败"""


class OperationCancelledError(GateError):
    """操作被调用方取消"""


class FramingError(GateError):
    """帧同步或帧格式错误"""


class FrameTooShortError(FramingError):
    def __init__(self, size: int, expected: int):
        super().__init__(f"帧长度不足: {size} 字节 (期望 {expected})")
        self.size = size
        self.expected = expected


class InvalidHeaderError(FramingError):
    def __init__(self, actual: int, expected: int):
        super().__init__(f"帧头错误: 0x{actual:02X} (期望 0x{expected:02X})")
        self.actual = actual
        self.expected = expected


class IncompleteFrameError(FramingError):
    """读取预算耗尽时帧仍不完整，partial 为已累积的字节"""

    def __init__(self, partial: bytes, expected: int):
        super().__init__(
            f"读取超时: 收到不完整帧 {len(partial)} 字节, 期望 {expected} 字节"
        )
        self.partial = partial
        self.expected = expected


class NoDataError(FramingError):
    def __init__(self, message: str = "读取超时: 未收到任何数据"):
        super().__init__(message)


class ProtocolError(GateError):
    """应答已完整收到但被判定为拒绝"""


class DeviceIDMismatchError(ProtocolError):
    def __init__(self, expected: int, actual: int):
        super().__init__(f"机号不匹配: 期望 0x{expected:02X}, 实际 0x{actual:02X}")
        self.expected = expected
        self.actual = actual


class CommandFailedError(ProtocolError):
    def __init__(self, execution_byte: int, expected: int):
        super().__init__(
            f"设备执行命令失败: 执行状态 0x{execution_byte:02X} (成功为 0x{expected:02X})"
        )
        self.execution_byte = execution_byte
        self.expected = expected


class CommandError(GateError):
    """重试耗尽仍未得到有效应答"""

    def __init__(self, message: str, attempts: int, last_error: Optional[Exception] = None):
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error
