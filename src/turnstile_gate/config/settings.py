"""
配置管理
========

提供闸机会话的配置类。
"""

from dataclasses import dataclass
import serial

from .constants import (
    DEFAULT_BAUDRATE,
    DEFAULT_BYTESIZE,
    DEFAULT_DEVICE_ID,
    DEFAULT_MAX_READ_ATTEMPTS,
    DEFAULT_PARITY,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_RETRY_COUNT,
    DEFAULT_STOPBITS,
    DEFAULT_TIMEOUT,
    DEFAULT_WRITE_TIMEOUT,
    VALID_PARITIES,
)
from ..errors import InvalidConfigError

# 校验方式 -> pyserial 常量
PARITY_MAP = {
    "none": serial.PARITY_NONE,
    "odd": serial.PARITY_ODD,
    "even": serial.PARITY_EVEN,
    "mark": serial.PARITY_MARK,
    "space": serial.PARITY_SPACE,
}

STOPBITS_MAP = {
    1: serial.STOPBITS_ONE,
    2: serial.STOPBITS_TWO,
}


@dataclass(frozen=True)
class SessionConfig:
    """闸机会话配置类，构造后不可修改"""

    port: str  # 串口号
    baudrate: int = DEFAULT_BAUDRATE  # 波特率
    bytesize: int = DEFAULT_BYTESIZE  # 数据位
    stopbits: int = DEFAULT_STOPBITS  # 停止位
    parity: str = DEFAULT_PARITY  # 校验位
    timeout: float = DEFAULT_TIMEOUT  # 单次操作超时(秒)
    read_timeout: float = DEFAULT_READ_TIMEOUT  # 读超时(秒)
    write_timeout: float = DEFAULT_WRITE_TIMEOUT  # 写超时(秒)
    device_id: int = DEFAULT_DEVICE_ID  # 机号
    retry_count: int = DEFAULT_RETRY_COUNT  # 重试次数
    max_read_attempts: int = DEFAULT_MAX_READ_ATTEMPTS  # 单次应答最多读取次数

    def __post_init__(self):
        """参数验证"""
        if not self.port:
            raise InvalidConfigError("串口号不能为空")
        if self.baudrate <= 0:
            raise InvalidConfigError(f"波特率必须大于0: {self.baudrate}")
        if not 5 <= self.bytesize <= 8:
            raise InvalidConfigError(f"数据位必须在5到8之间: {self.bytesize}")
        if self.stopbits not in STOPBITS_MAP:
            raise InvalidConfigError(f"停止位必须为1或2: {self.stopbits}")
        if self.parity not in VALID_PARITIES:
            raise InvalidConfigError(
                f"校验位非法: {self.parity} (可选 {', '.join(VALID_PARITIES)})"
            )
        if self.timeout <= 0:
            raise InvalidConfigError("timeout必须大于0")
        if self.read_timeout < 0 or self.write_timeout < 0:
            raise InvalidConfigError("读写超时不能为负数")
        if not 0 <= self.device_id <= 0xFF:
            raise InvalidConfigError(f"机号必须在0到255之间: {self.device_id}")
        if self.retry_count < 0:
            raise InvalidConfigError("retry_count不能为负数")
        if self.max_read_attempts < 1:
            raise InvalidConfigError("max_read_attempts必须大于0")

    @property
    def max_attempts(self) -> int:
        """一次命令最多尝试的次数"""
        return self.retry_count + 1

    def to_serial_kwargs(self) -> dict:
        """转换为serial.Serial的参数字典"""
        return {
            "port": self.port,
            "baudrate": self.baudrate,
            "bytesize": self.bytesize,
            "parity": PARITY_MAP[self.parity],
            "stopbits": STOPBITS_MAP[self.stopbits],
            "timeout": self.read_timeout,
            "write_timeout": self.write_timeout,
        }
