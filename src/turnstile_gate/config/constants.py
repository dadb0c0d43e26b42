"""
系统常量定义
============

定义闸机串口通信协议中使用的各种常量。
"""

from enum import IntEnum
from typing import Final, Tuple


class GateCommand(IntEnum):
    """闸机命令字枚举"""

    # 状态查询
    GET_STATUS = 0x10  # 查询设备状态

    # 计数器
    RESET_LEFT_COUNTERS = 0x20  # 左侧计数清零
    RESET_RIGHT_COUNTERS = 0x21  # 右侧计数清零

    # 设备控制
    RESTART_DEVICE = 0x35  # 重启设备（需携带确认字节0x60）

    # 通行控制
    LEFT_OPEN = 0x80  # 左向开闸（携带参数）
    LEFT_ALWAYS_OPEN = 0x81  # 左向常开
    RIGHT_OPEN = 0x82  # 右向开闸（携带参数）
    RIGHT_ALWAYS_OPEN = 0x83  # 右向常开
    CLOSE_GATE = 0x84  # 关闸

    # 通行限制
    FORBID_LEFT_PASSAGE = 0x88  # 禁止左向通行
    FORBID_RIGHT_PASSAGE = 0x89  # 禁止右向通行
    DISABLE_RESTRICTIONS = 0x8F  # 取消通行限制

    # 参数设置
    SET_PARAMETERS = 0x96  # 设置参数（Data0 = 参数值）


# 命令帧格式：| 帧头(1B) | 保留(1B) | 机号(1B) | 命令字(1B) | 数据(3B) | 校验和(1B) |
COMMAND_HEADER: Final[int] = 0x7E  # 下行帧头
COMMAND_RESERVED: Final[int] = 0x00  # 保留字节
COMMAND_FRAME_SIZE: Final[int] = 8  # 命令帧固定长度
COMMAND_DATA_SIZE: Final[int] = 3  # 数据区长度

# 应答帧格式（18字节）
RESPONSE_HEADER: Final[int] = 0x7F  # 上行帧头
RESPONSE_FRAME_SIZE: Final[int] = 18  # 应答帧固定长度
EXECUTION_SUCCESS: Final[int] = 0x55  # 命令执行成功标志

# 应答帧字段偏移
OFFSET_VERSION: Final[int] = 1
OFFSET_MACHINE_NUMBER: Final[int] = 2
OFFSET_FAULT_EVENT: Final[int] = 3
OFFSET_GATE_STATUS: Final[int] = 4
OFFSET_ALARM_EVENT: Final[int] = 5
OFFSET_LEFT_COUNT: Final[int] = 6  # 3字节，大端
OFFSET_RIGHT_COUNT: Final[int] = 9  # 3字节，大端
OFFSET_INFRARED_STATUS: Final[int] = 12
OFFSET_COMMAND_EXECUTION: Final[int] = 13
OFFSET_POWER_VOLTAGE: Final[int] = 14
OFFSET_CHECKSUM: Final[int] = 17
COUNTER_SIZE: Final[int] = 3

RESTART_CONFIRM: Final[int] = 0x60  # 重启确认字节

# 串口配置默认值
DEFAULT_PORT: Final[str] = "/dev/ttyUSB0"
DEFAULT_BAUDRATE: Final[int] = 9600  # 默认波特率
DEFAULT_BYTESIZE: Final[int] = 8  # 默认数据位
DEFAULT_STOPBITS: Final[int] = 1  # 默认停止位
DEFAULT_PARITY: Final[str] = "none"  # 默认校验方式
VALID_PARITIES: Final[Tuple[str, ...]] = ("none", "odd", "even", "mark", "space")

# 会话配置默认值
DEFAULT_TIMEOUT: Final[float] = 5.0  # 单次操作超时(秒)
DEFAULT_READ_TIMEOUT: Final[float] = 2.0  # 读超时(秒)
DEFAULT_WRITE_TIMEOUT: Final[float] = 2.0  # 写超时(秒)
DEFAULT_DEVICE_ID: Final[int] = 0x01  # 默认机号
DEFAULT_RETRY_COUNT: Final[int] = 3  # 默认重试次数
DEFAULT_MAX_READ_ATTEMPTS: Final[int] = 30  # 单次应答最多读取次数
READ_CHUNK_SIZE: Final[int] = 32  # 每次读取的字节数

# 重试退避步长(秒)：第N次重试前等待 N * RETRY_BACKOFF_STEP
RETRY_BACKOFF_STEP: Final[float] = 0.1
