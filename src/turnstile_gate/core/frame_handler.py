"""
数据帧处理模块
==============

负责闸机命令帧的封装和应答帧的解析，不涉及任何串口读写。
"""

from typing import Union

from ..config.constants import (
    COMMAND_DATA_SIZE,
    COMMAND_FRAME_SIZE,
    COMMAND_HEADER,
    COMMAND_RESERVED,
    EXECUTION_SUCCESS,
    GateCommand,
    OFFSET_CHECKSUM,
    OFFSET_COMMAND_EXECUTION,
    OFFSET_MACHINE_NUMBER,
    RESPONSE_FRAME_SIZE,
    RESPONSE_HEADER,
)
from ..errors import (
    CommandFailedError,
    DataTooLargeError,
    DeviceIDMismatchError,
    FrameTooShortError,
    InvalidHeaderError,
)
from .checksum import calculate_tx_checksum, validate_rx_checksum
from .gate_structures import ResponseFrame
from ..utils.logger import get_logger, format_hex

logger = get_logger(__name__)


class FrameHandler:
    """数据帧处理器"""

    @staticmethod
    def build_command(
        device_id: int, command: Union[GateCommand, int], data: bytes = b""
    ) -> bytes:
        """
        将命令和数据打包成命令帧

        命令帧格式：| 0x7E | 0x00 | 机号 | 命令字 | Data0 | Data1 | Data2 | 校验和 |

        Args:
            device_id: 目标闸机机号
            command: 命令字，可以是GateCommand枚举或整数
            data: 命令数据，最多3字节，不足部分补0x00

        Returns:
            8字节命令帧

        Raises:
            DataTooLargeError: 数据超过3字节
            ValueError: 机号或命令字超出单字节范围

        Examples:
            >>> FrameHandler.build_command(0x01, GateCommand.GET_STATUS).hex()
            '7e000110000000ee'
        """
        if len(data) > COMMAND_DATA_SIZE:
            raise DataTooLargeError(len(data), COMMAND_DATA_SIZE)
        if not 0 <= device_id <= 0xFF:
            raise ValueError(f"机号超出范围: {device_id}")
        if not 0 <= int(command) <= 0xFF:
            raise ValueError(f"命令字超出范围: {int(command)}")

        frame = bytearray(COMMAND_FRAME_SIZE)
        frame[0] = COMMAND_HEADER
        frame[1] = COMMAND_RESERVED
        frame[2] = device_id
        frame[3] = int(command)
        frame[4 : 4 + len(data)] = data

        # 校验范围不含帧头和校验和本身
        frame[7] = calculate_tx_checksum(bytes(frame[1:7]))

        return bytes(frame)

    @staticmethod
    def parse_response(raw: bytes, expected_device_id: int) -> ResponseFrame:
        """
        解析应答帧

        依次检查长度、帧头、机号和命令执行状态。上行校验和只做诊断记录，
        不作为拒绝依据，成功与否以命令执行状态字节为准。

        Args:
            raw: 收到的应答数据，超过18字节的部分被忽略
            expected_device_id: 会话配置的机号

        Returns:
            解析后的应答帧

        Raises:
            FrameTooShortError: 不足18字节
            InvalidHeaderError: 帧头不是0x7F
            DeviceIDMismatchError: 机号与会话配置不一致
            CommandFailedError: 命令执行状态不是0x55
        """
        if len(raw) < RESPONSE_FRAME_SIZE:
            raise FrameTooShortError(len(raw), RESPONSE_FRAME_SIZE)

        if raw[0] != RESPONSE_HEADER:
            raise InvalidHeaderError(raw[0], RESPONSE_HEADER)

        machine_number = raw[OFFSET_MACHINE_NUMBER]
        if machine_number != expected_device_id:
            raise DeviceIDMismatchError(expected_device_id, machine_number)

        execution = raw[OFFSET_COMMAND_EXECUTION]
        if execution != EXECUTION_SUCCESS:
            raise CommandFailedError(execution, EXECUTION_SUCCESS)

        checksum_valid = validate_rx_checksum(bytes(raw[1 : OFFSET_CHECKSUM + 1]))
        if not checksum_valid:
            # 上行校验和仅用于诊断，成功与否以命令执行状态字节为准
            logger.debug(f"应答帧校验和不符（仅记录）: {format_hex(raw[:RESPONSE_FRAME_SIZE])}")

        return ResponseFrame.from_bytes(raw, checksum_valid)


# 模块级函数别名
def build_command(
    device_id: int, command: Union[GateCommand, int], data: bytes = b""
) -> bytes:
    return FrameHandler.build_command(device_id, command, data)


def parse_response(raw: bytes, expected_device_id: int) -> ResponseFrame:
    return FrameHandler.parse_response(raw, expected_device_id)
