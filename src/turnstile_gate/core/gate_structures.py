"""
闸机数据结构定义
================

定义应答帧以及由应答帧派生出的设备状态、设备信息。
"""

from dataclasses import dataclass
from typing import Tuple

from ..config.constants import (
    COUNTER_SIZE,
    OFFSET_ALARM_EVENT,
    OFFSET_CHECKSUM,
    OFFSET_COMMAND_EXECUTION,
    OFFSET_FAULT_EVENT,
    OFFSET_GATE_STATUS,
    OFFSET_INFRARED_STATUS,
    OFFSET_LEFT_COUNT,
    OFFSET_MACHINE_NUMBER,
    OFFSET_POWER_VOLTAGE,
    OFFSET_RIGHT_COUNT,
    OFFSET_VERSION,
    RESPONSE_FRAME_SIZE,
)


def decode_counter(data: bytes) -> int:
    """将3字节大端计数值转换为整数"""
    return (data[0] << 16) | (data[1] << 8) | data[2]


@dataclass(frozen=True)
class ResponseFrame:
    """应答帧数据结构（18字节）"""

    version_number: int  # 版本号
    machine_number: int  # 机号
    fault_event: int  # 故障事件
    gate_status: int  # 闸门状态
    alarm_event: int  # 报警事件
    left_count: bytes  # 左向通行计数（3字节，大端）
    right_count: bytes  # 右向通行计数（3字节，大端）
    infrared_status: int  # 红外状态
    command_execution: int  # 命令执行状态，0x55为成功
    power_supply_voltage: int  # 供电电压
    checksum: int  # 校验和
    checksum_valid: bool  # 上行校验结果，仅供诊断
    raw: bytes  # 原始帧

    @classmethod
    def from_bytes(cls, data: bytes, checksum_valid: bool) -> "ResponseFrame":
        """按固定偏移提取字段，调用方需保证 data 至少18字节"""
        frame = bytes(data[:RESPONSE_FRAME_SIZE])
        return cls(
            version_number=frame[OFFSET_VERSION],
            machine_number=frame[OFFSET_MACHINE_NUMBER],
            fault_event=frame[OFFSET_FAULT_EVENT],
            gate_status=frame[OFFSET_GATE_STATUS],
            alarm_event=frame[OFFSET_ALARM_EVENT],
            left_count=frame[OFFSET_LEFT_COUNT : OFFSET_LEFT_COUNT + COUNTER_SIZE],
            right_count=frame[OFFSET_RIGHT_COUNT : OFFSET_RIGHT_COUNT + COUNTER_SIZE],
            infrared_status=frame[OFFSET_INFRARED_STATUS],
            command_execution=frame[OFFSET_COMMAND_EXECUTION],
            power_supply_voltage=frame[OFFSET_POWER_VOLTAGE],
            checksum=frame[OFFSET_CHECKSUM],
            checksum_valid=checksum_valid,
            raw=frame,
        )


@dataclass(frozen=True)
class DeviceStatus:
    """设备状态"""

    machine_number: int
    version_number: int
    fault_event: int
    gate_status: int
    alarm_event: int
    infrared_status: int
    power_supply_voltage: int
    left_pedestrian_count: int  # 左向通行人数
    right_pedestrian_count: int  # 右向通行人数

    @classmethod
    def from_response(cls, response: ResponseFrame) -> "DeviceStatus":
        """从应答帧提取设备状态"""
        return cls(
            machine_number=response.machine_number,
            version_number=response.version_number,
            fault_event=response.fault_event,
            gate_status=response.gate_status,
            alarm_event=response.alarm_event,
            infrared_status=response.infrared_status,
            power_supply_voltage=response.power_supply_voltage,
            left_pedestrian_count=decode_counter(response.left_count),
            right_pedestrian_count=decode_counter(response.right_count),
        )


@dataclass(frozen=True)
class DeviceInfo:
    """设备信息"""

    version: Tuple[int, int, int]  # 固件版本 [主, 次, 修订]
    machine_type: int  # 机型

    @classmethod
    def from_response(cls, response: ResponseFrame) -> "DeviceInfo":
        """状态应答只携带主版本号，次版本和修订号固定为0"""
        return cls(
            version=(response.version_number, 0, 0),
            machine_type=response.machine_number,
        )

    @property
    def version_string(self) -> str:
        return ".".join(str(part) for part in self.version)
