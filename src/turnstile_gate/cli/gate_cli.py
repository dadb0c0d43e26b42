"""
闸机命令行接口
==============

把命令行子命令映射到 GateDevice 的操作，并打印结果。
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple

from ..core.gate_device import GateDevice
from ..core.gate_structures import DeviceInfo, DeviceStatus
from ..utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CliCommand:
    """命令行命令描述"""

    name: str
    description: str
    category: str
    needs_value: bool = False


COMMANDS: Tuple[CliCommand, ...] = (
    CliCommand("status", "查询闸机状态", "状态查询"),
    CliCommand("info", "查询设备信息", "状态查询"),
    CliCommand("left-open", "左向开闸", "通行控制", needs_value=True),
    CliCommand("left-always-open", "左向常开", "通行控制"),
    CliCommand("right-open", "右向开闸", "通行控制", needs_value=True),
    CliCommand("right-always-open", "右向常开", "通行控制"),
    CliCommand("close-gate", "关闸", "通行控制"),
    CliCommand("forbid-left", "禁止左向通行", "通行限制"),
    CliCommand("forbid-right", "禁止右向通行", "通行限制"),
    CliCommand("disable-restrictions", "取消全部通行限制", "通行限制"),
    CliCommand("reset-left-counters", "左侧计数清零", "计数器"),
    CliCommand("reset-right-counters", "右侧计数清零", "计数器"),
    CliCommand("set-params", "设置设备参数", "设备配置", needs_value=True),
    CliCommand("restart", "重启设备", "设备配置"),
)


def command_names() -> List[str]:
    """可用命令名列表"""
    return [command.name for command in COMMANDS]


def format_commands_help() -> str:
    """按类别生成命令说明"""
    categories: Dict[str, List[CliCommand]] = {}
    for command in COMMANDS:
        categories.setdefault(command.category, []).append(command)

    lines = ["可用命令："]
    for category, commands in categories.items():
        lines.append(f"  {category}:")
        for command in commands:
            suffix = "（使用 --value 指定参数）" if command.needs_value else ""
            lines.append(f"    {command.name:<22} {command.description}{suffix}")
    return "\n".join(lines)


def format_status(status: DeviceStatus) -> str:
    """格式化设备状态"""
    return "\n".join(
        [
            "闸机状态：",
            f"  机号: {status.machine_number}",
            f"  版本号: {status.version_number}",
            f"  故障事件: 0x{status.fault_event:02X}",
            f"  闸门状态: 0x{status.gate_status:02X}",
            f"  报警事件: 0x{status.alarm_event:02X}",
            f"  红外状态: 0x{status.infrared_status:02X}",
            f"  供电电压: {status.power_supply_voltage}",
            f"  左向通行计数: {status.left_pedestrian_count}",
            f"  右向通行计数: {status.right_pedestrian_count}",
        ]
    )


def format_device_info(info: DeviceInfo) -> str:
    """格式化设备信息"""
    return "\n".join(
        [
            "设备信息：",
            f"  版本: {info.version_string}",
            f"  机型: {info.machine_type}",
        ]
    )


class GateCLI:
    """闸机命令行执行器"""

    def __init__(self, device: GateDevice):
        self.device = device
        self._handlers: Dict[str, Callable[[int], None]] = {
            "status": self._status,
            "info": self._info,
            "left-open": self._with_value("左向开闸", self.device.left_open),
            "left-always-open": self._simple("设置左向常开", self.device.left_always_open),
            "right-open": self._with_value("右向开闸", self.device.right_open),
            "right-always-open": self._simple("设置右向常开", self.device.right_always_open),
            "close-gate": self._simple("关闸", self.device.close_gate),
            "forbid-left": self._simple("禁止左向通行", self.device.forbid_left_passage),
            "forbid-right": self._simple("禁止右向通行", self.device.forbid_right_passage),
            "disable-restrictions": self._simple("取消通行限制", self.device.disable_restrictions),
            "reset-left-counters": self._simple("左侧计数清零", self.device.reset_left_counters),
            "reset-right-counters": self._simple("右侧计数清零", self.device.reset_right_counters),
            "set-params": self._with_value("设置参数", self.device.set_parameters),
            "restart": self._simple("重启设备", self.device.restart_device),
        }

    def execute(self, command: str, value: int = 1) -> None:
        """
        执行一条命令

        Args:
            command: 命令名
            value: 需要参数的命令所使用的参数值

        Raises:
            ValueError: 未知命令
            GateError: 设备交互失败
        """
        handler = self._handlers.get(command)
        if handler is None:
            raise ValueError(f"未知命令: {command}，可用命令: {', '.join(command_names())}")
        logger.debug(f"执行命令: {command}")
        handler(value)

    def _status(self, _value: int) -> None:
        print(format_status(self.device.get_status()))

    def _info(self, _value: int) -> None:
        print(format_device_info(self.device.get_device_info()))

    @staticmethod
    def _simple(label: str, operation: Callable[[], None]) -> Callable[[int], None]:
        def run(_value: int) -> None:
            print(f"{label}...")
            operation()
            print(f"✅ {label}完成")

        return run

    @staticmethod
    def _with_value(label: str, operation: Callable[[int], None]) -> Callable[[int], None]:
        def run(value: int) -> None:
            print(f"{label}，参数 {value}...")
            operation(value)
            print(f"✅ {label}完成")

        return run
