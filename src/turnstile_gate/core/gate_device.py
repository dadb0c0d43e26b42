"""
闸机设备会话模块
================

GateDevice 独占一个串口，负责 写命令 -> 同步读取应答 -> 解析校验 -> 重试
的完整交互流程，并在其上提供按命令划分的操作接口。

协议是半双工的请求/应答，同一会话任何时刻只有一条命令在途。
"""

import threading
import time
from typing import Callable, Optional, Union

from ..config.constants import GateCommand, RESTART_CONFIRM
from ..config.settings import SessionConfig
from ..errors import (
    CommandError,
    FramingError,
    GateError,
    NotOpenError,
    TransportError,
)
from .frame_handler import FrameHandler
from .frame_reader import read_response_frame
from .gate_structures import DeviceInfo, DeviceStatus, ResponseFrame
from .serial_manager import SerialManager, TransportPort
from ..utils.logger import get_logger, format_hex
from ..utils.retry import backoff_sleep

logger = get_logger(__name__)

PortFactory = Callable[[SessionConfig], TransportPort]


class GateDevice:
    """闸机设备会话"""

    def __init__(self, config: SessionConfig, port_factory: PortFactory = SerialManager):
        """
        初始化设备会话，此时不打开串口

        Args:
            config: 会话配置
            port_factory: 根据配置创建串口对象的工厂，默认使用 pyserial
        """
        self.config = config
        self._port_factory = port_factory
        self._port: Optional[TransportPort] = None
        # 保护打开状态与串口对象，同时保证一次只有一条命令在途
        self._lock = threading.RLock()

    @property
    def is_open(self) -> bool:
        """检查会话是否已打开"""
        # 单次属性读取，不等待在途命令
        return self._port is not None

    def open(self) -> None:
        """
        打开串口并设置读写超时，已打开时直接返回

        Raises:
            TransportError: 串口打开或超时设置失败
        """
        with self._lock:
            if self._port is not None:
                return

            port = self._port_factory(self.config)
            try:
                port.open()
                port.set_read_timeout(self.config.read_timeout)
                port.set_write_timeout(self.config.write_timeout)
            except TransportError:
                self._safe_close(port)
                raise
            except (OSError, ValueError) as e:
                self._safe_close(port)
                raise TransportError(f"打开设备失败: {e}") from e

            self._port = port
            logger.info(f"设备已打开: 串口 {self.config.port}, 机号 0x{self.config.device_id:02X}")

    def close(self) -> None:
        """
        关闭会话，重复调用无副作用

        即使底层关闭出错，会话也会进入关闭状态。

        Raises:
            TransportError: 底层串口关闭失败
        """
        with self._lock:
            port, self._port = self._port, None
            if port is None:
                return
            try:
                port.close()
            finally:
                logger.info("设备已关闭")

    @staticmethod
    def _safe_close(port: TransportPort) -> None:
        try:
            port.close()
        except TransportError as e:
            logger.warning(f"关闭半打开的串口失败: {e}")

    def send_command(
        self,
        command: Union[GateCommand, int],
        data: bytes = b"",
        cancel_event: Optional[threading.Event] = None,
    ) -> ResponseFrame:
        """
        发送命令并等待应答

        写入失败、读取失败（含帧不完整、无数据）视为瞬时故障，按线性退避重试；
        应答已完整收到但被拒绝（机号不符、设备执行失败）时立即抛出，不再重试。

        Args:
            command: 命令字
            data: 命令数据，最多3字节
            cancel_event: 取消信号

        Returns:
            解析成功的应答帧

        Raises:
            NotOpenError: 会话未打开
            DataTooLargeError: 数据超过3字节
            OperationCancelledError: 操作被取消
            ProtocolError: 应答被拒绝
            CommandError: 重试耗尽
        """
        with self._lock:
            if self._port is None:
                raise NotOpenError()

            frame = FrameHandler.build_command(self.config.device_id, command, data)
            command_name = _command_name(command)
            max_attempts = self.config.max_attempts
            last_error: Optional[GateError] = None

            for attempt in range(max_attempts):
                if attempt > 0:
                    logger.warning(f"重试命令 {command_name}: 第{attempt}次, 上次错误: {last_error}")
                    backoff_sleep(attempt, logger=logger)

                logger.debug(f"TX {command_name}: {format_hex(frame)}")
                try:
                    self._port.write(frame)
                except TransportError as e:
                    logger.warning(f"写入命令失败: {e}")
                    last_error = e
                    if attempt == max_attempts - 1:
                        raise CommandError(
                            f"命令 {command_name} 发送失败，已尝试 {max_attempts} 次: {e}",
                            max_attempts,
                            e,
                        ) from e
                    continue

                deadline = time.monotonic() + self.config.timeout
                try:
                    raw = read_response_frame(
                        self._port,
                        max_attempts=self.config.max_read_attempts,
                        cancel_event=cancel_event,
                        deadline=deadline,
                    )
                except (TransportError, FramingError) as e:
                    logger.warning(f"读取应答失败: {e}")
                    last_error = e
                    if attempt == max_attempts - 1:
                        raise CommandError(
                            f"命令 {command_name} 读取应答失败，已尝试 {max_attempts} 次: {e}",
                            max_attempts,
                            e,
                        ) from e
                    continue

                logger.debug(f"RX {command_name}: {format_hex(raw)}")
                # 解析失败不重试
                return FrameHandler.parse_response(raw, self.config.device_id)

            raise CommandError(
                f"命令 {command_name} 在 {max_attempts} 次尝试后仍未得到有效应答",
                max_attempts,
                last_error,
            )

    # ------------------------------------------------------------------
    # 状态查询
    # ------------------------------------------------------------------

    def get_status(self, cancel_event: Optional[threading.Event] = None) -> DeviceStatus:
        """查询设备状态"""
        response = self.send_command(GateCommand.GET_STATUS, cancel_event=cancel_event)
        return DeviceStatus.from_response(response)

    def get_device_info(self, cancel_event: Optional[threading.Event] = None) -> DeviceInfo:
        """查询设备信息（基于状态查询应答）"""
        response = self.send_command(GateCommand.GET_STATUS, cancel_event=cancel_event)
        return DeviceInfo.from_response(response)

    # ------------------------------------------------------------------
    # 通行控制
    # ------------------------------------------------------------------

    def left_open(self, value: int, cancel_event: Optional[threading.Event] = None) -> None:
        """左向开闸"""
        self.send_command(GateCommand.LEFT_OPEN, bytes([value]), cancel_event)

    def left_always_open(self, cancel_event: Optional[threading.Event] = None) -> None:
        """左向常开"""
        self.send_command(GateCommand.LEFT_ALWAYS_OPEN, cancel_event=cancel_event)

    def right_open(self, value: int, cancel_event: Optional[threading.Event] = None) -> None:
        """右向开闸"""
        self.send_command(GateCommand.RIGHT_OPEN, bytes([value]), cancel_event)

    def right_always_open(self, cancel_event: Optional[threading.Event] = None) -> None:
        self.send_command(GateCommand.RIGHT_ALWAYS_OPEN, cancel_event=cancel_event)

    def close_gate(self, cancel_event: Optional[threading.Event] = None) -> None:
        self.send_command(GateCommand.CLOSE_GATE, cancel_event=cancel_event)

    # ------------------------------------------------------------------
    # 通行限制
    # ------------------------------------------------------------------

    def forbid_left_passage(self, cancel_event: Optional[threading.Event] = None) -> None:
        self.send_command(GateCommand.FORBID_LEFT_PASSAGE, cancel_event=cancel_event)

    def forbid_right_passage(self, cancel_event: Optional[threading.Event] = None) -> None:
        self.send_command(GateCommand.FORBID_RIGHT_PASSAGE, cancel_event=cancel_event)

    def disable_restrictions(self, cancel_event: Optional[threading.Event] = None) -> None:
        """取消全部通行限制"""
        self.send_command(GateCommand.DISABLE_RESTRICTIONS, cancel_event=cancel_event)

    # ------------------------------------------------------------------
    # 计数器与设备配置
    # ------------------------------------------------------------------

    def reset_left_counters(self, cancel_event: Optional[threading.Event] = None) -> None:
        self.send_command(GateCommand.RESET_LEFT_COUNTERS, cancel_event=cancel_event)

    def reset_right_counters(self, cancel_event: Optional[threading.Event] = None) -> None:
        self.send_command(GateCommand.RESET_RIGHT_COUNTERS, cancel_event=cancel_event)

    def set_parameters(self, value: int, cancel_event: Optional[threading.Event] = None) -> None:
        """设置设备参数"""
        self.send_command(GateCommand.SET_PARAMETERS, bytes([value]), cancel_event)

    def restart_device(self, cancel_event: Optional[threading.Event] = None) -> None:
        """重启设备，需携带确认字节0x60"""
        self.send_command(GateCommand.RESTART_DEVICE, bytes([RESTART_CONFIRM]), cancel_event)

    def __enter__(self):
        """支持with语句"""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """支持with语句，已有异常时关闭失败只记录，不覆盖原异常"""
        if exc_type is None:
            self.close()
            return
        try:
            self.close()
        except TransportError as e:
            logger.warning(f"关闭设备失败: {e}")


def _command_name(command: Union[GateCommand, int]) -> str:
    try:
        return GateCommand(command).name
    except ValueError:
        return f"UNKNOWN(0x{int(command):02X})"
