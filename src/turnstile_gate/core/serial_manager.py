"""
串口管理模块
============

定义闸机会话所依赖的串口接口 TransportPort，并提供基于 pyserial 的实现。
"""

import serial
from typing import Optional, Protocol

from ..config.settings import SessionConfig
from ..errors import TransportError
from ..utils.logger import get_logger

logger = get_logger(__name__)


class TransportPort(Protocol):
    """会话使用的最小串口接口，失败时抛出 TransportError"""

    def open(self) -> None: ...

    def close(self) -> None: ...

    def read(self, size: int) -> bytes: ...

    def write(self, data: bytes) -> int: ...

    def set_read_timeout(self, timeout: float) -> None: ...

    def set_write_timeout(self, timeout: float) -> None: ...


class SerialManager:
    """串口管理器"""

    def __init__(self, config: SessionConfig):
        """
        初始化串口管理器

        Args:
            config: 会话配置对象，串口参数在构造配置时已校验
        """
        self.config = config
        self._port: Optional[serial.Serial] = None

    @property
    def port(self) -> Optional[serial.Serial]:
        """获取串口对象"""
        return self._port

    @property
    def is_open(self) -> bool:
        """检查串口是否已打开"""
        return self._port is not None and self._port.is_open

    def open(self) -> None:
        """
        打开串口连接

        Raises:
            TransportError: 串口无法打开
        """
        if self.is_open:
            logger.warning(f"串口 {self.config.port} 已经打开")
            return

        try:
            self._port = serial.Serial(**self.config.to_serial_kwargs())
        except (serial.SerialException, ValueError) as e:
            self._port = None
            raise TransportError(f"打开串口 {self.config.port} 失败: {e}") from e

        logger.info(f"成功打开串口 {self.config.port}")

    def close(self) -> None:
        """关闭串口连接，重复调用无副作用"""
        port, self._port = self._port, None
        if port is None or not port.is_open:
            return
        try:
            port.close()
        except (serial.SerialException, OSError) as e:
            raise TransportError(f"关闭串口 {self.config.port} 失败: {e}") from e
        logger.info(f"已关闭串口 {self.config.port}")

    def write(self, data: bytes) -> int:
        """
        向串口写入数据

        Args:
            data: 要写入的字节数据

        Returns:
            实际写入的字节数

        Raises:
            TransportError: 串口未打开、写超时或写入不完整
        """
        port = self._require_port()
        try:
            bytes_written = port.write(data)
            port.flush()
        except (serial.SerialException, OSError) as e:
            raise TransportError(f"写入数据失败: {e}") from e

        if bytes_written != len(data):
            raise TransportError(f"写入不完整: {bytes_written}/{len(data)} 字节")
        return bytes_written

    def read(self, size: int) -> bytes:
        """
        从串口读取至多 size 字节

        读超时到期时返回已收到的数据（可能为空）。

        Raises:
            TransportError: 串口未打开或读取出错
        """
        port = self._require_port()
        try:
            # 先取缓冲区已有的数据，没有时阻塞等待至少1字节
            waiting = port.in_waiting
            return port.read(min(size, waiting) if waiting else 1)
        except (serial.SerialException, OSError) as e:
            raise TransportError(f"读取数据失败: {e}") from e

    def set_read_timeout(self, timeout: float) -> None:
        """设置读超时(秒)"""
        self._require_port().timeout = timeout

    def set_write_timeout(self, timeout: float) -> None:
        """设置写超时(秒)"""
        self._require_port().write_timeout = timeout

    def _require_port(self) -> serial.Serial:
        if not self.is_open:
            raise TransportError("串口未打开")
        return self._port

    def __enter__(self):
        """支持with语句"""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """支持with语句"""
        self.close()
