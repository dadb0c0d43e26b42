"""
应答帧同步读取模块
==================

串口是无边界的字节流：一次读取可能只拿到半帧，也可能在帧头之前
夹杂总线噪声。本模块从字节流中找出第一个0x7F帧头，丢弃其之前的
数据，累积到18字节后切出一帧。
"""

import threading
import time
from typing import Optional

from ..config.constants import READ_CHUNK_SIZE, RESPONSE_FRAME_SIZE, RESPONSE_HEADER
from ..errors import (
    IncompleteFrameError,
    NoDataError,
    OperationCancelledError,
    TransportError,
)
from .serial_manager import TransportPort
from ..utils.logger import get_logger, format_hex

logger = get_logger(__name__)


def read_response_frame(
    port: TransportPort,
    *,
    max_attempts: int,
    chunk_size: int = READ_CHUNK_SIZE,
    cancel_event: Optional[threading.Event] = None,
    deadline: Optional[float] = None,
) -> bytes:
    """
    读取一帧完整的应答帧

    Args:
        port: 串口
        max_attempts: 最多读取次数
        chunk_size: 每次读取的字节数
        cancel_event: 取消信号，每次读取前检查
        deadline: time.monotonic() 截止时间，到期后不再发起新的读取

    Returns:
        以0x7F开头的18字节应答帧

    Raises:
        OperationCancelledError: 读取前检测到取消信号
        IncompleteFrameError: 预算耗尽时只收到部分数据，partial 为已累积的字节
        NoDataError: 预算耗尽时未收到任何数据
        TransportError: 尚未收到任何数据时串口读取出错
    """
    accumulated = bytearray()
    header_locked = False

    for attempt in range(max_attempts):
        if cancel_event is not None and cancel_event.is_set():
            raise OperationCancelledError("读取应答时操作被取消")
        if deadline is not None and attempt > 0 and time.monotonic() >= deadline:
            logger.debug(f"读取超过操作超时，已尝试 {attempt} 次")
            break

        try:
            chunk = port.read(chunk_size)
        except TransportError as e:
            if not accumulated:
                raise
            logger.debug(f"读取出错，保留已收到的 {len(accumulated)} 字节继续读取: {e}")
            continue

        if not chunk:
            continue

        accumulated.extend(chunk)
        logger.debug(
            f"收到数据块: {len(chunk)} 字节, 累计 {len(accumulated)} 字节 {format_hex(chunk)}"
        )

        # 帧头一旦锁定，本次读取不再重新搜索
        if not header_locked:
            header_pos = accumulated.find(RESPONSE_HEADER)
            if header_pos >= 0:
                header_locked = True
                if header_pos > 0:
                    logger.debug(f"丢弃帧头之前的 {header_pos} 字节")
                    del accumulated[:header_pos]

        if header_locked and len(accumulated) >= RESPONSE_FRAME_SIZE:
            frame = bytes(accumulated[:RESPONSE_FRAME_SIZE])
            logger.debug(f"收到完整应答帧: {format_hex(frame)}")
            return frame

    if accumulated:
        logger.debug(
            f"读取超时，帧不完整: 收到 {len(accumulated)} 字节, 期望 {RESPONSE_FRAME_SIZE} 字节"
        )
        raise IncompleteFrameError(bytes(accumulated), RESPONSE_FRAME_SIZE)

    logger.debug("读取超时，未收到数据")
    raise NoDataError()
