"""
日志记录模块
============

提供统一的日志记录功能，支持彩色输出、调用位置追踪和帧数据十六进制输出。
"""

import datetime
import logging
import sys
from typing import Optional
from pathlib import Path

ROOT_LOGGER_NAME = "turnstile_gate"


class ColoredFormatter(logging.Formatter):
    """彩色日志格式化器"""

    # ANSI颜色代码
    COLORS = {
        'DEBUG': '\033[36m',    # 青色
        'INFO': '\033[0m',      # 默认色
        'WARNING': '\033[33m',  # 黄色
        'ERROR': '\033[31m',    # 红色
        'CRITICAL': '\033[35m', # 紫色
        'RESET': '\033[0m'      # 重置
    }

    def format(self, record):
        """格式化日志记录"""
        # 调用位置直接取自日志记录
        caller_filename = Path(record.pathname).name
        caller_function = record.funcName
        caller_line = record.lineno

        now = datetime.datetime.fromtimestamp(record.created)
        milliseconds = now.microsecond // 1000
        timestamp = now.strftime(f"%Y-%m-%d %H:%M:%S.{milliseconds:03d}")

        color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
        reset = self.COLORS['RESET']

        formatted_message = (
            f"{color}[{timestamp}] [{record.levelname}] {record.getMessage()} "
            f"[{caller_filename}.{caller_function}():{caller_line}]{reset}"
        )

        if record.exc_info:
            formatted_message += "\n" + self.formatException(record.exc_info)

        return formatted_message


# 已配置的日志器
_loggers = {}


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    console_output: bool = True
) -> logging.Logger:
    """
    设置日志器

    Args:
        name: 日志器名称
        level: 日志级别
        log_file: 日志文件路径，None表示不写入文件
        console_output: 是否输出到控制台

    Returns:
        配置好的日志器
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    logger.handlers.clear()

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(ColoredFormatter())
        logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    # 防止重复输出
    logger.propagate = False

    _loggers[name] = logger
    return logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    获取日志器实例

    包内模块的日志器挂在根日志器之下，由根日志器统一输出，
    因此调整根日志器级别即可控制整个驱动的日志。

    Args:
        name: 日志器名称

    Returns:
        日志器实例
    """
    if name in _loggers:
        return _loggers[name]

    if name == ROOT_LOGGER_NAME or not name.startswith(ROOT_LOGGER_NAME + "."):
        return setup_logger(name)

    get_logger(ROOT_LOGGER_NAME)
    logger = logging.getLogger(name)
    _loggers[name] = logger
    return logger


def set_log_level(level: int) -> None:
    """调整驱动根日志器的级别"""
    get_logger(ROOT_LOGGER_NAME).setLevel(level)


def format_hex(data: bytes) -> str:
    """以 [7E 00 01 10 ...] 形式输出字节串"""
    return "[" + " ".join(f"{byte:02X}" for byte in data) + "]"
