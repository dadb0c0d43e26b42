#!/usr/bin/env python3
"""
闸机串口驱动 - 模块CLI入口
==========================

支持通过 python -m turnstile_gate 调用
"""

import sys
import argparse
import logging

from . import __version__
from .cli.gate_cli import GateCLI, command_names, format_commands_help
from .config.constants import (
    DEFAULT_BAUDRATE,
    DEFAULT_DEVICE_ID,
    DEFAULT_PORT,
    DEFAULT_RETRY_COUNT,
    DEFAULT_TIMEOUT,
)
from .config.settings import SessionConfig
from .core.gate_device import GateDevice
from .errors import GateError
from .utils.logger import get_logger, set_log_level

logger = get_logger("turnstile_gate.cli")

PROGRAM_NAME = "闸机串口控制工具"


def create_parser():
    """创建命令行参数解析器"""
    parser = argparse.ArgumentParser(
        prog="turnstile-gate",
        description=f"{PROGRAM_NAME} v{__version__}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=format_commands_help()
        + """

使用示例：
  python -m turnstile_gate status
  python -m turnstile_gate --port /dev/ttyUSB1 --baudrate 115200 info
  python -m turnstile_gate left-open --value 1
  python -m turnstile_gate close-gate
        """,
    )

    parser.add_argument(
        "--version", action="version", version=f"{PROGRAM_NAME} v{__version__}"
    )
    parser.add_argument("--port", default=DEFAULT_PORT, help=f"串口号（默认{DEFAULT_PORT}）")
    parser.add_argument("--baudrate", type=int, default=DEFAULT_BAUDRATE, help=f"波特率（默认{DEFAULT_BAUDRATE}）")
    parser.add_argument("--device-id", type=int, default=DEFAULT_DEVICE_ID, help=f"闸机机号（默认{DEFAULT_DEVICE_ID}）")
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT, help=f"操作超时秒数（默认{DEFAULT_TIMEOUT}）")
    parser.add_argument("--retry", type=int, default=DEFAULT_RETRY_COUNT, help=f"重试次数（默认{DEFAULT_RETRY_COUNT}）")
    parser.add_argument("--value", type=int, default=1, help="需要参数的命令使用的参数值（默认1）")
    parser.add_argument("--debug", action="store_true", help="输出调试日志（含收发帧）")
    parser.add_argument("command", choices=command_names(), metavar="command", help="要执行的命令")

    return parser


def main(argv=None):
    """主函数"""
    parser = create_parser()
    args = parser.parse_args(argv)

    set_log_level(logging.DEBUG if args.debug else logging.WARNING)

    try:
        config = SessionConfig(
            port=args.port,
            baudrate=args.baudrate,
            device_id=args.device_id,
            timeout=args.timeout,
            retry_count=args.retry,
        )
        with GateDevice(config) as device:
            GateCLI(device).execute(args.command, args.value)

    except KeyboardInterrupt:
        print("\n\n👋 用户中断程序，退出")
        sys.exit(1)
    except (GateError, ValueError) as e:
        logger.error(f"命令执行失败: {e}")
        print(f"\n💥 命令执行失败: {e}")
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
