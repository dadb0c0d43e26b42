"""
命令行接口模块
==============

提供闸机操作的命令行接口。
"""

from .gate_cli import GateCLI, COMMANDS

__all__ = [
    "GateCLI",
    "COMMANDS",
]
