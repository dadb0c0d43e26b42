#!/usr/bin/env python3
"""
命令行测试
==========

测试 GateCLI 命令分发、输出格式以及 __main__ 入口的退出码。
"""

import logging

import pytest
from unittest.mock import MagicMock, patch

import turnstile_gate.__main__ as cli_main
from turnstile_gate.__main__ import create_parser, main
from turnstile_gate.cli.gate_cli import COMMANDS, GateCLI, command_names, format_commands_help
from turnstile_gate.core.gate_device import GateDevice
from turnstile_gate.core.gate_structures import DeviceInfo, DeviceStatus
from turnstile_gate.errors import CommandError, TransportError
from turnstile_gate.utils.logger import ROOT_LOGGER_NAME


def make_status() -> DeviceStatus:
    return DeviceStatus(
        machine_number=1,
        version_number=2,
        fault_event=0,
        gate_status=0x10,
        alarm_event=0,
        infrared_status=0x03,
        power_supply_voltage=24,
        left_pedestrian_count=300,
        right_pedestrian_count=12,
    )


class TestGateCLI:
    """命令分发"""

    def test_every_command_has_handler(self):
        device = MagicMock(spec=GateDevice)
        cli = GateCLI(device)

        assert set(cli._handlers) == set(command_names())
        assert len(COMMANDS) == 14

    def test_status_output(self, capsys):
        device = MagicMock(spec=GateDevice)
        device.get_status.return_value = make_status()

        GateCLI(device).execute("status")

        captured = capsys.readouterr()
        assert "左向通行计数: 300" in captured.out
        assert "闸门状态: 0x10" in captured.out

    def test_info_output(self, capsys):
        device = MagicMock(spec=GateDevice)
        device.get_device_info.return_value = DeviceInfo(version=(2, 0, 0), machine_type=1)

        GateCLI(device).execute("info")

        assert "版本: 2.0.0" in capsys.readouterr().out

    @pytest.mark.parametrize(
        "command, method",
        [
            ("left-always-open", "left_always_open"),
            ("right-always-open", "right_always_open"),
            ("close-gate", "close_gate"),
            ("forbid-left", "forbid_left_passage"),
            ("forbid-right", "forbid_right_passage"),
            ("disable-restrictions", "disable_restrictions"),
            ("reset-left-counters", "reset_left_counters"),
            ("reset-right-counters", "reset_right_counters"),
            ("restart", "restart_device"),
        ],
    )
    def test_simple_commands(self, command, method):
        device = MagicMock(spec=GateDevice)

        GateCLI(device).execute(command)

        getattr(device, method).assert_called_once_with()

    @pytest.mark.parametrize(
        "command, method",
        [("left-open", "left_open"), ("right-open", "right_open"), ("set-params", "set_parameters")],
    )
    def test_value_commands(self, command, method):
        device = MagicMock(spec=GateDevice)

        GateCLI(device).execute(command, value=7)

        getattr(device, method).assert_called_once_with(7)

    def test_unknown_command(self):
        with pytest.raises(ValueError):
            GateCLI(MagicMock(spec=GateDevice)).execute("fly")

    def test_commands_help_lists_categories(self):
        text = format_commands_help()

        assert "通行控制" in text
        assert "set-params" in text


class TestMain:
    """__main__ 入口"""

    def test_parser_defaults(self):
        args = create_parser().parse_args(["status"])

        assert args.port == "/dev/ttyUSB0"
        assert args.baudrate == 9600
        assert args.device_id == 1
        assert args.retry == 3
        assert args.value == 1
        assert args.debug is False

    def test_parser_rejects_unknown_command(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["fly"])

    def test_cli_logger_uses_package_root(self):
        """入口日志器挂在包根日志器下，随 --debug 调整级别"""
        assert cli_main.logger.name == f"{ROOT_LOGGER_NAME}.cli"
        assert cli_main.logger.handlers == []
        assert cli_main.logger.parent is logging.getLogger(ROOT_LOGGER_NAME)

    @patch("turnstile_gate.__main__.GateDevice")
    def test_main_success(self, mock_device_class):
        device = MagicMock()
        mock_device_class.return_value.__enter__.return_value = device

        with pytest.raises(SystemExit) as exc_info:
            main(["--port", "COM5", "--device-id", "3", "left-open", "--value", "2"])

        assert exc_info.value.code == 0
        config = mock_device_class.call_args[0][0]
        assert config.port == "COM5"
        assert config.device_id == 3
        device.left_open.assert_called_once_with(2)

    @patch("turnstile_gate.__main__.GateDevice")
    def test_main_command_failure(self, mock_device_class, capsys):
        device = MagicMock()
        device.close_gate.side_effect = CommandError("无应答", 4, TransportError("写超时"))
        mock_device_class.return_value.__enter__.return_value = device

        with pytest.raises(SystemExit) as exc_info:
            main(["close-gate"])

        assert exc_info.value.code == 1
        assert "无应答" in capsys.readouterr().out

    def test_main_invalid_config(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--baudrate", "0", "status"])

        assert exc_info.value.code == 1
        assert "波特率" in capsys.readouterr().out
