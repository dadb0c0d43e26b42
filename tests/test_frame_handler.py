"""
数据帧处理器测试
================

测试命令帧封装与应答帧解析。
"""

import pytest

from turnstile_gate.config.constants import GateCommand
from turnstile_gate.core.frame_handler import FrameHandler, build_command, parse_response
from turnstile_gate.errors import (
    CommandFailedError,
    DataTooLargeError,
    DeviceIDMismatchError,
    FrameTooShortError,
    InvalidHeaderError,
    ProtocolError,
)
from tests.fake_port import make_response


class TestBuildCommand:
    """命令帧封装测试"""

    def test_status_command_layout(self):
        """查询状态命令帧逐字节检查"""
        frame = FrameHandler.build_command(0x01, GateCommand.GET_STATUS)

        assert frame == bytes([0x7E, 0x00, 0x01, 0x10, 0x00, 0x00, 0x00, 0xEE])

    def test_restart_command_carries_confirm_byte(self):
        frame = FrameHandler.build_command(0x05, GateCommand.RESTART_DEVICE, b'\x60')

        assert frame[:7] == bytes([0x7E, 0x00, 0x05, 0x35, 0x60, 0x00, 0x00])

    def test_data_is_zero_padded(self):
        frame = FrameHandler.build_command(0x01, GateCommand.LEFT_OPEN, b'\x07')

        assert frame[4:7] == b'\x07\x00\x00'

    def test_full_three_byte_payload(self):
        frame = FrameHandler.build_command(0x01, 0x96, b'\x01\x02\x03')

        assert frame[3] == 0x96
        assert frame[4:7] == b'\x01\x02\x03'

    @pytest.mark.parametrize(
        "device_id, command, data",
        [
            (0x00, GateCommand.GET_STATUS, b''),
            (0x01, GateCommand.LEFT_OPEN, b'\x01'),
            (0x7F, GateCommand.SET_PARAMETERS, b'\xFF\xFF'),
            (0xFF, GateCommand.DISABLE_RESTRICTIONS, b'\x10\x20\x30'),
        ],
    )
    def test_frame_is_eight_bytes_with_complement_checksum(self, device_id, command, data):
        """帧长8字节，校验和为第1~6字节累加和取反"""
        frame = build_command(device_id, command, data)

        assert len(frame) == 8
        assert frame[0] == 0x7E
        assert frame[7] == (~sum(frame[1:7])) & 0xFF
        assert (sum(frame[1:8]) + 1) & 0xFF == 0

    @pytest.mark.parametrize("size", [4, 5, 16])
    def test_data_too_large(self, size):
        with pytest.raises(DataTooLargeError) as exc_info:
            FrameHandler.build_command(0x01, GateCommand.SET_PARAMETERS, b'\x00' * size)

        assert exc_info.value.size == size
        assert exc_info.value.limit == 3

    def test_device_id_out_of_range(self):
        with pytest.raises(ValueError):
            FrameHandler.build_command(0x100, GateCommand.GET_STATUS)


class TestParseResponse:
    """应答帧解析测试"""

    def test_parse_success(self):
        raw = make_response(
            machine_number=0x01,
            version=0x03,
            left_count=b'\x00\x01\x2C',
            right_count=b'\x01\x00\x00',
            gate_status=0x02,
            voltage=0x18,
        )

        response = FrameHandler.parse_response(raw, 0x01)

        assert response.version_number == 0x03
        assert response.machine_number == 0x01
        assert response.gate_status == 0x02
        assert response.left_count == b'\x00\x01\x2C'
        assert response.right_count == b'\x01\x00\x00'
        assert response.command_execution == 0x55
        assert response.power_supply_voltage == 0x18
        assert response.checksum_valid is True
        assert response.raw == raw

    def test_extra_bytes_are_ignored(self):
        raw = make_response() + b'\x7F\x00\x00'

        response = parse_response(raw, 0x01)

        assert len(response.raw) == 18

    @pytest.mark.parametrize("size", [0, 1, 8, 17])
    def test_frame_too_short(self, size):
        with pytest.raises(FrameTooShortError):
            FrameHandler.parse_response(make_response()[:size], 0x01)

    def test_invalid_header(self):
        raw = b'\x7E' + make_response()[1:]

        with pytest.raises(InvalidHeaderError) as exc_info:
            FrameHandler.parse_response(raw, 0x01)

        assert exc_info.value.actual == 0x7E
        assert exc_info.value.expected == 0x7F

    def test_device_id_mismatch(self):
        """机号不符时，即使执行状态失败也报机号不符"""
        raw = make_response(machine_number=0x02, execution=0x00)

        with pytest.raises(DeviceIDMismatchError) as exc_info:
            FrameHandler.parse_response(raw, 0x01)

        assert exc_info.value.expected == 0x01
        assert exc_info.value.actual == 0x02
        assert isinstance(exc_info.value, ProtocolError)

    @pytest.mark.parametrize("execution", [0x00, 0x54, 0xAA, 0xFF])
    def test_command_failed(self, execution):
        raw = make_response(execution=execution)

        with pytest.raises(CommandFailedError) as exc_info:
            FrameHandler.parse_response(raw, 0x01)

        assert exc_info.value.execution_byte == execution

    def test_bad_checksum_is_not_rejected(self):
        """上行校验和不符只记录，不拒绝"""
        raw = bytearray(make_response())
        raw[17] ^= 0xFF

        response = FrameHandler.parse_response(bytes(raw), 0x01)

        assert response.checksum_valid is False
        assert response.command_execution == 0x55
