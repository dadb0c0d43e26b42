#!/usr/bin/env python3
"""
校验和算法测试
==============

测试 turnstile_gate.core.checksum 模块中的上下行校验算法。
"""

import pytest

from turnstile_gate.core.checksum import calculate_tx_checksum, validate_rx_checksum
from tests.fake_port import make_response


class TestCalculateTxChecksum:
    """下行校验：累加取反"""

    def test_empty_data(self):
        """空数据累加为0，取反后为0xFF"""
        assert calculate_tx_checksum(b'') == 0xFF

    def test_status_command_bytes(self):
        """查询状态命令帧第1~6字节的校验和"""
        data = bytes([0x00, 0x01, 0x10, 0x00, 0x00, 0x00])
        assert calculate_tx_checksum(data) == 0xEE

    def test_sum_wraps_modulo_256(self):
        """累加和超过255时只保留低8位"""
        data = bytes([0xFF, 0xFF, 0x02])  # 0x200 -> 低8位 0x00
        assert calculate_tx_checksum(data) == 0xFF

    @pytest.mark.parametrize(
        "data",
        [b'\x00\x01\x80\x05\x00\x00', b'\x00\xFE\x96\xFF\xFF\xFF', b'\x00\x00\x00\x00\x00\x00'],
    )
    def test_checksum_completes_sum_to_0xff(self, data):
        """数据与校验和相加低8位恒为0xFF"""
        assert (sum(data) + calculate_tx_checksum(data)) & 0xFF == 0xFF

    def test_accepts_bytearray(self):
        assert calculate_tx_checksum(bytearray(b'\x01\x02')) == 0xFC

    def test_rejects_non_bytes(self):
        with pytest.raises(TypeError):
            calculate_tx_checksum("abc")  # type: ignore[arg-type]


class TestValidateRxChecksum:
    """上行校验：累加加1为0"""

    def test_valid_response(self):
        frame = make_response(left_count=b'\x00\x01\x2C')
        assert validate_rx_checksum(frame[1:]) is True

    def test_corrupted_response(self):
        frame = bytearray(make_response())
        frame[5] ^= 0x01
        assert validate_rx_checksum(bytes(frame[1:])) is False

    def test_all_0xff_single_byte(self):
        """0xFF + 1 = 0x100，低8位为0"""
        assert validate_rx_checksum(b'\xFF') is True

    def test_rejects_non_bytes(self):
        with pytest.raises(TypeError):
            validate_rx_checksum([1, 2, 3])  # type: ignore[arg-type]
