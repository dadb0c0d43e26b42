"""
工具模块测试
============

测试线性退避与日志工具。
"""

import logging
from unittest.mock import patch

import pytest

from turnstile_gate.utils.logger import ROOT_LOGGER_NAME, format_hex, get_logger, set_log_level
from turnstile_gate.utils.retry import backoff_sleep, linear_backoff


class TestLinearBackoff:

    @pytest.mark.parametrize("attempt, expected", [(0, 0.0), (1, 0.1), (2, 0.2), (5, 0.5)])
    def test_default_step(self, attempt, expected):
        assert linear_backoff(attempt) == pytest.approx(expected)

    def test_custom_step(self):
        assert linear_backoff(3, step=0.5) == pytest.approx(1.5)

    @patch("turnstile_gate.utils.retry.time.sleep")
    def test_first_attempt_does_not_sleep(self, mock_sleep):
        assert backoff_sleep(0) == 0.0
        mock_sleep.assert_not_called()

    @patch("turnstile_gate.utils.retry.time.sleep")
    def test_sleep_duration(self, mock_sleep):
        backoff_sleep(3)
        mock_sleep.assert_called_once_with(pytest.approx(0.3))


class TestLogger:

    def test_format_hex(self):
        assert format_hex(b'\x7E\x00\x01\x10') == "[7E 00 01 10]"
        assert format_hex(b'') == "[]"

    def test_module_loggers_share_root_handlers(self):
        child = get_logger(f"{ROOT_LOGGER_NAME}.core.some_module")

        assert child.handlers == []
        assert child.propagate is True
        assert child.parent is logging.getLogger(ROOT_LOGGER_NAME)

    def test_set_log_level(self):
        root = get_logger()
        original = root.level
        try:
            set_log_level(logging.DEBUG)
            assert root.level == logging.DEBUG
        finally:
            root.setLevel(original)
