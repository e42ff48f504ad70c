"""Tests for the config module."""
import logging
import sys
from unittest.mock import patch

import pytest

from config.constants import INTERVALS, NETWORK, SERVER, STORAGE
from config.exceptions import (
    ConfigurationError,
    DeliveryFailure,
    DeviceNotFoundError,
    MalformedFieldError,
    SourceUnavailableError,
    ThroughputMonitorError,
)
from config.logging_config import (
    ThroughputMonitorFormatter,
    get_logger,
    log_exception,
    setup_logging,
)


class TestConstants:
    """Tests for constants module."""

    def test_sample_interval_is_one_second(self):
        assert INTERVALS.SAMPLE_SECONDS == 1.0

    def test_default_device(self):
        assert NETWORK.DEFAULT_DEVICE == "eth0"

    def test_counter_columns(self):
        """rx bytes is field 1 and tx bytes is field 9 of a table row."""
        assert NETWORK.RX_BYTES_FIELD == 1
        assert NETWORK.TX_BYTES_FIELD == 9

    def test_server_defaults(self):
        assert SERVER.PORT == 8080
        assert SERVER.STREAM_PATH == "/ws"
        assert SERVER.DEVICE_QUERY_PARAM == "device"

    def test_storage_config_has_required_fields(self):
        assert STORAGE.DATA_DIR_NAME
        assert STORAGE.SETTINGS_FILE
        assert STORAGE.LOG_FILE


class TestExceptions:
    """Tests for custom exceptions."""

    def test_base_exception(self):
        exc = ThroughputMonitorError("Test error", {"key": "value"})
        assert exc.message == "Test error"
        assert exc.details == {"key": "value"}
        assert "Test error" in str(exc)
        assert "key" in str(exc)

    def test_exception_without_details(self):
        exc = SourceUnavailableError("Table missing")
        assert exc.details == {}
        assert str(exc) == "Table missing"

    def test_device_not_found_records_device(self):
        exc = DeviceNotFoundError("Device not found", device="wlan9")
        assert exc.device == "wlan9"
        assert exc.details == {"device": "wlan9"}
        assert "wlan9" in str(exc)

    def test_exception_inheritance(self):
        for cls in (
            SourceUnavailableError,
            DeviceNotFoundError,
            MalformedFieldError,
            DeliveryFailure,
            ConfigurationError,
        ):
            assert issubclass(cls, ThroughputMonitorError)


@pytest.mark.usefixtures("restore_logging")
class TestLogging:
    """Tests for logging configuration."""

    def test_setup_logging_creates_logger(self, temp_data_dir):
        logger = setup_logging(data_dir=temp_data_dir, console_output=False)
        assert logger.name == 'thrumon'
        assert logger.level == logging.INFO

    def test_setup_logging_debug_level(self, temp_data_dir):
        logger = setup_logging(data_dir=temp_data_dir, debug=True, console_output=False)
        assert logger.level == logging.DEBUG

    def test_log_file_written(self, temp_data_dir):
        setup_logging(data_dir=temp_data_dir, console_output=False)
        get_logger("monitor.streamer").warning("session ended")
        for handler in logging.getLogger('thrumon').handlers:
            handler.flush()

        log_text = (temp_data_dir / STORAGE.LOG_FILE).read_text()
        assert "session ended" in log_text

    def test_setup_without_file(self, temp_data_dir):
        setup_logging(data_dir=temp_data_dir / "nested", console_output=False, log_to_file=False)
        assert not (temp_data_dir / "nested" / STORAGE.LOG_FILE).exists()

    def test_get_logger_returns_child(self):
        logger = get_logger("some.package.module")
        assert logger.name == 'thrumon.package.module'

    def test_get_logger_is_cached(self):
        assert get_logger("monitor.counters") is get_logger("monitor.counters")

    def test_log_exception_includes_type(self, caplog):
        logger = get_logger("tests.logging")
        try:
            raise SourceUnavailableError("gone")
        except SourceUnavailableError as e:
            with caplog.at_level(logging.ERROR, logger='thrumon'):
                log_exception(logger, "Read failed", e)

        assert "Read failed: SourceUnavailableError: gone" in caplog.text

    def test_console_line_written_once(self, temp_data_dir, capsys):
        setup_logging(data_dir=temp_data_dir, console_output=True, log_to_file=False)
        get_logger("monitor.streamer").info("subscriber connected")

        err = capsys.readouterr().err
        assert err.count("subscriber connected") == 1

    def test_app_logger_does_not_propagate(self, temp_data_dir):
        logger = setup_logging(data_dir=temp_data_dir, log_to_file=False, console_output=False)
        assert logger.propagate is False

    def test_get_logger_leaves_root_unconfigured(self):
        root_handlers = list(logging.getLogger().handlers)
        get_logger("service.uncached_module")
        assert logging.getLogger().handlers == root_handlers

    def test_colored_console_keeps_record_level_name(self):
        formatter = ThroughputMonitorFormatter(use_colors=True)
        record = logging.makeLogRecord({"name": "thrumon.x", "levelname": "INFO",
                                        "levelno": logging.INFO, "msg": "tick"})
        with patch.object(sys, "stderr") as stderr:
            stderr.isatty.return_value = True
            line = formatter.format(record)

        assert "\033[32mINFO\033[0m" in line
        assert record.levelname == "INFO"
