"""Pytest configuration and shared fixtures.

This module provides:
- Common test fixtures for data directories and fake counter tables
- The integration marker for tests that open real sockets
"""
import logging
import tempfile
from pathlib import Path
from typing import Callable, Generator
from unittest.mock import MagicMock, patch

import pytest

from config.logging_config import ROOT_LOGGER_NAME
from tests.mocks import RecordingChannel, RecordingSleep, counter_fields, proc_net_dev_table


# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "integration: mark test as an integration test")


# =============================================================================
# Directory and Path Fixtures
# =============================================================================


@pytest.fixture
def temp_data_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test data."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_settings_path(temp_data_dir: Path) -> Path:
    """Create a path for temporary settings."""
    return temp_data_dir / "settings.json"


# =============================================================================
# Counter Table Fixtures
# =============================================================================


@pytest.fixture
def proc_net_dev(temp_data_dir: Path) -> Callable[..., Path]:
    """Write a fake /proc/net/dev and return its path.

    Call with keyword arguments mapping device names to (rx, tx) pairs:
        path = proc_net_dev(lo=(10, 10), eth0=(1000, 500))
    """
    path = temp_data_dir / "net_dev"

    def write(**devices) -> Path:
        rows = [(name, counter_fields(rx, tx)) for name, (rx, tx) in devices.items()]
        path.write_text(proc_net_dev_table(rows))
        return path

    return write


@pytest.fixture
def sample_table_path(proc_net_dev) -> Path:
    """A counter table with loopback, eth0 and wlan0 rows."""
    return proc_net_dev(lo=(2_000, 2_000), eth0=(1_000, 500), wlan0=(9_000, 4_000))


# =============================================================================
# Session Fixtures
# =============================================================================


@pytest.fixture
def recording_channel() -> RecordingChannel:
    """A delivery channel that never fails and records every message."""
    return RecordingChannel()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    """A sleep replacement that returns immediately."""
    return RecordingSleep()


# =============================================================================
# Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_psutil() -> Generator[MagicMock, None, None]:
    """Mock psutil per-NIC counters."""
    with patch("psutil.net_io_counters") as mock_io:
        mock_io.return_value = {
            "lo": MagicMock(bytes_sent=2000, bytes_recv=2000),
            "eth0": MagicMock(bytes_sent=500, bytes_recv=1000),
            "wlan0": MagicMock(bytes_sent=4000, bytes_recv=9000),
        }
        yield mock_io


# =============================================================================
# Logging Fixtures
# =============================================================================


@pytest.fixture
def restore_logging() -> Generator[None, None, None]:
    """Put the 'thrumon' logger back the way it was after setup_logging()."""
    app_logger = logging.getLogger(ROOT_LOGGER_NAME)
    handlers = list(app_logger.handlers)
    level = app_logger.level
    propagate = app_logger.propagate
    yield
    for handler in app_logger.handlers:
        if handler not in handlers:
            handler.close()
    app_logger.handlers[:] = handlers
    app_logger.setLevel(level)
    app_logger.propagate = propagate
