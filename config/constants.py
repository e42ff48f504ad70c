"""Centralized constants and configuration for Throughput Monitor.

This module contains the magic numbers, strings, and configuration values
used across the sampler, the streamer and the web server. Centralizing them
makes the code easier to maintain and configure.

Usage:
    from config.constants import INTERVALS, NETWORK, SERVER

    # Access values
    interval = INTERVALS.SAMPLE_SECONDS
    device = NETWORK.DEFAULT_DEVICE
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class Intervals:
    """Time intervals for various operations (in seconds)."""
    # Delay between the end of one tick and the start of the next
    SAMPLE_SECONDS: float = 1.0

    # How long shutdown waits for open connections to close
    SHUTDOWN_TIMEOUT_SECONDS: float = 5.0


@dataclass(frozen=True)
class NetworkConfig:
    """Counter table layout and interface defaults."""
    DEFAULT_DEVICE: str = "eth0"

    # Linux per-interface statistics table
    PROC_NET_DEV_PATH: str = "/proc/net/dev"

    # Whitespace-split field offsets (index 0 is the "iface:" token)
    RX_BYTES_FIELD: int = 1
    TX_BYTES_FIELD: int = 9

    # Counter backends understood by create_counter_source()
    BACKEND_PROCFS: str = "procfs"
    BACKEND_PSUTIL: str = "psutil"


@dataclass(frozen=True)
class ServerConfig:
    """Web server and chart page configuration."""
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    STREAM_PATH: str = "/ws"
    DEVICE_QUERY_PARAM: str = "device"

    # Chart page
    CHART_MAX_POINTS: int = 100
    CHART_SCALE: int = 1000  # bytes per pixel
    RX_COLOR: str = "blue"
    TX_COLOR: str = "green"
    UNKNOWN_HOSTNAME: str = "unknown"


@dataclass(frozen=True)
class StorageConfig:
    """Storage and file-related configuration."""
    DATA_DIR_NAME: str = ".throughput-monitor"
    SETTINGS_FILE: str = "settings.json"
    LOG_FILE: str = "throughput_monitor.log"

    # Log rotation
    LOG_MAX_BYTES: int = 5_000_000  # 5MB
    LOG_BACKUP_COUNT: int = 3


# Global instances - import these
INTERVALS = Intervals()
NETWORK = NetworkConfig()
SERVER = ServerConfig()
STORAGE = StorageConfig()
