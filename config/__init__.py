"""Configuration module for Throughput Monitor.

Provides centralized configuration, logging and exceptions.
"""
from config.constants import (
    INTERVALS,
    NETWORK,
    SERVER,
    STORAGE,
    Intervals,
    NetworkConfig,
    ServerConfig,
    StorageConfig,
)
from config.exceptions import (
    ConfigurationError,
    DeliveryFailure,
    DeviceNotFoundError,
    MalformedFieldError,
    SourceUnavailableError,
    ThroughputMonitorError,
)
from config.logging_config import get_logger, log_exception, setup_logging

__all__ = [
    # Constants
    "INTERVALS",
    "NETWORK",
    "SERVER",
    "STORAGE",
    "Intervals",
    "NetworkConfig",
    "ServerConfig",
    "StorageConfig",
    # Exceptions
    "ThroughputMonitorError",
    "SourceUnavailableError",
    "DeviceNotFoundError",
    "MalformedFieldError",
    "DeliveryFailure",
    "ConfigurationError",
    # Logging
    "setup_logging",
    "get_logger",
    "log_exception",
]
