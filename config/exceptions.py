"""Custom exception hierarchy for Throughput Monitor.

Provides specific exceptions for the failure modes of a sampling session,
so the session loop can tell a dead subscriber from a missing interface.
"""

from typing import Optional


class ThroughputMonitorError(Exception):
    """Base exception for all Throughput Monitor errors.

    All custom exceptions in this application inherit from this class.
    This allows catching all application-specific errors with a single except clause.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional error context.
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


class SourceUnavailableError(ThroughputMonitorError):
    """The interface counter table cannot be accessed.

    Raised when:
    - /proc/net/dev cannot be opened or read
    - psutil fails to enumerate interface counters

    Fatal to the session that hits it, never to the process.

    Examples:
        >>> raise SourceUnavailableError("Cannot open counter table", {"path": "/proc/net/dev"})
    """

    pass


class DeviceNotFoundError(ThroughputMonitorError):
    """No row of the counter table matches the requested interface.

    Examples:
        >>> raise DeviceNotFoundError("Device not found", {"device": "wlan9"})
    """

    def __init__(self, message: str, device: Optional[str] = None, details: Optional[dict] = None):
        details = details or {}
        if device is not None:
            details["device"] = device
        super().__init__(message, details)
        self.device = device


class MalformedFieldError(ThroughputMonitorError):
    """A numeric counter column failed to parse.

    Only raised inside the counter parser; read() recovers by using 0.
    """

    pass


class DeliveryFailure(ThroughputMonitorError):
    """The subscriber's channel cannot accept a write.

    Raised when:
    - The WebSocket peer has disconnected
    - The connection was closed by server shutdown
    """

    pass


class ConfigurationError(ThroughputMonitorError):
    """Settings and configuration errors.

    Raised when there are issues with:
    - Unknown counter backend names
    - Out of range port numbers
    - Non-positive sampling intervals

    Examples:
        >>> raise ConfigurationError("Invalid port", {"value": 70000})
    """

    pass
