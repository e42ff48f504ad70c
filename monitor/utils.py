"""Formatting helpers for session log lines.

Example:
    >>> from monitor.utils import format_bytes
    >>> format_bytes(1500000)
    '1.4 MB'
    >>> format_bytes(-2048)
    '-2.0 KB'
"""

from __future__ import annotations

from typing import Union

# Type alias for numeric values
NumericValue = Union[int, float]

_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_bytes(bytes_value: NumericValue) -> str:
    """Format a byte total as a human-readable string, base 1024.

    Examples:
        >>> format_bytes(0)
        '0 B'
        >>> format_bytes(1024)
        '1.0 KB'
        >>> format_bytes(1099511627776)
        '1.0 TB'
    """
    if bytes_value == 0:
        return "0 B"

    value = float(bytes_value)
    for unit in _UNITS:
        if abs(value) < 1024.0:
            return f"{value:.1f} {unit}"
        value /= 1024.0
    return f"{value:.1f} PB"


def format_duration(seconds: NumericValue) -> str:
    """Format seconds as "45s", "2m 30s" or "1h 1m"."""
    seconds = int(seconds)

    if seconds < 60:
        return f"{seconds}s"
    elif seconds < 3600:
        minutes, secs = divmod(seconds, 60)
        return f"{minutes}m {secs}s" if secs else f"{minutes}m"
    else:
        hours = seconds // 3600
        minutes = (seconds % 3600) // 60
        return f"{hours}h {minutes}m" if minutes else f"{hours}h"


__all__ = ["NumericValue", "format_bytes", "format_duration"]
