"""Per-interface byte counter collection.

Reads the cumulative received/transmitted byte counters of one named
interface. Two backends share the same contract:

- ProcNetDevSource scans the kernel's /proc/net/dev table directly.
- PsutilCounterSource asks psutil for per-NIC counters, for hosts
  without a /proc filesystem.

Both match the requested name as a substring of the interface label, so
"eth0" also matches an "eth01" row if that row comes first. This is a
known limitation and is kept as-is.

Example:
    >>> source = ProcNetDevSource()
    >>> sample = source.read("eth0")
    >>> print(sample.rx_bytes, sample.tx_bytes)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

import psutil

from config import (
    NETWORK,
    ConfigurationError,
    DeviceNotFoundError,
    MalformedFieldError,
    SourceUnavailableError,
    get_logger,
)

logger = get_logger(__name__)

# Optional sign and ASCII digits; no underscores, no other Unicode digits
_DECIMAL = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class CounterSample:
    """Cumulative byte counters of one interface at one point in time.

    Attributes:
        rx_bytes: Total bytes received since the counter was last reset.
        tx_bytes: Total bytes transmitted since the counter was last reset.
    """

    rx_bytes: int
    tx_bytes: int

    def __sub__(self, previous: CounterSample) -> RateSample:
        return RateSample(
            rx=self.rx_bytes - previous.rx_bytes,
            tx=self.tx_bytes - previous.tx_bytes,
        )


@dataclass(frozen=True)
class RateSample:
    """Bytes transferred during one sampling interval.

    Negative only when a counter was reset or wrapped between two reads.
    """

    rx: int
    tx: int

    def to_dict(self) -> dict:
        return {"rx": self.rx, "tx": self.tx}


def _parse_counter(fields: List[str], index: int) -> int:
    """Parse one base-10 counter column, raising MalformedFieldError."""
    if index >= len(fields):
        raise MalformedFieldError("Counter column is missing", {"index": index})
    if not _DECIMAL.fullmatch(fields[index]):
        raise MalformedFieldError(
            "Counter column is not an integer", {"index": index, "value": fields[index]}
        )
    return int(fields[index])


def _counter_or_zero(fields: List[str], index: int) -> int:
    try:
        return _parse_counter(fields, index)
    except MalformedFieldError as e:
        logger.debug(f"Using 0 for malformed counter: {e}")
        return 0


def parse_counter_line(line: str) -> CounterSample:
    """Parse one row of the per-interface statistics table.

    The row is split on whitespace; received bytes is field 1 and
    transmitted bytes is field 9. A field that is missing or not an
    integer reads as 0.

    Args:
        line: A raw table row such as "  eth0: 1000 12 0 0 0 0 0 0 500 ...".

    Returns:
        CounterSample built from the two columns.
    """
    fields = line.split()
    return CounterSample(
        rx_bytes=_counter_or_zero(fields, NETWORK.RX_BYTES_FIELD),
        tx_bytes=_counter_or_zero(fields, NETWORK.TX_BYTES_FIELD),
    )


class ProcNetDevSource:
    """Reads interface counters from the /proc/net/dev table.

    Each read opens the table, scans it for the first line containing the
    device name and closes it again, so one instance can be shared by any
    number of concurrent sessions.
    """

    def __init__(self, path: Optional[str] = None) -> None:
        self.path = path or NETWORK.PROC_NET_DEV_PATH

    def read(self, device: str) -> CounterSample:
        """Read the current counters for a device.

        Args:
            device: Interface name, matched as a substring of each line.

        Returns:
            CounterSample for the first matching line.

        Raises:
            SourceUnavailableError: The table cannot be opened or read.
            DeviceNotFoundError: No line contains the device name.
        """
        try:
            with open(self.path, "r", encoding="utf-8", errors="surrogateescape") as table:
                for line in table:
                    if device in line:
                        return parse_counter_line(line)
        except OSError as e:
            raise SourceUnavailableError(
                "Cannot read interface counter table",
                {"path": self.path, "error": str(e)},
            ) from e

        raise DeviceNotFoundError("Device not found", device=device)

    def __repr__(self) -> str:
        return f"ProcNetDevSource(path={self.path!r})"


class PsutilCounterSource:
    """Reads interface counters through psutil.net_io_counters(pernic=True)."""

    def read(self, device: str) -> CounterSample:
        try:
            counters = psutil.net_io_counters(pernic=True)
        except OSError as e:
            raise SourceUnavailableError(
                "psutil could not read interface counters", {"error": str(e)}
            ) from e

        for name, nic in counters.items():
            if device in name:
                return CounterSample(rx_bytes=nic.bytes_recv, tx_bytes=nic.bytes_sent)

        raise DeviceNotFoundError("Device not found", device=device)

    def __repr__(self) -> str:
        return "PsutilCounterSource()"


def create_counter_source(backend: str = NETWORK.BACKEND_PROCFS, path: Optional[str] = None):
    """Build a counter source from its settings name.

    Args:
        backend: "procfs" or "psutil".
        path: Table path for the procfs backend (tests point this at a temp file).

    Raises:
        ConfigurationError: Unknown backend name.
    """
    if backend == NETWORK.BACKEND_PROCFS:
        return ProcNetDevSource(path)
    if backend == NETWORK.BACKEND_PSUTIL:
        return PsutilCounterSource()
    raise ConfigurationError("Unknown counter backend", {"backend": backend})


__all__ = [
    "CounterSample",
    "RateSample",
    "ProcNetDevSource",
    "PsutilCounterSource",
    "create_counter_source",
    "parse_counter_line",
]
