"""Mock implementations for testing Throughput Monitor.

Provides scripted stand-ins for the counter source and the subscriber
channel, so session loops can be driven tick by tick without /proc or
a network socket.

Usage:
    from tests.mocks import ScriptedCounterSource, RecordingChannel

    source = ScriptedCounterSource([(1000, 500), (1500, 800)])
    channel = RecordingChannel()
"""

import json
from typing import List, Optional, Tuple, Union

from config import DeliveryFailure, DeviceNotFoundError
from monitor.counters import CounterSample

Step = Union[Tuple[int, int], Exception]


class ScriptedCounterSource:
    """Counter source that replays a fixed script of readings.

    Each script step is either an (rx, tx) pair or an exception instance
    to raise. Once the script is exhausted every read raises
    DeviceNotFoundError, which ends the session.
    """

    def __init__(self, steps: List[Step]):
        self._steps = list(steps)
        self.reads: List[str] = []

    def read(self, device: str) -> CounterSample:
        self.reads.append(device)
        if not self._steps:
            raise DeviceNotFoundError("Script exhausted", device=device)
        step = self._steps.pop(0)
        if isinstance(step, Exception):
            raise step
        rx, tx = step
        return CounterSample(rx_bytes=rx, tx_bytes=tx)


class RecordingChannel:
    """DeliveryChannel that records messages and can fail on demand.

    Args:
        fail_after: Number of successful sends before send() starts
            raising DeliveryFailure. None never fails.
    """

    def __init__(self, fail_after: Optional[int] = None):
        self.messages: List[str] = []
        self.close_calls = 0
        self.send_attempts = 0
        self._fail_after = fail_after

    def send(self, message: str) -> None:
        self.send_attempts += 1
        if self._fail_after is not None and len(self.messages) >= self._fail_after:
            raise DeliveryFailure("Subscriber disconnected")
        self.messages.append(message)

    def close(self) -> None:
        self.close_calls += 1

    @property
    def decoded(self) -> List[dict]:
        return [json.loads(m) for m in self.messages]


class RecordingSleep:
    """Replacement for time.sleep that records requested delays."""

    def __init__(self):
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def proc_net_dev_table(rows: List[Tuple[str, List[Union[int, str]]]]) -> str:
    """Build a /proc/net/dev style table from (device, fields) rows."""
    lines = [
        "Inter-|   Receive                                                |  Transmit",
        " face |bytes    packets errs drop fifo frame compressed multicast|"
        "bytes    packets errs drop fifo colls carrier compressed",
    ]
    for device, fields in rows:
        lines.append(f"{device:>6}: " + " ".join(str(f) for f in fields))
    return "\n".join(lines) + "\n"


def counter_fields(rx: Union[int, str], tx: Union[int, str]) -> List[Union[int, str]]:
    """Sixteen counter columns with rx bytes first and tx bytes ninth."""
    return [rx, 10, 0, 0, 0, 0, 0, 0, tx, 7, 0, 0, 0, 0, 0, 0]
