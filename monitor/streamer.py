"""Per-subscriber throughput streaming.

A RateStreamer runs one sampling session per subscriber. Each session
reads the interface counters once per tick, turns two consecutive readings
into a RateSample and sends it to the subscriber as a JSON object:

    {"rx": 125340, "tx": 8432}

The first reading of a session only primes the previous-sample slot and
is never sent. A failed counter read or a failed send ends the session;
there are no retries.

Example:
    >>> streamer = RateStreamer(ProcNetDevSource())
    >>> status = streamer.run_session(resolve_device(None), channel)
"""

from __future__ import annotations

import json
import time
from enum import Enum
from typing import Callable, Optional, Protocol

from config import (
    INTERVALS,
    NETWORK,
    DeliveryFailure,
    DeviceNotFoundError,
    SourceUnavailableError,
    get_logger,
)
from monitor.counters import CounterSample, RateSample
from monitor.utils import format_bytes, format_duration

logger = get_logger(__name__)


class CounterSource(Protocol):
    """Anything that can read the cumulative counters of a named interface."""

    def read(self, device: str) -> CounterSample: ...


class DeliveryChannel(Protocol):
    """Write side of a subscriber connection.

    send() raises DeliveryFailure when the subscriber is gone.
    """

    def send(self, message: str) -> None: ...

    def close(self) -> None: ...


class SessionStatus(Enum):
    """Why a session ended."""
    DEVICE_NOT_FOUND = "device_not_found"
    SOURCE_UNAVAILABLE = "source_unavailable"
    DELIVERY_FAILED = "delivery_failed"


def resolve_device(requested: Optional[str], default: str = NETWORK.DEFAULT_DEVICE) -> str:
    """Return the requested interface name, or the default when none was given."""
    if not requested:
        return default
    return requested


def encode_rate(rate: RateSample) -> str:
    """Serialize a RateSample as the JSON text frame sent to subscribers."""
    return json.dumps(rate.to_dict())


class Session:
    """State of one subscriber's sampling loop.

    Owns the previous-sample slot and the delivery channel exclusively;
    nothing here is shared with other sessions.
    """

    def __init__(self, device: str, channel: DeliveryChannel) -> None:
        self.device = device
        self.channel = channel
        self.previous: Optional[CounterSample] = None
        self.has_first_sample = False
        self.reads = 0
        self.messages_sent = 0
        self.rx_total = 0
        self.tx_total = 0
        self.started_at = time.monotonic()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def advance(self, current: CounterSample) -> Optional[RateSample]:
        """Store a new reading and return the delta since the previous one.

        Returns None for the first reading of the session.
        """
        self.reads += 1
        previous = self.previous
        self.previous = current

        if previous is None:
            self.has_first_sample = True
            return None

        rate = current - previous
        self.rx_total += rate.rx
        self.tx_total += rate.tx
        return rate

    def close(self) -> None:
        """Release the delivery channel. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self.channel.close()


class RateStreamer:
    """Runs fixed-delay sampling sessions against a shared counter source.

    The streamer itself holds no per-session state, so a single instance
    serves every subscriber concurrently.

    Attributes:
        source: Counter source read once per tick.
        interval: Seconds slept after each tick.
    """

    def __init__(
        self,
        source: CounterSource,
        interval: float = INTERVALS.SAMPLE_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.source = source
        self.interval = interval
        self._sleep = sleep

    def run_session(self, device: str, sink: DeliveryChannel) -> SessionStatus:
        """Stream rates for one device to one subscriber until it fails.

        Args:
            device: Interface name to sample.
            sink: Channel the JSON rate objects are sent to.

        Returns:
            The SessionStatus describing why the session ended. The sink
            is closed exactly once before returning.
        """
        session = Session(device, sink)
        logger.info(f"Session started for device {device!r}")
        try:
            status = self._loop(session)
        finally:
            session.close()
        self._log_summary(session, status)
        return status

    def _loop(self, session: Session) -> SessionStatus:
        while True:
            try:
                current = self.source.read(session.device)
            except DeviceNotFoundError as e:
                logger.error(f"Error reading network stats: {e}")
                return SessionStatus.DEVICE_NOT_FOUND
            except SourceUnavailableError as e:
                logger.error(f"Error reading network stats: {e}")
                return SessionStatus.SOURCE_UNAVAILABLE

            rate = session.advance(current)
            if rate is not None:
                try:
                    session.channel.send(encode_rate(rate))
                except DeliveryFailure as e:
                    logger.info(f"Subscriber write failed: {e}")
                    return SessionStatus.DELIVERY_FAILED
                session.messages_sent += 1

            self._sleep(self.interval)

    def _log_summary(self, session: Session, status: SessionStatus) -> None:
        elapsed = time.monotonic() - session.started_at
        logger.info(
            f"Session for {session.device!r} ended ({status.value}) after "
            f"{format_duration(elapsed)}: {session.messages_sent} updates, "
            f"rx {format_bytes(session.rx_total)}, tx {format_bytes(session.tx_total)}"
        )


__all__ = [
    "CounterSource",
    "DeliveryChannel",
    "RateStreamer",
    "Session",
    "SessionStatus",
    "encode_rate",
    "resolve_device",
]
