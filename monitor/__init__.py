"""Interface counter sampling and rate streaming.

Modules:
    counters: Per-interface byte counter sources (/proc/net/dev, psutil)
    streamer: Per-subscriber sampling sessions
    utils: Shared formatting helpers

Example:
    >>> from monitor import ProcNetDevSource, RateStreamer
    >>> streamer = RateStreamer(ProcNetDevSource())
    >>> status = streamer.run_session("eth0", channel)
"""
from .counters import (
    CounterSample,
    ProcNetDevSource,
    PsutilCounterSource,
    RateSample,
    create_counter_source,
    parse_counter_line,
)
from .streamer import (
    CounterSource,
    DeliveryChannel,
    RateStreamer,
    Session,
    SessionStatus,
    encode_rate,
    resolve_device,
)
from .utils import format_bytes, format_duration

__all__ = [
    # Counters
    "CounterSample",
    "RateSample",
    "ProcNetDevSource",
    "PsutilCounterSource",
    "create_counter_source",
    "parse_counter_line",
    # Streaming
    "CounterSource",
    "DeliveryChannel",
    "RateStreamer",
    "Session",
    "SessionStatus",
    "encode_rate",
    "resolve_device",
    # Utilities
    "format_bytes",
    "format_duration",
]
