"""Web serving components: chart page and WebSocket stream."""

from .page import get_hostname, render_page
from .web_server import ThroughputServer, WebSocketChannel, requested_device

__all__ = [
    "ThroughputServer",
    "WebSocketChannel",
    "get_hostname",
    "render_page",
    "requested_device",
]
