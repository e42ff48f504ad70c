"""HTTP and WebSocket front door for the rate streamer.

Serves the chart page at "/" and upgrades "/ws?device=NAME" to a
WebSocket. Every WebSocket connection runs its own sampling session on
the connection's handler thread (the websockets synchronous server starts
one thread per connection), so sessions never share sample state.

Usage:
    server = ThroughputServer(RateStreamer(ProcNetDevSource()), port=8080)
    server.start()
    server.serve_forever()
"""
import threading
from http import HTTPStatus
from typing import Optional, Set
from urllib.parse import parse_qs, urlsplit

from websockets.datastructures import Headers
from websockets.exceptions import ConnectionClosed
from websockets.http11 import Request, Response
from websockets.sync.server import Server, ServerConnection, serve

from config import INTERVALS, NETWORK, SERVER, DeliveryFailure, get_logger, log_exception
from monitor.streamer import RateStreamer, SessionStatus, resolve_device
from service.page import render_page

logger = get_logger(__name__)


def requested_device(path: str) -> Optional[str]:
    """Return the first "device" query value of a request path, if any."""
    query = parse_qs(urlsplit(path).query, keep_blank_values=True)
    values = query.get(SERVER.DEVICE_QUERY_PARAM)
    return values[0] if values else None


class WebSocketChannel:
    """Adapts a websockets connection to the DeliveryChannel interface."""

    def __init__(self, connection: ServerConnection):
        self._connection = connection

    def send(self, message: str) -> None:
        try:
            self._connection.send(message)
        except ConnectionClosed as e:
            raise DeliveryFailure("Subscriber disconnected", {"reason": str(e)}) from e
        except OSError as e:
            raise DeliveryFailure("WebSocket write failed", {"error": str(e)}) from e

    def close(self) -> None:
        self._connection.close()


class ThroughputServer:
    """Accepts subscribers and runs one streaming session per connection.

    Attributes:
        streamer: Shared, stateless RateStreamer.
        host: Listen address.
        port: Requested listen port (0 picks a free one, see bound_port).
        default_device: Interface used when a subscriber names none.
    """

    def __init__(
        self,
        streamer: RateStreamer,
        host: str = SERVER.HOST,
        port: int = SERVER.PORT,
        default_device: str = NETWORK.DEFAULT_DEVICE,
        hostname: Optional[str] = None,
    ):
        self.streamer = streamer
        self.host = host
        self.port = port
        self.default_device = default_device
        self._page = render_page(hostname, default_device).encode("utf-8")
        self._server: Optional[Server] = None
        self._connections: Set[ServerConnection] = set()
        self._lock = threading.Lock()
        self._drained = threading.Condition(self._lock)
        self._stopped = False

    @property
    def bound_port(self) -> int:
        if self._server is None:
            raise RuntimeError("Server is not started")
        return self._server.socket.getsockname()[1]

    @property
    def active_sessions(self) -> int:
        with self._lock:
            return len(self._connections)

    def start(self) -> None:
        """Bind the listening socket. Raises OSError if the port is taken."""
        self._server = serve(
            self.handle,
            self.host,
            self.port,
            process_request=self.process_request,
        )
        logger.info(f"Starting server on {self.host}:{self.bound_port}...")

    def serve_forever(self) -> None:
        if self._server is None:
            self.start()
        self._server.serve_forever()

    def shutdown(self, timeout: float = INTERVALS.SHUTDOWN_TIMEOUT_SECONDS) -> bool:
        """Stop accepting connections, close the open ones and wait for
        their sessions to end.

        Closing a connection makes its next send fail, which ends the
        session through the normal delivery-failure path. Connections that
        arrive after this point are closed by handle() before streaming.

        Returns:
            True if every session ended within timeout seconds.
        """
        with self._lock:
            if self._stopped:
                return not self._connections
            self._stopped = True
            connections = list(self._connections)
        if self._server is not None:
            self._server.shutdown()
        for connection in connections:
            connection.close()

        with self._drained:
            drained = self._drained.wait_for(lambda: not self._connections, timeout)
        if drained:
            logger.info("Server stopped")
        else:
            logger.warning(f"Server stopped with {len(self._connections)} session(s) still open")
        return drained

    def process_request(self, connection: ServerConnection, request: Request) -> Optional[Response]:
        """Serve the chart page for anything that is not the stream path."""
        if urlsplit(request.path).path == SERVER.STREAM_PATH:
            return None
        headers = Headers([
            ("Content-Type", "text/html; charset=utf-8"),
            ("Content-Length", str(len(self._page))),
            ("Connection", "close"),
        ])
        return Response(HTTPStatus.OK.value, HTTPStatus.OK.phrase, headers, self._page)

    def handle(self, connection: ServerConnection) -> None:
        """Run one streaming session for a freshly upgraded connection."""
        device = resolve_device(requested_device(connection.request.path), self.default_device)
        peer = connection.remote_address
        logger.info(f"Subscriber {peer} connected for device {device!r}")

        with self._lock:
            stopped = self._stopped
            if not stopped:
                self._connections.add(connection)
        if stopped:
            logger.info(f"Refusing {peer}: server is shutting down")
            connection.close()
            return

        try:
            status = self.streamer.run_session(device, WebSocketChannel(connection))
        except Exception as e:
            log_exception(logger, f"Session for {peer} crashed", e)
            return
        finally:
            with self._drained:
                self._connections.discard(connection)
                self._drained.notify_all()

        if status is not SessionStatus.DELIVERY_FAILED:
            logger.warning(f"Closed stream for {peer}: {status.value}")
