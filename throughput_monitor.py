#!/usr/bin/env python3
"""
Throughput Monitor - live network interface throughput over WebSocket.
Samples an interface's byte counters once a second and streams the
per-second rx/tx deltas to every connected chart page.
"""
import signal
import sys
import threading
from pathlib import Path

from config import STORAGE, ConfigurationError, get_logger, setup_logging
from monitor.counters import create_counter_source
from monitor.streamer import RateStreamer
from service.web_server import ThroughputServer
from storage.settings import SettingsManager, get_settings_manager

logger = get_logger(__name__)


def build_server(settings) -> ThroughputServer:
    """Wire the counter source, streamer and server from settings."""
    settings.validate()
    source = create_counter_source(settings.counter_backend, settings.proc_net_dev_path)
    streamer = RateStreamer(source, interval=settings.sample_interval)
    logger.info(f"Sampling {source!r} every {settings.sample_interval}s")
    return ThroughputServer(
        streamer,
        host=settings.host,
        port=settings.port,
        default_device=settings.default_device,
    )


def write_default_settings(manager: SettingsManager) -> bool:
    """Create settings.json on first run so there is a file to edit."""
    if manager.settings_file.exists():
        return False
    manager.save()
    logger.info(f"Wrote default settings to {manager.settings_file}")
    return True


def main():
    """Entry point for the server."""
    data_dir = Path.home() / STORAGE.DATA_DIR_NAME
    manager = get_settings_manager(data_dir)
    settings = manager.settings

    setup_logging(data_dir=data_dir, debug=settings.debug, console_output=True)
    logger.info("Throughput Monitor starting...")
    write_default_settings(manager)

    try:
        server = build_server(settings)
        server.start()
    except ConfigurationError as e:
        logger.error(f"Invalid settings: {e}")
        sys.exit(1)
    except OSError as e:
        logger.error(f"Could not listen on {settings.host}:{settings.port}: {e}")
        sys.exit(1)

    def signal_handler(signum, frame):
        """Handle SIGTERM/SIGINT by closing the server and its sessions."""
        logger.info(f"Received signal {signum}, shutting down...")
        threading.Thread(target=server.shutdown, daemon=True).start()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)

    server.serve_forever()
    logger.info("Throughput Monitor exited")


if __name__ == "__main__":
    main()
