"""Chart page served at the web root.

A single self-contained HTML document: it opens the /ws stream for the
device named in its own query string and plots the last points of the
rx (blue) and tx (green) rates on a full-window canvas, with the host
name and device drawn in the corner.
"""
import json
import socket
from string import Template
from typing import Optional

from config import NETWORK, SERVER, get_logger

logger = get_logger(__name__)


_PAGE = Template("""<!DOCTYPE html>
<html>
<head>
	<title>Network Throughput</title>
	<style>
		html, body, canvas {
			margin: 0;
			padding: 0;
			width: 100%;
			height: 100%;
			overflow: hidden;
		}
		canvas {
			display: block;
		}
	</style>
</head>
<body>
	<canvas id="graph"></canvas>
	<script>
		let params = new URLSearchParams(window.location.search);
		let device = params.get("$device_param") || $default_device;
		let hostname = $hostname;

		let socket = new WebSocket("ws://" + location.host + "$stream_path?$device_param=" + encodeURIComponent(device));
		let canvas = document.getElementById("graph");
		let ctx = canvas.getContext("2d");

		canvas.width = window.innerWidth;
		canvas.height = window.innerHeight;

		let rxData = [], txData = [];
		let maxPoints = $max_points;
		let scale = $scale;

		function plot(data, color) {
			ctx.beginPath();
			ctx.strokeStyle = color;
			for (let i = 0; i < data.length; i++) {
				let x = (i / maxPoints) * canvas.width;
				let y = canvas.height - (data[i] / scale);
				if (i === 0) ctx.moveTo(x, y);
				else ctx.lineTo(x, y);
			}
			ctx.stroke();
		}

		socket.onmessage = function(event) {
			let data = JSON.parse(event.data);
			rxData.push(data.rx);
			txData.push(data.tx);

			if (rxData.length > maxPoints) rxData.shift();
			if (txData.length > maxPoints) txData.shift();

			if (rxData.length < 2 || txData.length < 2) return;

			ctx.clearRect(0, 0, canvas.width, canvas.height);
			plot(rxData, "$rx_color");
			plot(txData, "$tx_color");

			ctx.font = "14px Arial";
			ctx.fillStyle = "black";
			ctx.fillText(hostname, 10, 20);
			ctx.fillText(device, 10, 38);
		};
	</script>
</body>
</html>
""")


def get_hostname() -> str:
    """Return this host's name, or "unknown" if it cannot be determined."""
    try:
        return socket.gethostname() or SERVER.UNKNOWN_HOSTNAME
    except OSError as e:
        logger.warning(f"Could not determine hostname: {e}")
        return SERVER.UNKNOWN_HOSTNAME


def render_page(hostname: Optional[str] = None, default_device: str = NETWORK.DEFAULT_DEVICE) -> str:
    """Render the chart page.

    Args:
        hostname: Name shown in the chart overlay. Looked up when omitted.
        default_device: Device the page subscribes to when its URL has none.

    Returns:
        The HTML document as text. String values are JSON-encoded so they
        are safe inside the script block.
    """
    if hostname is None:
        hostname = get_hostname()
    return _PAGE.substitute(
        device_param=SERVER.DEVICE_QUERY_PARAM,
        stream_path=SERVER.STREAM_PATH,
        default_device=_script_string(default_device),
        hostname=_script_string(hostname),
        max_points=SERVER.CHART_MAX_POINTS,
        scale=SERVER.CHART_SCALE,
        rx_color=SERVER.RX_COLOR,
        tx_color=SERVER.TX_COLOR,
    )


def _script_string(value: str) -> str:
    # "</" would end the script element early
    return json.dumps(value).replace("</", "<\\/")
