"""Server settings for Throughput Monitor."""
import json
import threading
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

from config import INTERVALS, NETWORK, SERVER, STORAGE, ConfigurationError, get_logger

logger = get_logger(__name__)

COUNTER_BACKENDS = (NETWORK.BACKEND_PROCFS, NETWORK.BACKEND_PSUTIL)


@dataclass
class ServerSettings:
    """Listen address, default device and sampling options."""
    host: str = SERVER.HOST
    port: int = SERVER.PORT
    default_device: str = NETWORK.DEFAULT_DEVICE
    counter_backend: str = NETWORK.BACKEND_PROCFS
    proc_net_dev_path: str = NETWORK.PROC_NET_DEV_PATH
    sample_interval: float = INTERVALS.SAMPLE_SECONDS
    debug: bool = False

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'ServerSettings':
        return cls(
            host=data.get("host", SERVER.HOST),
            port=data.get("port", SERVER.PORT),
            default_device=data.get("default_device", NETWORK.DEFAULT_DEVICE),
            counter_backend=data.get("counter_backend", NETWORK.BACKEND_PROCFS),
            proc_net_dev_path=data.get("proc_net_dev_path", NETWORK.PROC_NET_DEV_PATH),
            sample_interval=data.get("sample_interval", INTERVALS.SAMPLE_SECONDS),
            debug=data.get("debug", False),
        )

    def validate(self) -> None:
        """Raise ConfigurationError if any value is out of range."""
        if not isinstance(self.port, int) or not 0 <= self.port <= 65535:
            raise ConfigurationError("Invalid port", {"value": self.port})
        if self.counter_backend not in COUNTER_BACKENDS:
            raise ConfigurationError(
                "Unknown counter backend",
                {"value": self.counter_backend, "allowed": list(COUNTER_BACKENDS)},
            )
        if not isinstance(self.sample_interval, (int, float)) or self.sample_interval <= 0:
            raise ConfigurationError("Sample interval must be positive", {"value": self.sample_interval})
        if not self.default_device:
            raise ConfigurationError("Default device must not be empty")


class SettingsManager:
    """Loads and saves ServerSettings as JSON in the data directory."""

    DEFAULT_SETTINGS_FILE = STORAGE.SETTINGS_FILE

    def __init__(self, data_dir: Path):
        self.data_dir = data_dir
        self.settings_file = data_dir / self.DEFAULT_SETTINGS_FILE
        self._lock = threading.Lock()
        self._settings: ServerSettings = ServerSettings()
        self._load()

    @property
    def settings(self) -> ServerSettings:
        return self._settings

    def _load(self) -> None:
        """Load settings from file."""
        if not self.settings_file.exists():
            self._settings = ServerSettings()
            return
        try:
            with open(self.settings_file, 'r') as f:
                data = json.load(f)
            self._settings = ServerSettings.from_dict(data)
        except (json.JSONDecodeError, OSError, AttributeError) as e:
            logger.warning(f"Could not load settings from {self.settings_file}: {e}")
            self._settings = ServerSettings()

    def save(self) -> None:
        """Save settings to file."""
        with self._lock:
            try:
                self.data_dir.mkdir(parents=True, exist_ok=True)
                with open(self.settings_file, 'w') as f:
                    json.dump(self._settings.to_dict(), f, indent=2)
            except OSError as e:
                logger.error(f"Error saving settings: {e}")


def get_settings_manager(data_dir: Optional[Path] = None) -> SettingsManager:
    """Create a settings manager for the given (or default) data directory."""
    if data_dir is None:
        data_dir = Path.home() / STORAGE.DATA_DIR_NAME
    return SettingsManager(data_dir)
