"""Logging configuration for Throughput Monitor.

Provides structured logging with file rotation and optional debug output.
All components should use this logging system instead of print().

Usage:
    from config.logging_config import setup_logging, get_logger

    # Initialize at server startup
    setup_logging(data_dir=Path.home() / ".throughput-monitor")

    # Get logger in any module
    logger = get_logger(__name__)
    logger.info("Session started")
    logger.error("Counter read failed", exc_info=True)
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from config.constants import STORAGE


ROOT_LOGGER_NAME = 'thrumon'

# Module-level logger cache
_loggers: dict = {}
_initialized: bool = False


class ThroughputMonitorFormatter(logging.Formatter):
    """Custom formatter with color support for console output."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
        'RESET': '\033[0m',
    }

    def __init__(self, use_colors: bool = True):
        self.use_colors = use_colors
        super().__init__(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    def format(self, record: logging.LogRecord) -> str:
        if self.use_colors and sys.stderr.isatty():
            # Color a copy; the same record also goes to the file handler
            record = logging.makeLogRecord(record.__dict__)
            color = self.COLORS.get(record.levelname, '')
            reset = self.COLORS['RESET']
            record.levelname = f"{color}{record.levelname}{reset}"
        return super().format(record)


def setup_logging(
    data_dir: Optional[Path] = None,
    debug: bool = False,
    console_output: bool = True,
    log_to_file: bool = True
) -> logging.Logger:
    """Initialize the logging system.

    Should be called once at server startup. Subsequent calls
    will reconfigure the existing logger.

    Args:
        data_dir: Directory for log files. Defaults to ~/.throughput-monitor/
        debug: Enable debug-level logging.
        console_output: Also log to stderr.
        log_to_file: Write logs to file with rotation.

    Returns:
        The root logger for the application.
    """
    global _initialized

    if data_dir is None:
        data_dir = Path.home() / STORAGE.DATA_DIR_NAME

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG if debug else logging.INFO)
    # Our handlers are the only output; do not also print via the root logger
    root_logger.propagate = False

    # Clear existing handlers
    for handler in list(root_logger.handlers):
        handler.close()
    root_logger.handlers.clear()

    # File handler with rotation
    if log_to_file:
        data_dir.mkdir(parents=True, exist_ok=True)
        log_file = data_dir / STORAGE.LOG_FILE
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=STORAGE.LOG_MAX_BYTES,
            backupCount=STORAGE.LOG_BACKUP_COUNT,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        root_logger.addHandler(file_handler)

    # Console handler (stderr)
    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.DEBUG if debug else logging.INFO)
        console_handler.setFormatter(ThroughputMonitorFormatter(use_colors=True))
        root_logger.addHandler(console_handler)

    root_logger.info(
        f"Logging initialized - level={'DEBUG' if debug else 'INFO'}, "
        f"file={log_to_file}, console={console_output}"
    )

    _initialized = True

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a specific module.

    Returns a child logger of the 'thrumon' logger. Until setup_logging()
    runs, records go to a NullHandler, so importing a module never
    configures the process-wide root logger.

    Args:
        name: Usually __name__ of the calling module.
    """
    short_name = name
    if '.' in name:
        short_name = '.'.join(name.split('.')[-2:])

    if short_name not in _loggers:
        if not _initialized:
            parent = logging.getLogger(ROOT_LOGGER_NAME)
            if not parent.handlers:
                parent.addHandler(logging.NullHandler())

        logger = logging.getLogger(f'{ROOT_LOGGER_NAME}.{short_name}')
        _loggers[short_name] = logger

    return _loggers[short_name]


def log_exception(logger: logging.Logger, message: str, exc: Exception) -> None:
    """Log an exception with full traceback and context.

    Args:
        logger: The logger to use.
        message: Descriptive message about what was happening.
        exc: The exception that was caught.
    """
    logger.error(
        f"{message}: {type(exc).__name__}: {exc}",
        exc_info=exc,
        extra={'exception_type': type(exc).__name__}
    )
