"""
Logging setup for LandQuote: console output plus an optional rotating file,
with JSON records in production.
"""

import json
import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from landquote.core.config import settings

# Attributes every LogRecord carries; anything else came in through extra={}
_RESERVED_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName"}

CONSOLE_FORMAT = "%(levelname)s | %(asctime)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class JSONFormatter(logging.Formatter):
    """One JSON object per record, including request and quote context fields."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": self.formatTime(record, DATE_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_ATTRS and key not in log_data:
                log_data[key] = value

        return json.dumps(log_data, default=str)


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[Path] = None,
    json_logs: bool = False,
    enable_console: bool = True,
) -> None:
    """
    Configure the root logger.

    Args:
        log_level: Level name; DEBUG in development, INFO elsewhere by default
        log_file: Rotating log file, if file logging is wanted
        json_logs: Write JSON records to the file
        enable_console: Log to stdout
    """
    if log_level is None:
        log_level = "DEBUG" if settings.environment == "development" else "INFO"
    level = log_level.upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

        # 10MB per file, keep 5 backups
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(
            JSONFormatter() if json_logs else logging.Formatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT)
        )
        root_logger.addHandler(file_handler)

    # Noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    root_logger.info(
        f"Logging initialized: level={level}, environment={settings.environment}, "
        f"json_logs={json_logs}, file={log_file is not None}"
    )


class LogContext:
    """
    Attach fields to every log record created inside the block.

    Usage:
        with LogContext(request_id=request_id):
            logger.info("Computing estimate")
    """

    def __init__(self, **kwargs: Any):
        self.context = kwargs
        self.old_factory: Optional[Any] = None

    def __enter__(self) -> "LogContext":
        self.old_factory = logging.getLogRecordFactory()
        old_factory = self.old_factory

        def record_factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
            record = old_factory(*args, **kwargs)
            for key, value in self.context.items():
                setattr(record, key, value)
            return record

        logging.setLogRecordFactory(record_factory)
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self.old_factory:
            logging.setLogRecordFactory(self.old_factory)
