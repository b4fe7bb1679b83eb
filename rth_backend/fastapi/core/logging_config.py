"""
Logging setup for the API process.

Call ``setup_logging()`` once at startup; modules obtain their loggers with
``logging.getLogger(__name__)``.
"""

import logging
import sys
from datetime import datetime


class ConsoleFormatter(logging.Formatter):
    """
    Console-friendly formatter.

    Output format:
    2024-01-01 00:00:00 INFO     rth_backend.fastapi.api - message
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        result = f"{timestamp} {record.levelname:8} {record.name} - {record.getMessage()}"
        if record.exc_info:
            result += "\n" + self.formatException(record.exc_info)
        return result


def setup_logging(level: str = "INFO") -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ConsoleFormatter())

    # No-op when the root logger is already configured (e.g. under pytest)
    logging.basicConfig(level=log_level, handlers=[handler])
    logging.getLogger("rth_backend").setLevel(log_level)

    # Quiet down third-party loggers
    for noisy_logger in ("uvicorn.access", "sqlalchemy.engine", "passlib"):
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)
