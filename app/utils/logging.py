"""Logging configuration for the application.

Production output is one line of key="value" pairs per record so that the
context passed through ``extra`` (backend path, status code, form id) stays
greppable. Development output is the plain human-readable format.
"""

import json
import logging
import sys
from typing import Any, Dict

from app.config import get_settings

# Loggers of libraries that are too chatty at INFO
QUIET_LOGGERS: Dict[str, int] = {
    "uvicorn": logging.WARNING,
    "uvicorn.access": logging.WARNING,
    "uvicorn.error": logging.INFO,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
}


class StructuredFormatter(logging.Formatter):
    """Formatter rendering a record and its ``extra`` fields as key="value" pairs."""

    # Attributes every LogRecord carries; anything else came from ``extra``
    _RESERVED = frozenset(
        logging.LogRecord("", 0, "", 0, "", None, None).__dict__
    ) | {"message", "asctime", "taskName"}

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as a single line of key="value" pairs.

        Args:
            record: Log record to format

        Returns:
            Formatted log line
        """
        fields: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in self._RESERVED and not key.startswith("_"):
                fields[key] = value

        if record.exc_info:
            fields["exception"] = self.formatException(record.exc_info)

        return " ".join(
            f"{key}={json.dumps(str(value), ensure_ascii=False)}"
            for key, value in fields.items()
        )


def setup_logging() -> None:
    """Configure the root logger from application settings.

    Replaces any handlers already installed on the root logger with a single
    stdout handler.
    """
    settings = get_settings()

    root_logger = logging.getLogger()
    root_logger.setLevel(settings.log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(settings.log_level)

    if settings.is_production:
        formatter: logging.Formatter = StructuredFormatter(datefmt="%Y-%m-%d %H:%M:%S")
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    for name, level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)

    root_logger.info(
        "Logging configured",
        extra={
            "log_level": settings.log_level,
            "environment": settings.environment,
        },
    )
