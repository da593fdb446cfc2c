"""
Logging configuration.

Two output shapes:
- console: human-readable lines for local development
- json: one JSON object per line for log aggregation

Every module logs through logging.getLogger(__name__), so the level
of the "backoffice_ledger" logger is the single switch for application
output. Records propagate to the root handler.
"""

import json
import logging
import logging.config
from datetime import datetime

from backoffice_ledger.config import get_settings


# Attributes every LogRecord has. Anything else on the record came
# in through `extra=` and is emitted under "extra".
_STANDARD_ATTRS = {
    "name", "msg", "args", "levelname", "levelno", "pathname",
    "filename", "module", "lineno", "funcName", "created",
    "msecs", "relativeCreated", "thread", "threadName",
    "processName", "process", "exc_info", "exc_text", "stack_info",
    "message", "taskName",
}


class JsonFormatter(logging.Formatter):
    """Format records as JSON lines with timestamp, level, logger and message."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.utcnow().isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        extras = {}
        for key, value in record.__dict__.items():
            if key in _STANDARD_ATTRS:
                continue
            try:
                json.dumps(value)
                extras[key] = value
            except (TypeError, ValueError):
                extras[key] = str(value)

        if extras:
            log_entry["extra"] = extras

        return json.dumps(log_entry, default=str)


def get_logging_config(level: str, log_format: str) -> dict:
    """Build a dictConfig for the given level and format."""
    if log_format == "json":
        formatters = {
            "default": {"()": "backoffice_ledger.logging_config.JsonFormatter"},
        }
    else:
        formatters = {
            "default": {
                "format": "[{asctime}] {levelname} {name} {message}",
                "style": "{",
            },
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
            },
        },
        "root": {
            "handlers": ["console"],
            "level": "WARNING",
        },
        "loggers": {
            "backoffice_ledger": {
                "level": level,
            },
            "uvicorn.access": {
                "level": "WARNING",
            },
        },
    }


def configure_logging() -> None:
    """Apply the logging configuration from settings."""
    settings = get_settings()
    logging.config.dictConfig(
        get_logging_config(settings.LOG_LEVEL.upper(), settings.LOG_FORMAT)
    )
