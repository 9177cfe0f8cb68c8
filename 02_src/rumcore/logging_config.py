"""Structured logging configuration for the interaction agent."""

import json
import logging
import logging.config
import os
from datetime import datetime, timezone
from pathlib import Path

from .config import DEFAULT_LOG_PATH


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        interaction_id = getattr(record, "interaction_id", None)
        if interaction_id:
            log_data["interaction_id"] = interaction_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Extra context passed as logger.info(..., extra={"context": {...}})
        if hasattr(record, "context"):
            log_data["context"] = record.context

        return json.dumps(log_data, default=str)


class InteractionIdFilter(logging.Filter):
    """Attach the live interaction id to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        from .interaction.detector import get_current_interaction_id

        record.interaction_id = get_current_interaction_id()
        return True


def setup_logging(
    log_level: str | None = None,
    log_file: str | None = None,
    console: bool = True,
) -> None:
    """
    Setup structured logging for the agent.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
                   Defaults to LOG_LEVEL env var or INFO.
        log_file: Path to log file. Defaults to 04_logs/app.log.
        console: Also write JSON lines to stdout.
    """
    if log_level is None:
        log_level = os.getenv("LOG_LEVEL", "INFO")

    if log_file is None:
        log_file = os.getenv("LOG_FILE", str(DEFAULT_LOG_PATH))

    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    handlers = {
        "file": {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": log_file,
            "maxBytes": 10 * 1024 * 1024,  # 10 MB
            "backupCount": 5,
            "formatter": "json",
            "filters": ["interaction"],
            "encoding": "utf-8",
        },
    }
    if console:
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "formatter": "json",
            "filters": ["interaction"],
            "stream": "ext://sys.stdout",
        }

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {"()": "rumcore.logging_config.JSONFormatter"},
            },
            "filters": {
                "interaction": {"()": "rumcore.logging_config.InteractionIdFilter"},
            },
            "handlers": handlers,
            "root": {
                "level": log_level.upper(),
                "handlers": list(handlers),
            },
        }
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
