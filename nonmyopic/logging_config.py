"""
Logging setup for the solver: human-readable text or one JSON object per line.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Literal

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per record: time, level, logger and message."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)


def configure_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING",
    format: Literal["json", "text"] = "text",
) -> logging.Logger:
    """
    Attach a stderr handler to the `nonmyopic` logger, replacing any earlier one.

    Results go to stdout, so logs are kept on stderr.
    """
    logger = logging.getLogger("nonmyopic")
    logger.setLevel(getattr(logging, level))
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(getattr(logging, level))
    if format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    logger.addHandler(handler)

    return logger
