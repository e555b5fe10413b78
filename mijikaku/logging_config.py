"""Logging configuration for the shortener service."""

import json
import logging
import sys


LOGGER_NAME = "mijikaku"
PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class JsonFormatter(logging.Formatter):
    """One JSON object per line.

    Messages are encoded with json.dumps, so quotes in database errors
    or URLs never break the line.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record, DATE_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def setup_logging(level: str = "INFO", json_format: bool = False) -> logging.Logger:
    """Attach a stdout handler to the ``mijikaku`` logger.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            unknown names fall back to INFO
        json_format: Emit JSON lines instead of plain text

    Returns:
        The configured logger
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)
    # One app per test calls this repeatedly
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(
        JsonFormatter() if json_format else logging.Formatter(PLAIN_FORMAT, datefmt=DATE_FORMAT)
    )
    logger.addHandler(handler)

    return logger
