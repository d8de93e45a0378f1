"""
Structured Logging Configuration Module

JSON log lines for schedule generation and the API. Engine modules log
through log_action(), which attaches the action being performed, the
resource it concerns and a details mapping to the record.
"""

import logging
import json
from datetime import datetime, timezone
from typing import Optional

ROOT_LOGGER = "loan_amortizer"

# Record attributes copied into the JSON line when present
STRUCTURED_FIELDS = ("action", "resource", "details")

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per record, None-valued fields omitted"""

    def format(self, record):
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in STRUCTURED_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                entry[name] = value

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def setup_logging(level: str = "INFO", logger_name: str = ROOT_LOGGER,
                  log_format: str = "json", log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach a single handler to the package logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        logger_name: Logger to configure
        log_format: "json" for structured lines, anything else for plain text
        log_file: Write to this file instead of stderr

    Returns:
        The configured logger
    """
    logger = logging.getLogger(logger_name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.FileHandler(log_file) if log_file else logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if log_format == "json" else logging.Formatter(TEXT_FORMAT))

    logger.addHandler(handler)
    logger.setLevel(level.upper())
    logger.propagate = False
    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    return logging.getLogger(name)


def log_action(logger: logging.Logger, level: str, message: str,
               action: Optional[str] = None, resource: Optional[str] = None,
               details: Optional[dict] = None):
    """Log message with the action, resource and details attached to the record"""
    logger.log(
        logging.getLevelName(level.upper()), message,
        extra={"action": action, "resource": resource, "details": details}
    )
