"""Logging configuration for idcard-inspector.

Provides structured JSON logging. Identity numbers that end up in a log
message are masked before the record is emitted.
"""

import logging
import os
import re
import sys
from typing import Any, Optional

from pythonjsonlogger import jsonlogger

from idcard_inspector.core.masking import mask_code


# 18-character numbers first so a 15-digit run inside one is not matched alone
_ID_NUMBER_IN_TEXT = re.compile(r"(?<![0-9A-Za-z])(?:[0-9]{17}[0-9Xx]|[0-9]{15})(?![0-9A-Za-z])")


class IdentityNumberMaskingFilter(logging.Filter):
    """Filter that masks identity numbers in the formatted log message."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Replace identity numbers in the record message with a masked form."""
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            # Leave the record alone; the handler reports the bad format in emit()
            return True
        masked = _ID_NUMBER_IN_TEXT.sub(lambda m: mask_code(m.group(0)), message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with additional fields."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        """Add custom fields to log record."""
        super().add_fields(log_record, record, message_dict)

        if "levelname" in log_record:
            log_record["level"] = log_record.pop("levelname")
        if "asctime" in log_record:
            log_record["timestamp"] = log_record.pop("asctime")

        log_record["service"] = "idcard-inspector"


def setup_logging(
    level: Optional[str] = None,
    json_format: Optional[bool] = None,
) -> None:
    """Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to env var
               IDCARD_INSPECTOR_LOG_LEVEL or INFO.
        json_format: Whether to use JSON format. Defaults to env var
                     IDCARD_INSPECTOR_LOG_FORMAT == 'json' or True.
    """
    if level is None:
        level = os.getenv("IDCARD_INSPECTOR_LOG_LEVEL", "INFO").upper()
    if json_format is None:
        log_format = os.getenv("IDCARD_INSPECTOR_LOG_FORMAT", "json").lower()
        json_format = log_format == "json"

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.addFilter(IdentityNumberMaskingFilter())

    if json_format:
        formatter = CustomJsonFormatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # Presidio logs every recognizer load at INFO
    logging.getLogger("presidio-analyzer").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)
