"""Logging configuration for the dental records tools.

Structured JSON formatting for production log shipping and a human-readable
format for interactive use. Log lines go to stderr so command output on
stdout stays clean.

Record context:
    Adapters attach ``patient_id`` and ``record_index`` through ``extra=`` when
    a log line concerns one stored record; the JSON formatter promotes them to
    top-level keys. Names and contact details are never logged.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO

RECORD_FIELDS = ("patient_id", "record_index")


class StructuredFormatter(logging.Formatter):
    """Structured JSON formatter for logs."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Parameters:
            record: Log record to format

        Returns:
            JSON string representation of log record
        """
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "line": record.lineno,
        }
        for field in RECORD_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_data[field] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def setup_logging(
    use_json: bool = False,
    log_level: str = "WARNING",
    stream: Optional[TextIO] = None,
) -> logging.Handler:
    """Route all log output through a single handler on the root logger.

    Parameters:
        use_json: Emit one JSON object per line instead of plain text
        log_level: Logging level name; unknown names fall back to WARNING
        stream: Destination stream, stderr by default

    Returns:
        The installed handler
    """
    level = getattr(logging, log_level.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    if use_json:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)-8s %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
    root_logger.addHandler(handler)
    return handler
