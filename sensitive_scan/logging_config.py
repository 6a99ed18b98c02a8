# sensitive_scan/logging_config.py

"""JSON logging for the scanner.

Scanner log lines carry match metadata (type, index, field) passed through
``extra``. Matched text must never reach a log sink, so the formatter masks
the keys that could hold it.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any, Dict, Optional

# Attributes every LogRecord carries; anything else came in through `extra`.
_STANDARD_ATTRS = set(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}

# Extra keys that could carry matched text
MASKED_KEYS = frozenset({"value", "text", "original_snippets"})
MASK = "***"

NOISY_LOGGERS = ("presidio-analyzer", "presidio-anonymizer")


class StructuredFormatter(logging.Formatter):
    """Formats records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key in _STANDARD_ATTRS or key in log_data:
                continue
            log_data[key] = MASK if key in MASKED_KEYS else value

        return json.dumps(log_data, default=str)


def configure_logging(level: str = "INFO", stream: Optional[IO[str]] = None) -> None:
    """Routes all logging through a single JSON handler.

    Args:
        level: Logging level name, case-insensitive
        stream: Output stream, stdout by default
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(StructuredFormatter())
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging configured", extra={"log_level": logging.getLevelName(log_level)}
    )
