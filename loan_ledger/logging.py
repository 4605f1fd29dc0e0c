"""Logging setup for loan-ledger.

Ledger log calls pass the affected identifiers through ``extra``::

    logger.info("Loan %s paid off", loan_id, extra={"loan_id": loan_id})

The standard format shows only the message; ``JsonFormatter`` lifts the
identifiers into top-level keys so log lines can be joined with exported
ledger records.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

STANDARD_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Record attributes copied into JSON output when a log call supplies them
LEDGER_FIELDS = ("customer_id", "loan_id", "payment_id", "reason", "event_type")


def setup_logging(level: str = "INFO", format_type: str = "standard") -> None:
    """Send loan-ledger logs to stdout.

    Parameters
    ----------
    level : str
        Log level name; unknown names fall back to INFO.
    format_type : str
        "standard" for pipe separated text, "json" for one object per line.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if format_type == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(fmt=STANDARD_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    logging.getLogger("loan_ledger").setLevel(log_level)

    # Third-party chatter stays at WARNING even in DEBUG runs
    for name in ("confluent_kafka", "faker"):
        logging.getLogger(name).setLevel(logging.WARNING)


class JsonFormatter(logging.Formatter):
    """Render each record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for name in LEDGER_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_data[name] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Free-form fields passed as extra={"extra": {...}}
        if hasattr(record, "extra"):
            log_data.update(record.extra)

        return json.dumps(log_data, default=str)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` (usually ``__name__``)."""
    return logging.getLogger(name)
