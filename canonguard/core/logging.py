from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

PACKAGE_LOGGER = "canonguard"

# Extra record attributes copied into the JSON payload when present.
STRUCTURED_FIELDS: tuple[str, ...] = (
    "path",
    "correlation_id",
    "expected_country",
    "violations",
    "stats",
)


class JsonFormatter(logging.Formatter):
    """Format logs as structured JSON for audit trails."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "module": record.name,
            "message": record.getMessage(),
        }
        for field in STRUCTURED_FIELDS:
            if hasattr(record, field):
                payload[field] = getattr(record, field)
        return json.dumps(payload, default=str, ensure_ascii=False)


def get_logger(name: str) -> logging.Logger:
    """Create or reuse a configured JSON logger."""
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(logging.INFO)
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def configure_logging(level: str) -> None:
    """Apply a log level to every logger under the package namespace."""
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)
    for name, logger in logging.root.manager.loggerDict.items():
        if name.startswith(f"{PACKAGE_LOGGER}.") and isinstance(logger, logging.Logger):
            logger.setLevel(level)
