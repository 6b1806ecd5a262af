"""Structured Logging — JSON formatter and setup for production observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (cycle_id, error_code, survival_tier, ...) surfaced when present
    - JSON format in production, human-readable in development

Design Decisions:
    - JSONFormatter on stdlib logging: no extra dependency
    - setup_logging called once at process start by whatever hosts the heartbeat;
      level and format default to HeartbeatConfig.log_level / log_format
"""

import logging
import json
from datetime import datetime, timezone

from heartbeat.config import get_settings

_EXTRA_FIELDS = (
    "cycle_id", "wallet_address", "network", "error_code", "reason",
    "credit_balance", "usdc_balance", "survival_tier",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str | None = None, fmt: str | None = None) -> logging.Handler:
    """Configure root logging; unset arguments come from HEARTBEAT_LOG_LEVEL / HEARTBEAT_LOG_FORMAT."""
    settings = get_settings()
    level = level or settings.log_level
    fmt = fmt or settings.log_format
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s — %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
