"""Structured Logging — JSON formatter and opt-in setup for applications embedding the SDK.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (provider, error_code, message_id, status_code, ...) surfaced when present
    - The SDK never configures logging on import; setup_logging is called by the host app
    - Repeated setup_logging calls replace the handler they installed (never duplicate
      records); handlers added by the host app are left alone

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - Components take an injected logging.Logger; this module only shapes output
"""

import json
import logging
from datetime import datetime, timezone

from rcs_sdk.config import get_settings

_HANDLER_NAME = "rcs_sdk.setup_logging"

_EXTRA_KEYS = (
    "provider", "error_code", "message_id", "status_code",
    "method", "url", "phone_number", "is_capable",
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
        for key in _EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(
    level: str | None = None, fmt: str | None = None, logger_name: str = "rcs_sdk",
) -> logging.Logger:
    """Attach a stream handler to the SDK logger (not the root logger).

    level / fmt default to RCS_LOG_LEVEL / RCS_LOG_FORMAT.
    """
    if level is None or fmt is None:
        settings = get_settings()
        level = level or settings.log_level
        fmt = fmt or settings.log_format
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    target = logging.getLogger(logger_name)
    for existing in list(target.handlers):
        if existing.get_name() == _HANDLER_NAME:
            target.removeHandler(existing)
    target.addHandler(handler)
    target.setLevel(getattr(logging, level.upper(), logging.INFO))
    return target
