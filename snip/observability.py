"""
Structured logging for the snippet store.

- structlog configuration with JSON/console rendering
- sensitive data redaction
- a single `emit_event` entry point used by persistence and background jobs
"""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import structlog

SCHEMA_VERSION = "1.0"

_SENSITIVE_KEYS = {"token", "password", "secret", "authorization"}


def _redact_sensitive(logger, method, event_dict: Dict[str, Any]):
    for key in list(event_dict.keys()):
        if any(s in str(key).lower() for s in _SENSITIVE_KEYS):
            event_dict[key] = "[REDACTED]"
    return event_dict


def _add_schema_version(logger, method, event_dict: Dict[str, Any]):
    event_dict.setdefault("schema_version", SCHEMA_VERSION)
    return event_dict


def _choose_renderer(log_format: Optional[str] = None):
    debug = str(os.getenv("DEBUG", "")).lower() in {"1", "true", "yes"}
    fmt = (log_format or os.getenv("SNIP_LOG_FORMAT") or "").lower().strip()
    if debug or fmt == "console":
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def setup_structlog_logging(min_level: str | int = "INFO", log_format: Optional[str] = None) -> None:
    level = logging.getLevelName(min_level) if isinstance(min_level, str) else int(min_level)

    if not logging.getLogger().handlers:
        logging.basicConfig(level=level, handlers=[logging.StreamHandler()])
    else:
        logging.getLogger().setLevel(level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            _redact_sensitive,
            _add_schema_version,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            _choose_renderer(log_format),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def setup_from_settings(settings) -> None:
    """Configure logging from a `snip.config.Settings` instance."""
    setup_structlog_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)


def emit_event(event: str, severity: str = "info", **fields: Any) -> None:
    logger = structlog.get_logger()
    fields.setdefault("event", event)

    if severity in {"error", "critical"}:
        logger.error(**fields)
    elif severity in {"warn", "warning"}:
        logger.warning(**fields)
    elif severity == "debug":
        logger.debug(**fields)
    else:
        logger.info(**fields)
