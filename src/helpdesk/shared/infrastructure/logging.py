"""
Structured Logging
==================

One JSON object per log line, so the request store, assistant and HTTP
layers can be followed by correlation id in any log aggregator.

Every line carries ``timestamp``, ``environment`` and, inside an HTTP
request, ``correlation_id``. Values under secret-looking keys (Supabase API
key, tokens, passwords) are replaced before the line is written.

Usage:
    from helpdesk.shared.infrastructure.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Requests fetched", extra={"user_id": "u-1", "count": 3})
"""

import logging
import sys
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator

from pythonjsonlogger import jsonlogger

REDACTED = "***REDACTED***"
SENSITIVE_KEY_MARKERS = ("password", "api_key", "apikey", "authorization", "token")

# Libraries that log every request/query at INFO
NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "httpx", "httpcore")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that stamps service context and hides secrets."""

    def __init__(self, *args: Any, environment: str = "unknown", **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.environment = environment

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record.setdefault("timestamp", datetime.now(timezone.utc).isoformat())
        log_record["environment"] = getattr(record, "environment", self.environment)

        correlation_id = getattr(record, "correlation_id", None)
        if correlation_id is not None:
            log_record["correlation_id"] = correlation_id

        for key, value in log_record.items():
            if isinstance(value, str) and _is_sensitive(key):
                log_record[key] = REDACTED


def _is_sensitive(key: str) -> bool:
    lowered = key.lower()
    return any(marker in lowered for marker in SENSITIVE_KEY_MARKERS)


def setup_logging(level: str = "INFO", environment: str = "development") -> None:
    """
    Route all logging through a single JSON handler on stdout.

    Called once from the application lifespan; calling it again replaces the
    handler rather than adding a second one.
    """
    numeric_level = logging.getLevelName(level.upper())

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(CustomJsonFormatter(
        "%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        environment=environment,
    ))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(numeric_level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Module logger; pass ``__name__``."""
    return logging.getLogger(name)


@contextmanager
def log_latency(logger: logging.Logger, operation: str, **extra_context: Any) -> Iterator[None]:
    """
    Log how long the wrapped block took, whether or not it raised.

    Usage:
        with log_latency(logger, "request_store_fetch", user_id=user_id):
            requests = await repository.get_requests(user_id)
    """
    started = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
        logger.info(
            f"{operation} completed",
            extra={"operation": operation, "latency_ms": elapsed_ms, **extra_context},
        )
