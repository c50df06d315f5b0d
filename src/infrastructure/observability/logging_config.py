"""
Structured logging configuration using structlog.

Produces JSON log lines with timestamps, levels and the service name.  Fields
that could carry credentials or hash material are masked before rendering so
that a careless ``log.info(..., password=...)`` never reaches the aggregator.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

SERVICE_NAME: str = "passhash"

# Event keys whose values are replaced before rendering.
REDACTED_KEYS: frozenset[str] = frozenset({"password", "hash", "salt", "digest", "encoded"})
REDACTED = "***"


# ======================================================================
# Custom processors
# ======================================================================


def add_service_name(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Inject the service name into every log event."""
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def redact_secrets(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for key in REDACTED_KEYS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


# ======================================================================
# Setup
# ======================================================================


def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure structlog and the stdlib logging bridge for JSON output.

    Call once at application startup (the FastAPI ``lifespan``).  Records
    emitted through plain :mod:`logging` loggers go through the same chain.
    """

    numeric_level = getattr(logging, log_level.strip().upper(), logging.INFO)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_service_name,  # type: ignore[list-item]
        redact_secrets,  # type: ignore[list-item]
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(numeric_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Return a bound structlog logger for *name*.

    Extra context can be attached with ``.bind()``::

        log = get_logger("hashing").bind(algorithm="argon2")
        log.info("password_hashed", time_cost=2)
    """
    return structlog.get_logger(name)  # type: ignore[no-any-return]
