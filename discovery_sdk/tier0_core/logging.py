"""
discovery_sdk.tier0_core.logging
─────────────────────────────────
Structured logs with levels, context binding and redaction of credentials
(OAuth client secrets, proxy passwords) before they reach any sink.

Minimal stack: structlog (stdout JSON, or console for local runs)
Configure via: DISCOVERY_LOG_LEVEL, DISCOVERY_LOG_FORMAT=json|console
"""
from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from discovery_sdk.tier0_core.config import get_settings


# ── Configuration ─────────────────────────────────────────────────────────────

def _configure_structlog() -> None:
    settings = get_settings()
    log_level = settings.log_level.upper()
    log_format = settings.log_format.lower()

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        _redact_processor,
    ]

    if log_format == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level, logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    sdk_logger = logging.getLogger("discovery_sdk")
    sdk_logger.addHandler(handler)
    sdk_logger.setLevel(getattr(logging, log_level, logging.INFO))


# ── Redaction processor ───────────────────────────────────────────────────────

REDACT_KEYS = frozenset({
    "password", "proxy_password", "secret", "client_secret", "token",
    "access_token", "authorization", "credential", "credentials",
})

REDACTED = "[REDACTED]"


def _redact_processor(
    logger: Any, method: str, event_dict: dict
) -> dict:
    """Strip credential fields from log records before output."""
    for key in list(event_dict.keys()):
        if key.lower() in REDACT_KEYS and event_dict[key] is not None:
            event_dict[key] = REDACTED
    return event_dict


# ── Public API ────────────────────────────────────────────────────────────────

_configured = False


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Return a structured logger bound to the given name.

    Usage:
        log = get_logger(__name__)
        log.info("registry.binding.applied", service_url="https://reg/eureka/")
    """
    global _configured
    if not _configured:
        _configure_structlog()
        _configured = True
    return structlog.get_logger(name or __name__)

