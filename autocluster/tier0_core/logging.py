"""
autocluster.tier0_core.logging
───────────────────────────────
Structured logs with levels, context injection (node name, backend) and
redaction of credential-looking fields, which can arrive through
environment-supplied discovery tags.

Minimal stack: structlog (stdout JSON or console)
Configure via: AUTOCLUSTER_LOG_LEVEL, AUTOCLUSTER_LOG_FORMAT=json|console
"""
from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from autocluster.tier0_core.config import AutoclusterConfig


# ── Configuration ─────────────────────────────────────────────────────────────

_handler: logging.Handler | None = None


def _configure_structlog(log_level: str, log_format: str) -> None:
    global _handler
    log_level = log_level.upper()
    level = getattr(logging, log_level, logging.INFO)

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        _redact_processor,
    ]

    if log_format.lower() == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
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

    root_logger = logging.getLogger()
    if _handler is not None:
        root_logger.removeHandler(_handler)
    _handler = logging.StreamHandler(sys.stdout)
    _handler.setFormatter(formatter)
    root_logger.addHandler(_handler)
    root_logger.setLevel(level)


# ── Redaction processor ───────────────────────────────────────────────────────

_REDACT_KEYS = frozenset({
    "password", "secret", "token", "acl_token", "api_key",
    "access_key", "secret_key", "authorization", "credential",
})

_REDACTED = "[REDACTED]"


def _redact_processor(
    logger: Any, method: str, event_dict: dict
) -> dict:
    """Strip sensitive fields from log records before output."""
    for key in list(event_dict.keys()):
        if key.lower() in _REDACT_KEYS:
            event_dict[key] = _REDACTED
    return event_dict


# ── Public API ────────────────────────────────────────────────────────────────

_configured = False


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Return a structured logger bound to the given name.

    Usage:
        log = get_logger(__name__)
        log.error("coerce.unsupported_type", target="symbol", value=repr(v))
    """
    global _configured
    if not _configured:
        _configure_structlog(
            os.getenv("AUTOCLUSTER_LOG_LEVEL", "INFO"),
            os.getenv("AUTOCLUSTER_LOG_FORMAT", "json"),
        )
        _configured = True
    return structlog.get_logger(name or __name__)


def configure_logging(config: AutoclusterConfig) -> None:
    """
    Apply the level and format from a loaded config. Call once at startup,
    before the first log line; loggers already used keep their level.
    """
    global _configured
    _configure_structlog(config.log_level, config.log_format)
    _configured = True


def bind_context(**kwargs: Any) -> None:
    """
    Bind key-value pairs to the current context; every later log line
    carries them.

    Usage (at startup):
        bind_context(node=str(node_name), backend="consul")
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all context-bound log fields."""
    structlog.contextvars.clear_contextvars()
