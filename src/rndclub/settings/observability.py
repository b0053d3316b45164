"""Structured logging for rndclub.

Every record, whether emitted through structlog or through a plain stdlib
logger (Django, Celery, httpx), ends up in one handler that renders JSON in
production and colored key/value lines under DEBUG.
"""

import re
import typing as t

import structlog
from decouple import config

from .base import DEBUG, VERSION

SERVICE_NAME = config("SERVICE_NAME", default="rndclub")
DEPLOYMENT_ENVIRONMENT = config("DEPLOYMENT_ENVIRONMENT", default="development" if DEBUG else "production")
LOG_LEVEL = config("LOG_LEVEL", default="INFO")

REDACTED_KEY_FRAGMENTS = ("password", "secret", "token", "authorization", "cookie", "api_key")
EMAIL_PATTERN = re.compile(r"\b[\w.-]+@[\w.-]+\.\w+\b")


def _redact(key: str, value: t.Any) -> t.Any:
    lowered = key.lower()
    if any(fragment in lowered for fragment in REDACTED_KEY_FRAGMENTS):
        return "[REDACTED]"
    if isinstance(value, dict):
        return {k: _redact(str(k), v) for k, v in value.items()}
    if isinstance(value, str) and "email" not in lowered:
        # addresses are only allowed under keys that say they hold one
        return EMAIL_PATTERN.sub("[EMAIL]", value)
    return value


def scrub_pii(logger: t.Any, method_name: str, event_dict: dict[str, t.Any]) -> dict[str, t.Any]:
    """Blank out credentials and mask stray email addresses before rendering."""
    return {key: _redact(key, value) for key, value in event_dict.items()}


def stamp_service(logger: t.Any, method_name: str, event_dict: dict[str, t.Any]) -> dict[str, t.Any]:
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict.setdefault("version", VERSION)
    event_dict.setdefault("environment", DEPLOYMENT_ENVIRONMENT)
    return event_dict


RENDERER: t.Any = structlog.dev.ConsoleRenderer() if DEBUG else structlog.processors.JSONRenderer()

# Shared by structlog loggers and by records coming from the stdlib.
_COMMON_CHAIN: list[t.Any] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
    stamp_service,
    scrub_pii,
]

structlog.configure(
    processors=[
        *_COMMON_CHAIN,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)


def _quiet(level: str) -> dict[str, t.Any]:
    return {"handlers": ["stdout"], "level": level, "propagate": False}


LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "rndclub": {
            "()": structlog.stdlib.ProcessorFormatter,
            "processors": [structlog.stdlib.ProcessorFormatter.remove_processors_meta, RENDERER],
            "foreign_pre_chain": _COMMON_CHAIN,
        },
    },
    "handlers": {
        "stdout": {"class": "logging.StreamHandler", "formatter": "rndclub"},
    },
    "root": {"handlers": ["stdout"], "level": LOG_LEVEL},
    "loggers": {
        "django": _quiet("INFO"),
        "django.db.backends": _quiet("WARNING"),
        "celery": _quiet("INFO"),
        "httpx": _quiet("WARNING"),
    },
}
