"""Tasks for tracking internal errors."""

import base64
import hashlib
import typing as t

import structlog
from celery import shared_task
from django.db import transaction

from .models import Error, ErrorOccurrence

logger = structlog.get_logger(__name__)


@shared_task
def track_internal_error(
    *,
    path: str,
    traceback_str: str,
    encoded_payload: str | None = None,
    json_payload: t.Any = None,
    metadata: dict[str, t.Any] | None = None,
) -> None:
    """Record an unhandled API error.

    Errors are grouped by the md5 of path and traceback; each call adds an occurrence.
    """
    md5 = hashlib.md5(f"{path}\n{traceback_str}".encode(), usedforsecurity=False).hexdigest()
    payload = base64.b64decode(encoded_payload) if encoded_payload else None
    with transaction.atomic():
        error, created = Error.objects.get_or_create(
            md5=md5,
            defaults={
                "path": path[:1024],
                "traceback": traceback_str,
                "payload": payload,
                "json_payload": json_payload,
                "request_metadata": metadata,
            },
        )
        ErrorOccurrence.objects.create(signature=error)
    logger.info("internal_error_tracked", error_id=str(error.id), new_signature=created, path=path)
