"""Request context for structured logs."""

import typing as t
import uuid

import structlog
from django.http import HttpRequest, HttpResponse


class StructlogContextMiddleware:
    """Binds request metadata to structlog contextvars for the lifetime of a request.

    Every log event emitted while handling the request carries ``request_id``,
    method, path and client IP. The request id is echoed as ``X-Request-ID``.
    """

    def __init__(self, get_response: t.Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.path,
            ip_address=self._get_client_ip(request),
        )
        try:
            response = self.get_response(request)
        finally:
            structlog.contextvars.clear_contextvars()

        response["X-Request-ID"] = request_id
        return response

    def _get_client_ip(self, request: HttpRequest) -> str:
        """Client IP, preferring the first X-Forwarded-For hop."""
        x_forwarded_for = request.META.get("HTTP_X_FORWARDED_FOR")
        if x_forwarded_for:
            return str(x_forwarded_for.split(",")[0].strip())
        return str(request.META.get("REMOTE_ADDR", "unknown"))
