"""Exception handlers for the API."""

import base64
import traceback
import typing as t

import orjson
import structlog
from django.conf import settings
from django.core.exceptions import ValidationError
from django.http import HttpRequest
from ninja.responses import Response

from events.exceptions import (
    AlreadyRegisteredError,
    EventNotFoundError,
    InvalidRegistrationTransitionError,
    MailNotConfiguredError,
    MissingProposalFieldsError,
    MissingRegistrationFieldsError,
    RegistrationNotFoundError,
    TicketCodeExhaustedError,
    TicketNotFoundError,
)

from .tasks import track_internal_error

logger = structlog.get_logger(__name__)

JSON_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


def _request_snapshot(request: HttpRequest) -> dict[str, t.Any]:
    user = getattr(request, "user", None)
    return {
        "method": request.method,
        "path": request.path,
        "headers": obfuscate(dict(request.headers)),
        "GET": obfuscate(request.GET.dict()),
        "POST": obfuscate(request.POST.dict()) if request.method == "POST" else {},
        "user": None if user is None else str(user),
    }


def _body_for_tracking(request: HttpRequest) -> tuple[str | None, t.Any]:
    """Return ``(base64_body, json_body)``; at most one of them is set."""
    if not request.body:
        return None, None
    is_json = request.headers.get("Content-Type") == "application/json"
    if request.method in JSON_BODY_METHODS and is_json:
        try:
            return None, obfuscate(orjson.loads(request.body))
        except orjson.JSONDecodeError:  # pragma: no cover
            pass
    return base64.b64encode(request.body).decode("ascii"), None


def handle_general_exception(request: HttpRequest, exc: Exception | t.Type[Exception]) -> Response:
    """Answer 500 and queue the failure for the error tracker.

    The traceback is echoed back only to staff or when DEBUG is on.
    """
    logger.exception("unhandled_api_error", path=request.path, method=request.method)
    tb_str = traceback.format_exc()
    encoded_payload, json_payload = _body_for_tracking(request)
    track_internal_error.delay(
        path=f"{request.method} {request.path}",
        traceback_str=tb_str,
        encoded_payload=encoded_payload,
        json_payload=json_payload,
        metadata=_request_snapshot(request),
    )
    data = {"detail": "Internal Server Error."}
    if settings.DEBUG or getattr(getattr(request, "user", None), "is_staff", False):  # pragma: no cover
        data["traceback"] = tb_str
    return Response(status=500, data=data)


def handle_django_validation_error(request: HttpRequest, exc: ValidationError | t.Type[ValidationError]) -> Response:
    """Map a model ``full_clean`` failure to a 400 with per-field messages."""
    logger.info("model_validation_failed", path=request.path, error=str(exc))
    if hasattr(exc, "message_dict"):
        errors = {field: list(messages) for field, messages in exc.message_dict.items()}
    else:
        errors = {"__all__": list(exc.messages)}  # type: ignore[union-attr]
    return Response(status=400, data={"errors": errors})


def _detail_response(status: int, event: str) -> t.Callable[[HttpRequest, Exception], Response]:
    def handler(request: HttpRequest, exc: Exception) -> Response:
        logger.info(event, path=request.path, detail=str(exc))
        return Response(status=status, data={"detail": str(exc)})

    handler.__name__ = f"handle_{event}"
    return handler


handle_missing_fields_error = _detail_response(400, "missing_fields")
handle_not_found_error = _detail_response(404, "not_found")
handle_conflict_error = _detail_response(409, "conflict")


def handle_ticket_code_exhausted_error(
    request: HttpRequest, exc: TicketCodeExhaustedError | t.Type[TicketCodeExhaustedError]
) -> Response:
    """Handle running out of ticket code attempts."""
    logger.error("ticket_code_exhausted", path=request.path)
    return Response(status=503, data={"detail": str(exc)})


def handle_mail_not_configured_error(
    request: HttpRequest, exc: MailNotConfiguredError | t.Type[MailNotConfiguredError]
) -> Response:
    """Handle an operation that requires outgoing mail when none is configured."""
    logger.error("mail_not_configured", path=request.path)
    return Response(status=500, data={"detail": str(exc)})


EXCEPTION_HANDLERS: dict[type[Exception], t.Callable[..., Response]] = {
    Exception: handle_general_exception,
    ValidationError: handle_django_validation_error,
    MissingRegistrationFieldsError: handle_missing_fields_error,
    MissingProposalFieldsError: handle_missing_fields_error,
    EventNotFoundError: handle_not_found_error,
    RegistrationNotFoundError: handle_not_found_error,
    TicketNotFoundError: handle_not_found_error,
    AlreadyRegisteredError: handle_conflict_error,
    InvalidRegistrationTransitionError: handle_conflict_error,
    TicketCodeExhaustedError: handle_ticket_code_exhausted_error,
    MailNotConfiguredError: handle_mail_not_configured_error,
}


MASKED_KEYS = frozenset({"password", "token", "x-api-key", "authorization", "authentication", "cookie"})


def obfuscate(data: dict[str, t.Any]) -> dict[str, t.Any]:
    """Copy of ``data`` with credential-bearing top-level keys masked."""
    if not isinstance(data, dict):
        return data
    return {key: "********" if str(key).lower() in MASKED_KEYS else value for key, value in data.items()}
