"""Moderator decisions on registrations.

A decision is persisted before any email goes out. Mail problems never undo it;
they come back to the moderator as a warning on an otherwise successful outcome.
"""

import typing as t
from dataclasses import dataclass
from uuid import UUID

import structlog
from django.db.models import QuerySet

from accounts.service.auth_provider import lookup_primary_email
from common.utils import mail_is_configured
from events.exceptions import InvalidRegistrationTransitionError, RegistrationNotFoundError
from events.models import EventRegistration
from events.service import ticket_email_service

logger = structlog.get_logger(__name__)

Status = EventRegistration.RegistrationStatus

MISSING_CREDENTIALS_WARNING = "Registration {verb}, but email credentials are not configured."
MISSING_EMAIL_WARNING = "Registration {verb}, but user email not found."
SEND_FAILED_WARNING = "Registration {verb}, but the email could not be sent."

# Target status -> statuses it may be reached from. Re-applying the same decision is allowed and resends the email.
ALLOWED_TRANSITIONS: dict[str, set[str]] = {
    Status.APPROVED: {Status.PENDING, Status.APPROVED},
    Status.REJECTED: {Status.PENDING, Status.REJECTED},
}


@dataclass(frozen=True)
class ModerationOutcome:
    """Result of a moderation decision. ``success`` reflects the status change only."""

    success: bool
    status: str
    warning: str | None = None


def get_registration(registration_id: UUID) -> EventRegistration:
    """Fetch a registration with its event and user.

    Raises:
        RegistrationNotFoundError: if no such registration exists.
    """
    registration = EventRegistration.objects.full().filter(pk=registration_id).first()
    if registration is None:
        raise RegistrationNotFoundError()
    return registration


def resolve_attendee_email(registration: EventRegistration) -> str | None:
    """The attendee's email: the stored one, else the identity provider's primary address."""
    if registration.user.email:
        return registration.user.email
    subject = registration.user.external_id or registration.external_id
    if not subject:
        return None
    return lookup_primary_email(subject)


def _check_transition(registration: EventRegistration, target: str) -> None:
    if registration.status not in ALLOWED_TRANSITIONS[target]:
        raise InvalidRegistrationTransitionError(f"Cannot change a {registration.status} registration to {target}.")


def _set_status(registration: EventRegistration, target: str) -> None:
    if registration.status != target:
        registration.status = target
        registration.save(update_fields=["status", "updated_at"])


def _decide(
    registration_id: UUID,
    target: str,
    verb: str,
    send: t.Callable[[EventRegistration, str], None],
) -> ModerationOutcome:
    registration = get_registration(registration_id)
    _check_transition(registration, target)
    email = resolve_attendee_email(registration)
    _set_status(registration, target)
    logger.info(
        "registration_status_changed",
        registration_id=str(registration.id),
        status=target,
        event_id=str(registration.event_id),
    )

    if not mail_is_configured():
        logger.warning("registration_email_skipped", registration_id=str(registration.id), reason="no_credentials")
        return ModerationOutcome(success=True, status=target, warning=MISSING_CREDENTIALS_WARNING.format(verb=verb))
    if not email:
        logger.warning("registration_email_skipped", registration_id=str(registration.id), reason="no_address")
        return ModerationOutcome(success=True, status=target, warning=MISSING_EMAIL_WARNING.format(verb=verb))

    try:
        send(registration, email)
    except Exception as e:
        logger.warning(
            "registration_email_failed",
            registration_id=str(registration.id),
            status=target,
            error=str(e),
        )
        return ModerationOutcome(success=True, status=target, warning=SEND_FAILED_WARNING.format(verb=verb))

    logger.info("registration_email_sent", registration_id=str(registration.id), status=target)
    return ModerationOutcome(success=True, status=target)


def approve(registration_id: UUID) -> ModerationOutcome:
    """Approve a registration and email the ticket.

    Raises:
        RegistrationNotFoundError: if the registration does not exist.
        InvalidRegistrationTransitionError: if the registration was rejected or waitlisted.
    """
    return _decide(registration_id, Status.APPROVED, "approved", ticket_email_service.send_ticket_email)


def reject(registration_id: UUID) -> ModerationOutcome:
    """Reject a registration and notify the attendee.

    Raises:
        RegistrationNotFoundError: if the registration does not exist.
        InvalidRegistrationTransitionError: if the registration was approved or waitlisted.
    """
    return _decide(registration_id, Status.REJECTED, "rejected", ticket_email_service.send_rejection_email)


def list_registrations(status: str | None = Status.PENDING) -> QuerySet[EventRegistration]:
    """The moderation queue: registrations in a status, newest first. ``None`` lists all."""
    qs = EventRegistration.objects.full().order_by("-registered_at")
    if status:
        qs = qs.filter(status=status)
    return qs
