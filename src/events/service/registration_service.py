"""Registration workflow: from a submitted form to a pending registration with a ticket code."""

import structlog
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction

from accounts.service.identity import ExternalIdentity, resolve_user
from events.exceptions import (
    AlreadyRegisteredError,
    EventNotFoundError,
    MissingRegistrationFieldsError,
    TicketCodeExhaustedError,
    TicketNotFoundError,
)
from events.models import Event, EventRegistration
from events.utils import generate_ticket_code

logger = structlog.get_logger(__name__)

MAX_TICKET_CODE_ATTEMPTS = 10

REGISTRATION_SUBMITTED_MESSAGE = "Registration submitted! You will receive your ticket once approved."


def allocate_ticket_code(max_attempts: int = MAX_TICKET_CODE_ATTEMPTS) -> str:
    """Generate a ticket code that no registration uses yet.

    Raises:
        TicketCodeExhaustedError: if every attempt collided.
    """
    for attempt in range(1, max_attempts + 1):
        code = generate_ticket_code()
        if not EventRegistration.objects.filter(ticket_code=code).exists():
            return code
        logger.warning("ticket_code_collision", attempt=attempt)
    raise TicketCodeExhaustedError()


def register(
    *,
    event_slug: str,
    name: str,
    cohort: str,
    batch: str,
    identity: ExternalIdentity,
) -> EventRegistration:
    """Register the caller for an event.

    The registration starts out pending; the ticket is only emailed once a moderator approves it.

    Raises:
        MissingRegistrationFieldsError: if any of the form fields is blank.
        EventNotFoundError: if no approved event has the given slug.
        AlreadyRegisteredError: if the caller already holds a registration for the event.
        TicketCodeExhaustedError: if no free ticket code could be found.
    """
    fields = {"event_slug": event_slug, "name": name, "cohort": cohort, "batch": batch}
    cleaned = {key: (value or "").strip() for key, value in fields.items()}
    if not all(cleaned.values()):
        raise MissingRegistrationFieldsError()

    event = Event.objects.approved().filter(slug=cleaned["event_slug"]).first()
    if event is None:
        raise EventNotFoundError()

    user = resolve_user(identity)

    if EventRegistration.objects.filter(event=event, user=user).exists():
        logger.info("registration_duplicate", event_id=str(event.id), user_id=str(user.id))
        raise AlreadyRegisteredError()

    try:
        with transaction.atomic():
            registration = EventRegistration.objects.create(
                event=event,
                user=user,
                external_id=identity.subject,
                name=cleaned["name"],
                cohort=cleaned["cohort"],
                batch=cleaned["batch"],
                ticket_code=allocate_ticket_code(),
                status=EventRegistration.RegistrationStatus.PENDING,
            )
    except (IntegrityError, DjangoValidationError) as e:
        # A concurrent request for the same (event, user) won the insert.
        if EventRegistration.objects.filter(event=event, user=user).exists():
            logger.info("registration_duplicate_race", event_id=str(event.id), user_id=str(user.id))
            raise AlreadyRegisteredError() from e
        raise

    logger.info(
        "registration_created",
        registration_id=str(registration.id),
        event_id=str(event.id),
        user_id=str(user.id),
        ticket_code=registration.ticket_code,
    )
    return registration


def get_ticket(ticket_code: str) -> EventRegistration:
    """Look up a registration by its ticket code.

    Raises:
        TicketNotFoundError: if the code is unknown.
    """
    registration = EventRegistration.objects.full().filter(ticket_code=ticket_code.strip().upper()).first()
    if registration is None:
        raise TicketNotFoundError()
    return registration
