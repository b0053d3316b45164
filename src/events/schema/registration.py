"""Registration, ticket and moderation schemas."""

from datetime import datetime
from uuid import UUID

from ninja import Schema
from pydantic import AwareDatetime

from events.models import EventRegistration


class RegistrationCreateSchema(Schema):
    # Blank defaults: missing fields are reported by the registration workflow as a single message.
    event_slug: str = ""
    name: str = ""
    cohort: str = ""
    batch: str = ""


class RegistrationCreatedSchema(Schema):
    message: str
    registration_id: UUID
    ticket_code: str
    status: EventRegistration.RegistrationStatus


class TicketSchema(Schema):
    ticket_code: str
    name: str
    status: EventRegistration.RegistrationStatus
    event_title: str
    event_slug: str
    event_start_time: AwareDatetime
    event_location: str
    registered_at: AwareDatetime

    @staticmethod
    def resolve_event_title(obj: EventRegistration) -> str:
        return obj.event.title

    @staticmethod
    def resolve_event_slug(obj: EventRegistration) -> str:
        return obj.event.slug

    @staticmethod
    def resolve_event_start_time(obj: EventRegistration) -> datetime:
        return obj.event.start_time

    @staticmethod
    def resolve_event_location(obj: EventRegistration) -> str:
        return obj.event.display_location


class AdminRegistrationSchema(Schema):
    id: UUID
    ticket_code: str
    name: str
    cohort: str
    batch: str
    status: EventRegistration.RegistrationStatus
    registered_at: AwareDatetime
    event_id: UUID
    event_title: str
    user_email: str | None = None

    @staticmethod
    def resolve_event_title(obj: EventRegistration) -> str:
        return obj.event.title

    @staticmethod
    def resolve_user_email(obj: EventRegistration) -> str | None:
        return obj.user.email or None


class ModerationOutcomeSchema(Schema):
    success: bool
    status: EventRegistration.RegistrationStatus
    warning: str | None = None


class ReminderRunSchema(Schema):
    success: bool = True
    events_24h: int
    events_1h: int
    emails_sent: int
    emails_failed: int
