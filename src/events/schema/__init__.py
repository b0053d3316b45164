"""Events schema package."""

from .event import EventModerationSchema, EventProposalSchema, EventRetrieveSchema, OrganizerSchema
from .registration import (
    AdminRegistrationSchema,
    ModerationOutcomeSchema,
    RegistrationCreatedSchema,
    RegistrationCreateSchema,
    ReminderRunSchema,
    TicketSchema,
)

__all__ = [
    "AdminRegistrationSchema",
    "EventModerationSchema",
    "EventProposalSchema",
    "EventRetrieveSchema",
    "ModerationOutcomeSchema",
    "OrganizerSchema",
    "RegistrationCreateSchema",
    "RegistrationCreatedSchema",
    "ReminderRunSchema",
    "TicketSchema",
]
