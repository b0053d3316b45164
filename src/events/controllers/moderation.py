from uuid import UUID

from django.db.models import QuerySet
from ninja_extra import api_controller, route
from ninja_extra.pagination import PageNumberPaginationExtra, PaginatedResponseSchema, paginate

from common.authentication import AuthProviderJWTAuth
from common.controllers import UserAwareController
from common.schema import ErrorResponse
from events import models, schema
from events.service import event_service, moderation_service
from events.service.moderation_service import ModerationOutcome


@api_controller("/admin", auth=AuthProviderJWTAuth(is_staff=True), tags=["Moderation"])
class ModerationController(UserAwareController):
    @route.get(
        "/registrations",
        url_name="list_registrations",
        response=PaginatedResponseSchema[schema.AdminRegistrationSchema],
    )
    @paginate(PageNumberPaginationExtra, page_size=50)
    def list_registrations(
        self, status: models.EventRegistration.RegistrationStatus | None = None
    ) -> QuerySet[models.EventRegistration]:
        """The moderation queue: registrations newest first, with event title and attendee email.

        Filter with `status` (e.g. `pending`); without it all registrations are listed.
        """
        return moderation_service.list_registrations(status=status)

    @route.post(
        "/registrations/{registration_id}/approve",
        url_name="approve_registration",
        response={200: schema.ModerationOutcomeSchema, 404: ErrorResponse, 409: ErrorResponse},
    )
    def approve_registration(self, registration_id: UUID) -> ModerationOutcome:
        """Approve a registration and email the ticket to the attendee.

        The approval always sticks. If the ticket email could not be sent (no mail credentials,
        no known email address, or a send error) the response carries a `warning`.
        """
        return moderation_service.approve(registration_id)

    @route.post(
        "/registrations/{registration_id}/reject",
        url_name="reject_registration",
        response={200: schema.ModerationOutcomeSchema, 404: ErrorResponse, 409: ErrorResponse},
    )
    def reject_registration(self, registration_id: UUID) -> ModerationOutcome:
        """Reject a registration and notify the attendee.

        Email problems are reported as a `warning`; the rejection itself always sticks.
        """
        return moderation_service.reject(registration_id)

    @route.post(
        "/events/{event_id}/approve",
        url_name="approve_event",
        response={200: schema.EventModerationSchema, 404: ErrorResponse},
    )
    def approve_event(self, event_id: UUID) -> models.Event:
        """Publish a proposed event."""
        return event_service.approve_event(event_id)

    @route.post(
        "/events/{event_id}/reject",
        url_name="reject_event",
        response={200: schema.EventModerationSchema, 404: ErrorResponse},
    )
    def reject_event(self, event_id: UUID) -> models.Event:
        """Turn down a proposed event."""
        return event_service.reject_event(event_id)
