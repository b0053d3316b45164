# src/events/admin/registration.py
"""Admin classes for EventRegistration, with moderation actions."""

import typing as t

from django.contrib import admin, messages
from django.db.models import QuerySet
from django.http import HttpRequest
from simple_history.admin import SimpleHistoryAdmin
from unfold.admin import ModelAdmin

from events import models
from events.admin.base import EventLinkMixin, UserLinkMixin
from events.exceptions import InvalidRegistrationTransitionError
from events.service import moderation_service
from events.service.moderation_service import ModerationOutcome


@admin.register(models.EventRegistration)
class EventRegistrationAdmin(SimpleHistoryAdmin, ModelAdmin, EventLinkMixin, UserLinkMixin):  # type: ignore[misc]
    """Admin model for registrations. Moderation actions go through the same workflow as the API."""

    list_display = ["ticket_code", "name", "event_link", "user_link", "cohort", "batch", "status", "registered_at"]
    list_filter = ["status", "registered_at", "event"]
    search_fields = ["ticket_code", "name", "user__email", "user__username", "event__title"]
    readonly_fields = ["ticket_code", "external_id", "registered_at", "created_at", "updated_at"]
    autocomplete_fields = ["event", "user"]
    date_hierarchy = "registered_at"
    ordering = ["-registered_at"]
    actions = ["approve_registrations", "reject_registrations"]

    def get_queryset(self, request: HttpRequest) -> QuerySet[models.EventRegistration]:
        return super().get_queryset(request).select_related("event", "user")  # type: ignore[no-any-return]

    def _moderate(
        self,
        request: HttpRequest,
        queryset: QuerySet[models.EventRegistration],
        decide: t.Callable[[t.Any], ModerationOutcome],
    ) -> None:
        done = 0
        for registration in queryset:
            try:
                outcome = decide(registration.pk)
            except InvalidRegistrationTransitionError as e:
                self.message_user(request, f"{registration.ticket_code}: {e}", messages.ERROR)
                continue
            done += 1
            if outcome.warning:
                self.message_user(request, f"{registration.ticket_code}: {outcome.warning}", messages.WARNING)
        self.message_user(request, f"{done} registration(s) updated.", messages.SUCCESS)

    @admin.action(description="Approve selected registrations and email tickets")
    def approve_registrations(self, request: HttpRequest, queryset: QuerySet[models.EventRegistration]) -> None:
        self._moderate(request, queryset, moderation_service.approve)

    @admin.action(description="Reject selected registrations")
    def reject_registrations(self, request: HttpRequest, queryset: QuerySet[models.EventRegistration]) -> None:
        self._moderate(request, queryset, moderation_service.reject)
