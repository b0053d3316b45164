# src/events/admin/event.py
"""Admin classes for Event."""

import typing as t

from django.contrib import admin, messages
from django.db.models import QuerySet
from django.http import HttpRequest
from unfold.admin import ModelAdmin

from events import models
from events.admin.base import RegistrationInline, UserLinkMixin


@admin.register(models.Event)
class EventAdmin(ModelAdmin, UserLinkMixin):  # type: ignore[misc]
    """Admin model for Events."""

    list_display = [
        "title",
        "event_type",
        "location_type",
        "status",
        "start_time",
        "organizer_link",
        "registration_count",
        "reminder_24h_sent",
        "reminder_1h_sent",
    ]
    list_filter = ["status", "event_type", "location_type", "start_time"]
    search_fields = ["title", "slug", "organizer__username", "organizer__email"]
    autocomplete_fields = ["organizer"]
    prepopulated_fields = {"slug": ("title",)}
    date_hierarchy = "start_time"
    actions = ["approve_events", "reject_events"]
    inlines = [RegistrationInline]

    fieldsets = [
        (
            "Details",
            {
                "fields": (
                    ("title", "slug"),
                    "organizer",
                    "description",
                    "requirements",
                    ("registration_link", "image_url"),
                )
            },
        ),
        (
            "Schedule & Location",
            {
                "fields": (
                    ("start_time", "end_time"),
                    ("location_type", "location"),
                )
            },
        ),
        (
            "Moderation",
            {"fields": (("event_type", "status"), ("reminder_24h_sent", "reminder_1h_sent"))},
        ),
    ]

    def get_queryset(self, request: HttpRequest) -> QuerySet[models.Event]:
        return super().get_queryset(request).select_related("organizer")  # type: ignore[no-any-return]

    @admin.display(description="Organizer")
    def organizer_link(self, obj: models.Event) -> str | None:
        if not obj.organizer:
            return None
        return self.user_link(obj.organizer)

    @admin.display(description="Registrations")
    def registration_count(self, obj: models.Event) -> int:
        return obj.registrations.count()

    @admin.action(description="Approve selected events")
    def approve_events(self, request: HttpRequest, queryset: QuerySet[models.Event]) -> None:
        updated = queryset.update(status=models.Event.EventStatus.APPROVED)
        self.message_user(request, f"{updated} event(s) approved.", messages.SUCCESS)

    @admin.action(description="Reject selected events")
    def reject_events(self, request: HttpRequest, queryset: QuerySet[models.Event]) -> None:
        updated = queryset.update(status=models.Event.EventStatus.REJECTED)
        self.message_user(request, f"{updated} event(s) rejected.", messages.SUCCESS)

    def has_delete_permission(self, request: HttpRequest, obj: t.Any = None) -> bool:
        return bool(request.user.is_superuser)  # type: ignore[union-attr]
