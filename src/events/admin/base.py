# src/events/admin/base.py
"""Base admin components: mixins and inlines."""

import typing as t

from django.urls import reverse
from django.utils.html import format_html
from unfold.admin import TabularInline

from events import models


class UserLinkMixin:
    """Mixin to add a link to a user."""

    def user_link(self, obj: t.Any) -> str:
        user = getattr(obj, "user", obj)
        url = reverse("admin:accounts_clubuser_change", args=[user.id])
        return format_html('<a href="{}">{}</a>', url, user.display_name)

    user_link.short_description = "User"  # type: ignore[attr-defined]


class EventLinkMixin:
    """Mixin to add a link to an event."""

    def event_link(self, obj: t.Any) -> str:
        url = reverse("admin:events_event_change", args=[obj.event.id])
        return format_html('<a href="{}">{}</a>', url, obj.event.title)

    event_link.short_description = "Event"  # type: ignore[attr-defined]


class RegistrationInline(TabularInline):  # type: ignore[misc]
    """Inline for the registrations of an event."""

    model = models.EventRegistration
    extra = 0
    can_delete = False
    fields = ["ticket_code", "name", "cohort", "batch", "status", "registered_at"]
    readonly_fields = ["ticket_code", "name", "cohort", "batch", "status", "registered_at"]
    show_change_link = True

    def has_add_permission(self, request: t.Any, obj: t.Any = None) -> bool:
        return False
