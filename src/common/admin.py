import typing as t

from django.contrib import admin
from solo.admin import SingletonModelAdmin
from unfold.admin import ModelAdmin

from . import models


@admin.register(models.SiteSettings)
class SiteSettingsAdmin(SingletonModelAdmin, ModelAdmin):  # type: ignore[misc]
    readonly_fields = ["created_at", "updated_at"]
    fieldsets = (
        ("Outgoing mail", {"fields": ("live_emails", "internal_catchall_email")}),
        ("Frontend", {"fields": ("frontend_base_url",)}),
        ("Audit", {"fields": ("created_at", "updated_at")}),
    )


@admin.register(models.EmailLog)
class EmailLogAdmin(ModelAdmin):  # type: ignore[misc]
    """Sent mail, viewable but never editable."""

    list_display = ["subject", "to", "sent_at", "has_body"]
    list_filter = ["sent_at"]
    search_fields = ["subject", "to"]
    fields = ["to", "subject", "sent_at", "body", "html"]
    readonly_fields = fields
    date_hierarchy = "sent_at"
    ordering = ["-sent_at"]

    @admin.display(boolean=True, description="Body kept")
    def has_body(self, obj: models.EmailLog) -> bool:
        return obj.compressed_body is not None

    def has_add_permission(self, request: t.Any) -> bool:
        return False

    def has_change_permission(self, request: t.Any, obj: t.Any = None) -> bool:
        return False
