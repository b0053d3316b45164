"""Read-only admin for the unhandled error tracker."""

import json
import typing as t

from django.contrib import admin
from django.utils.html import format_html
from unfold.admin import ModelAdmin, TabularInline

from . import models


def _as_pre(value: t.Any) -> str:
    if not value:
        return "-"
    text = value if isinstance(value, str) else json.dumps(value, indent=2)
    return format_html('<pre style="font-size: 12px; white-space: pre-wrap;">{}</pre>', text)


class OccurrenceInline(TabularInline):  # type: ignore[misc]
    model = models.ErrorOccurrence
    fields = ["timestamp"]
    readonly_fields = ["timestamp"]
    ordering = ["-timestamp"]
    extra = 0
    can_delete = False


@admin.register(models.Error)
class ErrorAdmin(ModelAdmin):  # type: ignore[misc]
    list_display = ["path", "server_version", "times_seen", "created_at", "issue_solved"]
    list_filter = ["issue_solved", "server_version"]
    list_editable = ["issue_solved"]
    search_fields = ["path", "md5", "traceback"]
    fields = [
        "path",
        "md5",
        "server_version",
        "created_at",
        "times_seen",
        "issue_url",
        "issue_solved",
        "pretty_traceback",
        "pretty_json_payload",
        "pretty_request_metadata",
    ]
    readonly_fields = [
        "path",
        "md5",
        "server_version",
        "created_at",
        "times_seen",
        "pretty_traceback",
        "pretty_json_payload",
        "pretty_request_metadata",
    ]
    date_hierarchy = "created_at"
    ordering = ["-created_at"]
    inlines = [OccurrenceInline]

    @admin.display(description="Seen")
    def times_seen(self, obj: models.Error) -> int:
        return obj.erroroccurrence_set.count()

    @admin.display(description="Traceback")
    def pretty_traceback(self, obj: models.Error) -> str:
        return _as_pre(obj.traceback)

    @admin.display(description="JSON payload")
    def pretty_json_payload(self, obj: models.Error) -> str:
        return _as_pre(obj.json_payload)

    @admin.display(description="Request metadata")
    def pretty_request_metadata(self, obj: models.Error) -> str:
        return _as_pre(obj.request_metadata)

    def has_add_permission(self, request: t.Any) -> bool:
        return False
