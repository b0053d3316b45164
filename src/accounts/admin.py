"""Admin interface for accounts app."""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from unfold.admin import ModelAdmin

from accounts.models import ClubUser


@admin.register(ClubUser)
class ClubUserAdmin(UserAdmin, ModelAdmin):  # type: ignore[misc]
    list_display = ["username", "name", "email", "tier", "points", "is_onboarded", "is_staff", "date_joined"]
    list_filter = ["is_staff", "is_superuser", "is_active", "is_onboarded", "tier"]
    search_fields = ["username", "email", "name", "first_name", "last_name", "external_id"]
    readonly_fields = ["external_id", "date_joined", "last_login"]
    ordering = ["-date_joined"]

    fieldsets = (
        (None, {"fields": ("username", "password", "external_id")}),
        ("Profile", {"fields": ("name", ("first_name", "last_name"), "email", "avatar_url", "bio", "university")}),
        (
            "Community",
            {
                "fields": (
                    ("tier", "points"),
                    ("sparks_received", "posts_published", "collaborations_count"),
                    "is_onboarded",
                )
            },
        ),
        ("Permissions", {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")}),
        ("Important dates", {"fields": ("last_login", "date_joined")}),
    )
