import typing as t
import uuid

from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models


class ClubUserQueryset(models.QuerySet["ClubUser"]):
    """Queryset for ClubUser."""


class ClubUserManager(UserManager["ClubUser"]):
    def get_queryset(self) -> ClubUserQueryset:
        """Get queryset for ClubUser."""
        return ClubUserQueryset(self.model)


class ClubUser(AbstractUser):
    """A club member, mirrored from the external identity provider on first sight."""

    class Tier(models.IntegerChoices):
        SPARK_INITIATE = 1, "Spark Initiate"
        IDEA_IGNITER = 2, "Idea Igniter"
        FORGE_MASTER = 3, "Forge Master"
        RND_FELLOW = 4, "RnD Fellow"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    external_id = models.CharField(
        max_length=255, unique=True, null=True, blank=True, help_text="Subject identifier at the identity provider"
    )
    name = models.CharField(max_length=255, blank=True, db_index=True)
    avatar_url = models.URLField(max_length=1024, blank=True)
    bio = models.TextField(blank=True)
    university = models.CharField(max_length=255, blank=True)

    tier = models.PositiveSmallIntegerField(choices=Tier.choices, default=Tier.SPARK_INITIATE)
    points = models.PositiveIntegerField(default=0)
    sparks_received = models.PositiveIntegerField(default=0)
    posts_published = models.PositiveIntegerField(default=0)
    collaborations_count = models.PositiveIntegerField(default=0)
    is_onboarded = models.BooleanField(default=False)

    objects = ClubUserManager()  # type: ignore[misc]

    class Meta:
        ordering = ["username"]

    def __str__(self) -> str:
        return self.display_name

    @property
    def display_name(self) -> str:
        """Display name."""
        return self.name or self.get_full_name() or self.username

    def save(self, *args: t.Any, **kwargs: t.Any) -> None:
        """Keep the display name in sync with first/last name when it was never set."""
        if not self.name:
            self.name = self.get_full_name() or "Anonymous"
        super().save(*args, **kwargs)
