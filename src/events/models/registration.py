import typing as t

from django.conf import settings
from django.db import models
from django.utils import timezone
from simple_history.models import HistoricalRecords

from common.models import TimeStampedModel

from .event import Event


class EventRegistrationQuerySet(models.QuerySet["EventRegistration"]):
    def approved(self) -> t.Self:
        """Registrations that hold a valid ticket."""
        return self.filter(status=EventRegistration.RegistrationStatus.APPROVED)

    def full(self) -> t.Self:
        """Select event and user as well."""
        return self.select_related("event", "user")


class EventRegistrationManager(models.Manager["EventRegistration"]):
    def get_queryset(self) -> EventRegistrationQuerySet:
        """Get base queryset."""
        return EventRegistrationQuerySet(self.model, using=self._db)

    def approved(self) -> EventRegistrationQuerySet:
        """Returns registrations that hold a valid ticket."""
        return self.get_queryset().approved()

    def full(self) -> EventRegistrationQuerySet:
        """Returns registrations with event and user selected."""
        return self.get_queryset().full()


class EventRegistration(TimeStampedModel):
    """A user's request to attend an event, carrying the ticket code once submitted."""

    class RegistrationStatus(models.TextChoices):
        PENDING = "pending", "Pending"
        APPROVED = "approved", "Approved"
        REJECTED = "rejected", "Rejected"
        WAITLISTED = "waitlisted", "Waitlisted"

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="registrations")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="registrations")
    external_id = models.CharField(max_length=255, db_index=True, help_text="Identity provider subject of the user.")
    name = models.CharField(max_length=255)
    cohort = models.CharField(max_length=128)
    batch = models.CharField(max_length=128)
    ticket_code = models.CharField(max_length=32, unique=True, editable=False)
    status = models.CharField(
        max_length=20, choices=RegistrationStatus.choices, default=RegistrationStatus.PENDING, db_index=True
    )
    registered_at = models.DateTimeField(default=timezone.now, db_index=True)

    history = HistoricalRecords()

    objects = EventRegistrationManager()

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["event", "user"], name="unique_registration_event_user"),
        ]
        ordering = ["-registered_at"]

    def __str__(self) -> str:
        return f"{self.ticket_code} | {self.name} @ {self.event.title}"
