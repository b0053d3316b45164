import typing as t

from django.conf import settings
from django.db import models
from django.utils import timezone

from common.models import TimeStampedModel


class EventQuerySet(models.QuerySet["Event"]):
    def approved(self) -> t.Self:
        """Events a moderator has published."""
        return self.filter(status=Event.EventStatus.APPROVED)

    def upcoming(self) -> t.Self:
        """Approved events that have not started yet, soonest first."""
        return self.approved().filter(start_time__gte=timezone.now()).order_by("start_time")

    def past(self) -> t.Self:
        """Approved events that already started, most recent first."""
        return self.approved().filter(start_time__lt=timezone.now()).order_by("-start_time")

    def with_organizer(self) -> t.Self:
        """Select the organizer as well."""
        return self.select_related("organizer")


class EventManager(models.Manager["Event"]):
    def get_queryset(self) -> EventQuerySet:
        """Get base queryset."""
        return EventQuerySet(self.model, using=self._db)

    def approved(self) -> EventQuerySet:
        """Returns approved events."""
        return self.get_queryset().approved()

    def upcoming(self) -> EventQuerySet:
        """Returns upcoming approved events."""
        return self.get_queryset().upcoming()

    def past(self) -> EventQuerySet:
        """Returns past approved events."""
        return self.get_queryset().past()


class Event(TimeStampedModel):
    class EventStatus(models.TextChoices):
        PENDING = "pending", "Pending"
        APPROVED = "approved", "Approved"
        REJECTED = "rejected", "Rejected"

    class EventType(models.TextChoices):
        WORKSHOP = "workshop", "Workshop"
        HACKATHON = "hackathon", "Hackathon"
        LECTURE = "lecture", "Lecture"
        MEETUP = "meetup", "Meetup"
        OTHER = "other", "Other"

    class LocationType(models.TextChoices):
        PHYSICAL = "physical", "Physical"
        VIRTUAL = "virtual", "Virtual"
        HYBRID = "hybrid", "Hybrid"

    title = models.CharField(max_length=255, db_index=True)
    slug = models.SlugField(max_length=128, unique=True)
    description = models.TextField(blank=True)
    requirements = models.TextField(blank=True, help_text="What attendees should bring or know beforehand.")
    event_type = models.CharField(max_length=20, choices=EventType.choices, default=EventType.OTHER, db_index=True)
    location_type = models.CharField(max_length=20, choices=LocationType.choices, default=LocationType.PHYSICAL)
    location = models.CharField(max_length=512, blank=True, help_text="Physical address or meeting link.")
    start_time = models.DateTimeField(db_index=True)
    end_time = models.DateTimeField(null=True, blank=True)
    registration_link = models.URLField(max_length=1024, blank=True)
    image_url = models.URLField(max_length=1024, blank=True)
    organizer = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="organized_events"
    )
    status = models.CharField(max_length=20, choices=EventStatus.choices, default=EventStatus.PENDING, db_index=True)

    # Set once the corresponding reminder batch has gone out; never reset.
    reminder_24h_sent = models.BooleanField(default=False)
    reminder_1h_sent = models.BooleanField(default=False)

    objects = EventManager()

    class Meta:
        ordering = ["start_time"]
        indexes = [
            models.Index(fields=["status", "start_time"], name="ix_event_status_start"),
        ]

    def __str__(self) -> str:
        return self.title

    @property
    def display_location(self) -> str:
        """Where attendees should go, as shown in emails and on tickets."""
        if self.location_type == self.LocationType.VIRTUAL:
            return "Virtual Event"
        return self.location
