"""Service for sending event reminder emails."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta

import structlog
from celery.exceptions import SoftTimeLimitExceeded
from django.db.models import Prefetch, QuerySet
from django.utils import timezone

from common.models import SiteSettings
from events.models import Event, EventRegistration
from events.service.ticket_email_service import ReminderWindow, send_reminder_email

logger = structlog.get_logger(__name__)


@dataclass
class ReminderRunResult:
    """Counts of one reminder pass."""

    events_24h: int = 0
    events_1h: int = 0
    emails_sent: int = 0
    emails_failed: int = 0
    failed_events: list[str] = field(default_factory=list)

    def as_dict(self) -> dict[str, int]:
        return {
            "events_24h": self.events_24h,
            "events_1h": self.events_1h,
            "emails_sent": self.emails_sent,
            "emails_failed": self.emails_failed,
        }


class EventReminderService:
    """Service for sending the day-before and hour-before reminder waves.

    Each window is one hour wide with an exclusive upper bound, so an event falls
    into a given window on exactly one hourly run. The per-event window flag guards
    against a second wave if runs overlap or repeat within the hour.
    """

    def __init__(self, now: datetime | None = None, site_settings: SiteSettings | None = None):
        """Initialize the reminder service.

        Args:
            now: Reference time of this pass (defaults to the current time)
            site_settings: Site settings (fetched if not provided)
        """
        self.now = now or timezone.now()
        self.site_settings = site_settings or SiteSettings.get_solo()

    def window_bounds(self, window: ReminderWindow) -> tuple[datetime, datetime]:
        """Return the half-open ``[start, end)`` interval of event start times for a window."""
        start = self.now + timedelta(hours=window.hours)
        return start, start + timedelta(hours=1)

    def get_events_for_window(self, window: ReminderWindow) -> QuerySet[Event]:
        """Approved events starting inside the window that have not had this wave yet.

        Args:
            window: The reminder window

        Returns:
            QuerySet of events with prefetched approved registrations and their users
        """
        start, end = self.window_bounds(window)
        return Event.objects.filter(
            status=Event.EventStatus.APPROVED,
            start_time__gte=start,
            start_time__lt=end,
            **{window.flag_field: False},
        ).prefetch_related(
            Prefetch(
                "registrations",
                queryset=EventRegistration.objects.approved().select_related("user", "event"),
                to_attr="approved_registrations",
            )
        )

    def send_event_reminders(self, event: Event, window: ReminderWindow, result: ReminderRunResult) -> None:
        """Email every approved attendee of an event. One failed recipient does not stop the others."""
        for registration in event.approved_registrations:  # type: ignore[attr-defined]
            email = registration.user.email
            if not email:
                logger.info(
                    "reminder_skipped_no_email",
                    event_id=str(event.id),
                    registration_id=str(registration.id),
                )
                continue
            try:
                send_reminder_email(registration, email, window, site_settings=self.site_settings)
            except SoftTimeLimitExceeded:
                raise
            except Exception as e:
                result.emails_failed += 1
                logger.warning(
                    "reminder_email_failed",
                    event_id=str(event.id),
                    registration_id=str(registration.id),
                    window=window.name,
                    error=str(e),
                )
                continue
            result.emails_sent += 1

    def mark_sent(self, event: Event, window: ReminderWindow) -> bool:
        """Flip the event's window flag if it is still unset. Returns False if another run got there first."""
        updated = Event.objects.filter(pk=event.pk, **{window.flag_field: False}).update(
            **{window.flag_field: True, "updated_at": timezone.now()}
        )
        return bool(updated)

    def process_window(self, window: ReminderWindow, result: ReminderRunResult) -> int:
        """Send one reminder wave for every due event in the window. Returns the number of events found."""
        events = list(self.get_events_for_window(window))
        logger.info("event_reminder_scan", window=window.name, events_found=len(events))

        for event in events:
            try:
                self.send_event_reminders(event, window, result)
                if not self.mark_sent(event, window):
                    logger.warning("reminder_flag_already_set", event_id=str(event.id), window=window.name)
            except SoftTimeLimitExceeded:
                raise
            except Exception:
                result.failed_events.append(str(event.id))
                logger.exception("event_reminder_failed", event_id=str(event.id), window=window.name)
        return len(events)

    def run(self) -> ReminderRunResult:
        """Run one reminder pass over both windows."""
        result = ReminderRunResult()
        result.events_24h = self.process_window(ReminderWindow.DAY_BEFORE, result)
        result.events_1h = self.process_window(ReminderWindow.HOUR_BEFORE, result)
        logger.info("event_reminders_sent", **result.as_dict())
        return result
