"""Transactional emails around a registration: ticket, rejection notice and reminders."""

import enum
import typing as t

from django.template.loader import render_to_string
from django.utils import timezone
from django.utils.dateformat import format as date_format

from common.models import SiteSettings
from common.tasks import InlineImage, deliver_email
from events.models import Event, EventRegistration
from events.utils import get_ticket_url, make_ticket_qr_png

QR_CONTENT_ID = "ticket-qr-code"
QR_FILENAME = "ticket-qr.png"


class ReminderWindow(enum.Enum):
    """Lookahead windows of the reminder job: hours until the window opens, and its wording."""

    DAY_BEFORE = (24, "tomorrow")
    HOUR_BEFORE = (1, "in 1 hour")

    @property
    def hours(self) -> int:
        return self.value[0]

    @property
    def phrase(self) -> str:
        return self.value[1]

    @property
    def flag_field(self) -> str:
        """Event field recording that this window's reminders went out."""
        return "reminder_24h_sent" if self is ReminderWindow.DAY_BEFORE else "reminder_1h_sent"

    def subject(self, event: Event) -> str:
        if self is ReminderWindow.DAY_BEFORE:
            return f"Reminder: {event.title} is tomorrow!"
        return f"Hurry! {event.title} starts in 1 hour!"


def format_event_start(event: Event) -> str:
    """Start time as shown to attendees, e.g. ``Friday, March 6, 2026 at 6:00 PM UTC``."""
    return date_format(timezone.localtime(event.start_time), "l, F j, Y \\a\\t g:i A T")


def _base_context(registration: EventRegistration, site_settings: SiteSettings) -> dict[str, t.Any]:
    event = registration.event
    return {
        "attendee_name": registration.name,
        "event_title": event.title,
        "event_start_formatted": format_event_start(event),
        "event_location": event.display_location,
        "ticket_code": registration.ticket_code,
        "ticket_url": get_ticket_url(registration.ticket_code, site_settings=site_settings),
        "qr_content_id": QR_CONTENT_ID,
    }


def _qr_image(registration: EventRegistration, site_settings: SiteSettings) -> InlineImage:
    return InlineImage(
        content_id=QR_CONTENT_ID,
        filename=QR_FILENAME,
        content=make_ticket_qr_png(registration.ticket_code, site_settings=site_settings),
    )


def send_ticket_email(registration: EventRegistration, to: str) -> None:
    """Email the approved ticket with an inline QR code."""
    site_settings = SiteSettings.get_solo()
    context = _base_context(registration, site_settings)
    deliver_email(
        to=to,
        subject=f"Your Ticket for {registration.event.title}",
        body=render_to_string("events/emails/ticket_approved.txt", context),
        html_body=render_to_string("events/emails/ticket_approved.html", context),
        inline_images=[_qr_image(registration, site_settings)],
    )


def send_rejection_email(registration: EventRegistration, to: str) -> None:
    """Tell the attendee their registration was not approved."""
    site_settings = SiteSettings.get_solo()
    context = _base_context(registration, site_settings)
    deliver_email(
        to=to,
        subject=f"Update on your registration for {registration.event.title}",
        body=render_to_string("events/emails/registration_rejected.txt", context),
        html_body=render_to_string("events/emails/registration_rejected.html", context),
    )


def send_reminder_email(
    registration: EventRegistration,
    to: str,
    window: ReminderWindow,
    site_settings: SiteSettings | None = None,
) -> None:
    """Remind an approved attendee of the upcoming event, with their ticket QR code."""
    site_settings = site_settings or SiteSettings.get_solo()
    context = {**_base_context(registration, site_settings), "time_phrase": window.phrase}
    deliver_email(
        to=to,
        subject=window.subject(registration.event),
        body=render_to_string("events/emails/event_reminder.txt", context),
        html_body=render_to_string("events/emails/event_reminder.html", context),
        inline_images=[_qr_image(registration, site_settings)],
    )
