"""Tests for the event reminder service."""

import typing as t
from datetime import datetime, timedelta
from datetime import timezone as dt_timezone
from unittest import mock

import pytest
from celery.exceptions import SoftTimeLimitExceeded
from django.core import mail

from accounts.models import ClubUser
from conftest import ClubUserFactory
from events.models import Event, EventRegistration
from events.service.reminder_service import EventReminderService
from events.service.ticket_email_service import ReminderWindow
from events.utils import generate_ticket_code

pytestmark = pytest.mark.django_db

NOW = datetime(2026, 3, 5, 18, 0, tzinfo=dt_timezone.utc)


def _event(slug: str, start: datetime, status: str = Event.EventStatus.APPROVED, **kwargs: t.Any) -> Event:
    return Event.objects.create(title=slug.title(), slug=slug, start_time=start, status=status, **kwargs)


def _register(
    event: Event, user: ClubUser, status: str = EventRegistration.RegistrationStatus.APPROVED
) -> EventRegistration:
    return EventRegistration.objects.create(
        event=event,
        user=user,
        external_id=t.cast(str, user.external_id),
        name=user.display_name,
        cohort="C7",
        batch="2025",
        ticket_code=generate_ticket_code(),
        status=status,
    )


@pytest.fixture
def service() -> EventReminderService:
    return EventReminderService(now=NOW)


class TestWindows:
    def test_window_bounds(self, service: EventReminderService) -> None:
        day_start, day_end = service.window_bounds(ReminderWindow.DAY_BEFORE)
        hour_start, hour_end = service.window_bounds(ReminderWindow.HOUR_BEFORE)

        assert (day_start, day_end) == (NOW + timedelta(hours=24), NOW + timedelta(hours=25))
        assert (hour_start, hour_end) == (NOW + timedelta(hours=1), NOW + timedelta(hours=2))

    def test_day_before_window_is_half_open(self, service: EventReminderService) -> None:
        at_start = _event("at-start", NOW + timedelta(hours=24))
        inside = _event("inside", NOW + timedelta(hours=24, minutes=59))
        _event("at-end", NOW + timedelta(hours=25))
        _event("too-early", NOW + timedelta(hours=23, minutes=59))

        assert set(service.get_events_for_window(ReminderWindow.DAY_BEFORE)) == {at_start, inside}

    def test_hour_before_window_is_half_open(self, service: EventReminderService) -> None:
        at_start = _event("soon", NOW + timedelta(hours=1))
        _event("very-soon", NOW + timedelta(minutes=30))
        _event("later", NOW + timedelta(hours=2))

        assert list(service.get_events_for_window(ReminderWindow.HOUR_BEFORE)) == [at_start]

    def test_only_approved_events_without_flag(self, service: EventReminderService) -> None:
        _event("pending", NOW + timedelta(hours=24, minutes=10), status=Event.EventStatus.PENDING)
        _event("already", NOW + timedelta(hours=24, minutes=20), reminder_24h_sent=True)
        due = _event("due", NOW + timedelta(hours=24, minutes=30), reminder_1h_sent=True)

        assert list(service.get_events_for_window(ReminderWindow.DAY_BEFORE)) == [due]


class TestRun:
    def test_sends_day_before_reminders_to_approved_attendees(
        self, service: EventReminderService, club_user_factory: ClubUserFactory
    ) -> None:
        event = _event("robotics", NOW + timedelta(hours=24, minutes=30))
        approved = _register(event, club_user_factory())
        _register(event, club_user_factory(), status=EventRegistration.RegistrationStatus.PENDING)
        _register(event, club_user_factory(), status=EventRegistration.RegistrationStatus.REJECTED)

        result = service.run()

        assert result.as_dict() == {"events_24h": 1, "events_1h": 0, "emails_sent": 1, "emails_failed": 0}
        assert len(mail.outbox) == 1
        sent = mail.outbox[0]
        assert sent.subject == "Reminder: Robotics is tomorrow!"
        assert approved.ticket_code in sent.body
        assert any(part.get("Content-ID") == "<ticket-qr-code>" for part in sent.message().walk())
        event.refresh_from_db()
        assert event.reminder_24h_sent is True
        assert event.reminder_1h_sent is False

    def test_hour_before_subject(self, service: EventReminderService, user: ClubUser) -> None:
        event = _event("hackathon", NOW + timedelta(hours=1, minutes=15))
        _register(event, user)

        result = service.run()

        assert result.events_1h == 1
        assert mail.outbox[0].subject == "Hurry! Hackathon starts in 1 hour!"
        event.refresh_from_db()
        assert event.reminder_1h_sent is True

    def test_second_run_sends_nothing(self, service: EventReminderService, user: ClubUser) -> None:
        event = _event("robotics", NOW + timedelta(hours=24, minutes=30))
        _register(event, user)

        service.run()
        result = EventReminderService(now=NOW + timedelta(minutes=10)).run()

        assert result.emails_sent == 0
        assert len(mail.outbox) == 1

    def test_event_without_attendees_is_flagged(self, service: EventReminderService) -> None:
        event = _event("empty", NOW + timedelta(hours=24, minutes=30))

        result = service.run()

        assert result.events_24h == 1
        assert result.emails_sent == 0
        event.refresh_from_db()
        assert event.reminder_24h_sent is True

    def test_attendee_without_email_is_skipped(
        self, service: EventReminderService, club_user_factory: ClubUserFactory
    ) -> None:
        event = _event("robotics", NOW + timedelta(hours=24, minutes=30))
        _register(event, club_user_factory(email=""))
        _register(event, club_user_factory())

        result = service.run()

        assert result.emails_sent == 1
        assert result.emails_failed == 0

    def test_one_failed_recipient_does_not_stop_the_others(
        self, service: EventReminderService, club_user_factory: ClubUserFactory
    ) -> None:
        event = _event("robotics", NOW + timedelta(hours=24, minutes=30))
        _register(event, club_user_factory())
        _register(event, club_user_factory())

        with mock.patch(
            "events.service.reminder_service.send_reminder_email", side_effect=[OSError("smtp down"), None]
        ):
            result = service.run()

        assert result.emails_sent == 1
        assert result.emails_failed == 1
        event.refresh_from_db()
        assert event.reminder_24h_sent is True

    def test_flag_is_set_even_when_every_recipient_fails(
        self, service: EventReminderService, club_user_factory: ClubUserFactory
    ) -> None:
        event = _event("robotics", NOW + timedelta(hours=24, minutes=30))
        _register(event, club_user_factory())
        _register(event, club_user_factory())

        with mock.patch("events.service.reminder_service.send_reminder_email", side_effect=OSError("smtp down")):
            result = service.run()

        assert result.emails_sent == 0
        assert result.emails_failed == 2
        assert result.failed_events == []
        event.refresh_from_db()
        assert event.reminder_24h_sent is True

    def test_soft_time_limit_aborts_the_pass(self, service: EventReminderService, user: ClubUser) -> None:
        event = _event("robotics", NOW + timedelta(hours=24, minutes=30))
        _register(event, user)

        with mock.patch(
            "events.service.reminder_service.send_reminder_email", side_effect=SoftTimeLimitExceeded()
        ):
            with pytest.raises(SoftTimeLimitExceeded):
                service.run()

        event.refresh_from_db()
        assert event.reminder_24h_sent is False

    def test_failing_event_does_not_stop_the_pass(self, service: EventReminderService, user: ClubUser) -> None:
        broken = _event("broken", NOW + timedelta(hours=24, minutes=10))
        fine = _event("fine", NOW + timedelta(hours=24, minutes=20))
        _register(fine, user)

        real_mark_sent = service.mark_sent

        def mark_sent(event: Event, window: ReminderWindow) -> bool:
            if event.pk == broken.pk:
                raise RuntimeError("db hiccup")
            return real_mark_sent(event, window)

        with mock.patch.object(service, "mark_sent", side_effect=mark_sent):
            result = service.run()

        assert result.failed_events == [str(broken.id)]
        assert result.events_24h == 2
        fine.refresh_from_db()
        assert fine.reminder_24h_sent is True

    def test_mark_sent_only_once(self, service: EventReminderService) -> None:
        event = _event("robotics", NOW + timedelta(hours=24, minutes=30))

        assert service.mark_sent(event, ReminderWindow.DAY_BEFORE) is True
        assert service.mark_sent(event, ReminderWindow.DAY_BEFORE) is False


class TestHourlyTicks:
    """Consecutive hourly passes around an event's start time."""

    def test_day_before_wave_goes_out_exactly_once(self, user: ClubUser) -> None:
        start = NOW + timedelta(hours=48)
        event = _event("robotics", start)
        _register(event, user)

        ticks = [
            start - timedelta(hours=25, minutes=30),
            start - timedelta(hours=24, minutes=30),
            start - timedelta(hours=24),
            start - timedelta(hours=23),
        ]
        picked_up = [EventReminderService(now=tick).run().events_24h for tick in ticks]

        assert picked_up == [0, 1, 0, 0]
        assert len(mail.outbox) == 1
        event.refresh_from_db()
        assert event.reminder_24h_sent is True
        assert event.reminder_1h_sent is False

    def test_both_waves_across_a_day(self, user: ClubUser) -> None:
        start = NOW + timedelta(hours=30, minutes=20)
        event = _event("robotics", start)
        _register(event, user)

        for hours_before in range(30, 0, -1):
            EventReminderService(now=start - timedelta(hours=hours_before, minutes=20)).run()

        assert [message.subject for message in mail.outbox] == [
            "Reminder: Robotics is tomorrow!",
            "Hurry! Robotics starts in 1 hour!",
        ]
