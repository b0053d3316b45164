"""Tests for the scheduler hook that runs reminder passes."""

import typing as t
from datetime import timedelta

import pytest
from django.core import mail
from django.test.client import Client
from django.urls import reverse
from django.utils import timezone

from accounts.models import ClubUser
from events.models import Event, EventRegistration

pytestmark = pytest.mark.django_db

RUN_URL = reverse("api:run_reminders")


@pytest.fixture
def cron_secret(settings: t.Any) -> str:
    settings.CRON_SECRET = "hourly-secret"
    return "hourly-secret"


@pytest.fixture
def cron_client(cron_secret: str) -> Client:
    return Client(HTTP_AUTHORIZATION=f"Bearer {cron_secret}")


def test_requires_secret(client: Client, cron_secret: str) -> None:
    assert client.get(RUN_URL).status_code == 401
    assert Client(HTTP_AUTHORIZATION="Bearer wrong").get(RUN_URL).status_code == 401


def test_run_sends_due_reminders(cron_client: Client, user: ClubUser) -> None:
    event = Event.objects.create(
        title="Robotics",
        slug="robotics-1",
        start_time=timezone.now() + timedelta(hours=1, minutes=30),
        status=Event.EventStatus.APPROVED,
    )
    EventRegistration.objects.create(
        event=event,
        user=user,
        external_id=t.cast(str, user.external_id),
        name="Ada",
        cohort="C7",
        batch="2025",
        ticket_code="TICKET-123456-ABCD",
        status=EventRegistration.RegistrationStatus.APPROVED,
    )

    response = cron_client.get(RUN_URL)

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "events_24h": 0,
        "events_1h": 1,
        "emails_sent": 1,
        "emails_failed": 0,
    }
    assert mail.outbox[0].subject == "Hurry! Robotics starts in 1 hour!"


@pytest.mark.usefixtures("no_mail_credentials")
def test_missing_credentials(cron_client: Client) -> None:
    response = cron_client.get(RUN_URL)

    assert response.status_code == 500
    assert response.json() == {"detail": "Missing email credentials"}
