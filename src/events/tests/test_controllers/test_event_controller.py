"""Tests for the public event endpoints."""

from datetime import timedelta

import orjson
import pytest
from django.test.client import Client
from django.urls import reverse
from django.utils import timezone

from accounts.models import ClubUser
from events.models import Event

pytestmark = pytest.mark.django_db


def test_list_events_anonymous(client: Client, event: Event) -> None:
    Event.objects.create(
        title="Pending", slug="pending-1", start_time=timezone.now() + timedelta(days=1), status="pending"
    )

    response = client.get(reverse("api:list_events"))

    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 1
    result = data["results"][0]
    assert result["slug"] == event.slug
    assert result["organizer"]["display_name"] == event.organizer.display_name  # type: ignore[union-attr]
    assert result["display_location"] == "Lab 2, Engineering Building"


def test_list_past_events(client: Client, event: Event) -> None:
    past = Event.objects.create(
        title="Old", slug="old-1", start_time=timezone.now() - timedelta(days=1), status="approved"
    )

    response = client.get(reverse("api:list_events"), {"past": "true"})

    assert [e["slug"] for e in response.json()["results"]] == [past.slug]


def test_get_event(client: Client, event: Event) -> None:
    response = client.get(reverse("api:get_event", kwargs={"slug": event.slug}))

    assert response.status_code == 200
    assert response.json()["title"] == event.title


def test_get_unknown_event(client: Client) -> None:
    response = client.get(reverse("api:get_event", kwargs={"slug": "nope"}))

    assert response.status_code == 404
    assert response.json() == {"detail": "Event not found."}


def test_virtual_event_location(client: Client, event: Event) -> None:
    event.location_type = Event.LocationType.VIRTUAL
    event.save()

    response = client.get(reverse("api:get_event", kwargs={"slug": event.slug}))

    assert response.json()["display_location"] == "Virtual Event"


class TestProposeEvent:
    url = reverse("api:propose_event")

    def test_requires_authentication(self, client: Client) -> None:
        response = client.post(self.url, data={"title": "Talk"}, content_type="application/json")

        assert response.status_code == 401

    def test_creates_pending_event(self, user_client: Client, user: ClubUser) -> None:
        start = (timezone.now() + timedelta(days=5)).isoformat()

        response = user_client.post(
            self.url,
            data=orjson.dumps({"title": "Soldering 101", "start_time": start, "location": "Makerspace"}),
            content_type="application/json",
        )

        assert response.status_code == 201, response.content
        data = response.json()
        assert data["status"] == "pending"
        assert data["slug"].startswith("soldering-101-")
        event = Event.objects.get(pk=data["id"])
        assert event.organizer == user

    def test_missing_title(self, user_client: Client) -> None:
        response = user_client.post(
            self.url,
            data=orjson.dumps({"start_time": timezone.now().isoformat()}),
            content_type="application/json",
        )

        assert response.status_code == 400
        assert response.json() == {"detail": "Title and Start Time are required."}
