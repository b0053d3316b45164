"""Tests for the top-level API endpoints and error handling."""

import typing as t
from unittest import mock

import pytest
from django.conf import settings
from django.core.exceptions import ValidationError
from django.test.client import Client
from django.urls import reverse

from api.exception_handlers import handle_django_validation_error, obfuscate
from api.models import Error, ErrorOccurrence
from api.tasks import track_internal_error
from events.models import Event

pytestmark = pytest.mark.django_db


def test_version(client: Client) -> None:
    response = client.get(reverse("api:version"))

    assert response.status_code == 200
    assert response.json() == {"version": settings.VERSION}


def test_healthcheck(client: Client) -> None:
    response = client.get(reverse("api:healthcheck"))

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_unhandled_error_is_tracked(client: Client, event: Event) -> None:
    with mock.patch("events.service.event_service.Event.objects.approved", side_effect=RuntimeError("boom")):
        response = client.get(reverse("api:get_event", kwargs={"slug": event.slug}))

    assert response.status_code == 500
    assert response.json()["detail"] == "Internal Server Error."
    error = Error.objects.get()
    assert error.path == f"GET /api/events/{event.slug}"
    assert "RuntimeError: boom" in error.traceback
    assert ErrorOccurrence.objects.filter(signature=error).count() == 1


def test_track_internal_error_groups_by_signature() -> None:
    for _ in range(2):
        track_internal_error(path="GET /api/x", traceback_str="Traceback...")
    track_internal_error(path="GET /api/y", traceback_str="Traceback...")

    assert Error.objects.count() == 2
    assert Error.objects.get(path="GET /api/x").erroroccurrence_set.count() == 2


def test_validation_error_handler(rf: t.Any) -> None:
    response = handle_django_validation_error(rf.get("/"), ValidationError({"name": ["This field is required."]}))

    assert response.status_code == 400


def test_obfuscate() -> None:
    assert obfuscate({"Authorization": "Bearer x", "Accept": "json"}) == {
        "Authorization": "********",
        "Accept": "json",
    }
