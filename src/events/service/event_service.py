"""Event proposals, moderation and public listing."""

import re
import time
import typing as t
from datetime import datetime
from uuid import UUID

import structlog

from accounts.service.identity import ExternalIdentity, resolve_user
from events.exceptions import EventNotFoundError, MissingProposalFieldsError
from events.models import Event
from events.models.event import EventQuerySet

logger = structlog.get_logger(__name__)

SLUG_BASE_MAX_LENGTH = 96


def make_event_slug(title: str, now_ms: int | None = None) -> str:
    """Lowercased title with whitespace runs turned into dashes, suffixed with the epoch milliseconds."""
    now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
    base = re.sub(r"\s+", "-", title.strip().lower())[:SLUG_BASE_MAX_LENGTH]
    base = re.sub(r"[^a-z0-9_-]", "", base).strip("-") or "event"
    return f"{base}-{now_ms}"


def propose_event(
    identity: ExternalIdentity,
    *,
    title: str,
    start_time: datetime | None,
    **fields: t.Any,
) -> Event:
    """Submit an event for moderation. The proposing user becomes its organizer.

    Raises:
        MissingProposalFieldsError: if the title or start time is missing.
    """
    title = (title or "").strip()
    if not title or start_time is None:
        raise MissingProposalFieldsError()

    organizer = resolve_user(identity)
    event = Event.objects.create(
        title=title,
        slug=make_event_slug(title),
        start_time=start_time,
        organizer=organizer,
        status=Event.EventStatus.PENDING,
        **{key: value for key, value in fields.items() if value is not None},
    )
    logger.info("event_proposed", event_id=str(event.id), organizer_id=str(organizer.id), slug=event.slug)
    return event


def _get_event_by_id(event_id: UUID) -> Event:
    event = Event.objects.filter(pk=event_id).first()
    if event is None:
        raise EventNotFoundError()
    return event


def set_event_status(event_id: UUID, status: str) -> Event:
    """Set an event's moderation status.

    Raises:
        EventNotFoundError: if no such event exists.
    """
    event = _get_event_by_id(event_id)
    event.status = status
    event.save(update_fields=["status", "updated_at"])
    logger.info("event_status_changed", event_id=str(event.id), status=status)
    return event


def approve_event(event_id: UUID) -> Event:
    """Publish a proposed event."""
    return set_event_status(event_id, Event.EventStatus.APPROVED)


def reject_event(event_id: UUID) -> Event:
    """Turn down a proposed event."""
    return set_event_status(event_id, Event.EventStatus.REJECTED)


def list_events(past: bool = False) -> EventQuerySet:
    """Approved events, upcoming soonest first or past most recent first."""
    qs = Event.objects.past() if past else Event.objects.upcoming()
    return qs.with_organizer()


def get_event(slug: str) -> Event:
    """An approved event by slug.

    Raises:
        EventNotFoundError: if no approved event has that slug.
    """
    event = Event.objects.approved().with_organizer().filter(slug=slug).first()
    if event is None:
        raise EventNotFoundError()
    return event
