import typing as t

from django.conf import settings
from django.db import IntegrityError, models

T = t.TypeVar("T", bound=models.Model)


def get_or_create_with_race_protection(
    model: type[T],
    lookup_filter: models.Q,
    defaults: dict[str, t.Any],
) -> tuple[T, bool]:
    """Fetch the row matching ``lookup_filter``, creating it from ``defaults`` if absent.

    Two concurrent first-time requests can both miss the lookup; the loser of the
    insert hits a unique constraint and gets the winner's row instead.

    Returns:
        ``(instance, created)``.
    """
    manager: models.Manager[T] = getattr(model, "objects")
    existing = manager.filter(lookup_filter).first()
    if existing is not None:
        return existing, False
    try:
        return manager.create(**defaults), True
    except IntegrityError:
        existing = manager.filter(lookup_filter).first()
        if existing is None:
            raise
        return existing, False


def mail_is_configured() -> bool:
    """Whether SMTP credentials are present, i.e. transactional mail can actually go out."""
    return bool(settings.EMAIL_HOST_USER and settings.EMAIL_HOST_PASSWORD)
