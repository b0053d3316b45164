"""
This conftest.py provides fixtures shared by all app test suites.
"""

import secrets
import string
import typing as t
from datetime import timedelta

import faker
import jwt
import pytest
from django.conf import settings as django_settings
from django.core.cache import cache
from django.test.client import Client
from django.utils import timezone

from accounts.models import ClubUser
from accounts.service.identity import ExternalIdentity
from events.models import Event, EventRegistration
from events.utils import generate_ticket_code
from rndclub.celery import app as celery_app

TEST_JWT_KEY = "test-signing-key-" + "x" * 48


@pytest.fixture(autouse=True)
def identity_provider_settings(settings: t.Any) -> None:
    """Sign and verify test tokens with a fixed key; no profile API unless a test opts in."""
    settings.AUTH_PROVIDER_JWT_KEY = TEST_JWT_KEY
    settings.AUTH_PROVIDER_JWT_ALGORITHM = "HS256"
    settings.AUTH_PROVIDER_JWT_AUDIENCE = ""
    settings.AUTH_PROVIDER_JWT_ISSUER = ""
    settings.AUTH_PROVIDER_SECRET_KEY = ""


@pytest.fixture(autouse=True)
def mail_credentials(settings: t.Any) -> None:
    """Pretend SMTP credentials are configured and capture mail in memory."""
    settings.EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"
    settings.EMAIL_HOST_USER = "mailer@example.com"
    settings.EMAIL_HOST_PASSWORD = "app-password"


@pytest.fixture(autouse=True)
def enable_celery_eager_mode(settings: t.Any) -> None:
    """Enable Celery eager mode for tests so tasks execute synchronously.

    This ensures that Celery tasks run immediately in the same process,
    allowing tests to verify their side effects without async complications.
    """
    settings.CELERY_TASK_ALWAYS_EAGER = True
    settings.CELERY_TASK_EAGER_PROPAGATES = True
    celery_app.conf.task_always_eager = True
    celery_app.conf.task_eager_propagates = True


@pytest.fixture(autouse=True)
def clear_cache() -> None:
    """Reset the cache before each test, since throttling state lives there."""
    cache.clear()


@pytest.fixture
def no_mail_credentials(settings: t.Any) -> None:
    settings.EMAIL_HOST_USER = ""
    settings.EMAIL_HOST_PASSWORD = ""


def make_identity_token(subject: str, **claims: t.Any) -> str:
    """Sign a bearer token the way the identity provider would."""
    now = timezone.now()
    payload = {"sub": subject, "iat": now, "exp": now + timedelta(hours=1), **claims}
    return jwt.encode(
        payload, django_settings.AUTH_PROVIDER_JWT_KEY, algorithm=django_settings.AUTH_PROVIDER_JWT_ALGORITHM
    )


def client_for(user: ClubUser) -> Client:
    """API client authenticated as an existing user."""
    token = make_identity_token(t.cast(str, user.external_id), email=user.email)
    return Client(HTTP_AUTHORIZATION=f"Bearer {token}")


class ClubUserFactory:
    """Factory for creating ClubUser instances for testing."""

    fake = faker.Faker()

    def create_user(self, **kwargs: t.Any) -> ClubUser:
        external_id = kwargs.pop(
            "external_id", "user_" + "".join(secrets.choice(string.ascii_lowercase + string.digits) for _ in range(12))
        )
        username = kwargs.pop("username", external_id)
        email = kwargs.pop("email", f"{external_id}@example.com")
        first_name = kwargs.pop("first_name", self.fake.first_name())
        last_name = kwargs.pop("last_name", self.fake.last_name())
        return ClubUser.objects.create_user(
            username=username,
            email=email,
            external_id=external_id,
            first_name=first_name,
            last_name=last_name,
            **kwargs,
        )

    def __call__(self, **kwargs: t.Any) -> ClubUser:
        return self.create_user(**kwargs)


@pytest.fixture
def club_user_factory() -> ClubUserFactory:
    return ClubUserFactory()


@pytest.fixture
def user(club_user_factory: ClubUserFactory) -> ClubUser:
    return club_user_factory(external_id="user_member", email="member@example.com")


@pytest.fixture
def moderator(club_user_factory: ClubUserFactory) -> ClubUser:
    return club_user_factory(external_id="user_moderator", email="moderator@example.com", is_staff=True)


@pytest.fixture
def identity(user: ClubUser) -> ExternalIdentity:
    return ExternalIdentity(subject=t.cast(str, user.external_id), email=user.email)


@pytest.fixture
def user_client(user: ClubUser) -> Client:
    """API client for a regular member."""
    return client_for(user)


@pytest.fixture
def moderator_client(moderator: ClubUser) -> Client:
    """API client for a moderator."""
    return client_for(moderator)


@pytest.fixture
def event(moderator: ClubUser) -> Event:
    """An approved event three days from now."""
    return Event.objects.create(
        title="Intro to Robotics",
        slug="intro-to-robotics-1700000000000",
        description="Build a line follower.",
        location="Lab 2, Engineering Building",
        start_time=timezone.now() + timedelta(days=3),
        organizer=moderator,
        status=Event.EventStatus.APPROVED,
    )


@pytest.fixture
def registration(event: Event, user: ClubUser) -> EventRegistration:
    """A pending registration of ``user`` for ``event``."""
    return EventRegistration.objects.create(
        event=event,
        user=user,
        external_id=t.cast(str, user.external_id),
        name="Ada Lovelace",
        cohort="Cohort 7",
        batch="2025",
        ticket_code=generate_ticket_code(),
    )
