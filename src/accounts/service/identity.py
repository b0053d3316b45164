"""Mapping of identity provider subjects to local users."""

from dataclasses import dataclass

import structlog
from django.db.models import Q

from accounts.models import ClubUser
from common.utils import get_or_create_with_race_protection

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ExternalIdentity:
    """The caller, as asserted by a verified identity provider token."""

    subject: str
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    image_url: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip() or "Anonymous"


def resolve_user(identity: ExternalIdentity) -> ClubUser:
    """Return the local user for an external identity, creating it on first sight.

    Repeated calls for the same subject return the same user. Concurrent first
    calls may race on the insert; the loser picks up the winner's row.
    """
    user, created = get_or_create_with_race_protection(
        ClubUser,
        Q(external_id=identity.subject),
        {
            "external_id": identity.subject,
            "username": identity.subject,
            "email": identity.email,
            "first_name": identity.first_name,
            "last_name": identity.last_name,
            "name": identity.full_name,
            "avatar_url": identity.image_url,
            "tier": ClubUser.Tier.SPARK_INITIATE,
            "points": 0,
            "sparks_received": 0,
            "posts_published": 0,
            "collaborations_count": 0,
            "is_onboarded": False,
        },
    )
    if created:
        user.set_unusable_password()
        user.save(update_fields=["password"])
        logger.info("user_created_from_identity", user_id=str(user.id), external_id=identity.subject)
    elif identity.email and not user.email:
        user.email = identity.email
        user.save(update_fields=["email"])
        logger.info("user_email_backfilled", user_id=str(user.id))
    return user
