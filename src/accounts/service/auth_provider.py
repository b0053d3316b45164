"""Client for the identity provider's server-side user API."""

import typing as t

import httpx
import structlog
from django.conf import settings

logger = structlog.get_logger(__name__)


class AuthProviderError(Exception):
    """Raised when the identity provider cannot be reached or answers with an error."""


def _primary_email(profile: dict[str, t.Any]) -> str | None:
    addresses = profile.get("email_addresses") or []
    if not addresses:
        return None
    primary_id = profile.get("primary_email_address_id")
    for address in addresses:
        if primary_id and address.get("id") == primary_id:
            return t.cast(str | None, address.get("email_address"))
    return t.cast(str | None, addresses[0].get("email_address"))


def get_user_profile(subject: str) -> dict[str, t.Any]:
    """Fetch a user's profile from the identity provider.

    Raises:
        AuthProviderError: on transport errors, timeouts and non-2xx answers.
    """
    url = f"{settings.AUTH_PROVIDER_API_URL.rstrip('/')}/users/{subject}"
    headers = {"Authorization": f"Bearer {settings.AUTH_PROVIDER_SECRET_KEY}"}
    try:
        response = httpx.get(url, headers=headers, timeout=settings.AUTH_PROVIDER_TIMEOUT)
        response.raise_for_status()
    except httpx.HTTPError as e:
        raise AuthProviderError(f"Profile lookup failed for {subject}: {e}") from e
    return t.cast(dict[str, t.Any], response.json())


def lookup_primary_email(subject: str) -> str | None:
    """Return the primary email address the identity provider holds for a subject.

    Falls back to the first listed address. Lookup failures are logged and reported as no address.
    """
    if not settings.AUTH_PROVIDER_SECRET_KEY:
        logger.debug("auth_provider_lookup_skipped", reason="no_secret_key")
        return None
    try:
        profile = get_user_profile(subject)
    except AuthProviderError as e:
        logger.warning("auth_provider_lookup_failed", external_id=subject, error=str(e))
        return None
    return _primary_email(profile)
