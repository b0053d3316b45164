"""Authentication classes for the rndclub API.

Users sign in with an external identity provider. Requests carry the provider's
session token as a bearer token; we verify it locally and map its subject to a
ClubUser.
"""

import secrets
import typing as t

import jwt
import structlog
from django.conf import settings
from django.contrib.auth.models import AnonymousUser
from django.http import HttpRequest
from ninja.security import HttpBearer
from ninja_extra import status
from ninja_extra.exceptions import APIException

from accounts.service.identity import ExternalIdentity, resolve_user

logger = structlog.get_logger(__name__)


class PermissionDenied(APIException):
    """Exception raised when user doesn't have required permissions."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Permission denied"


def decode_identity_token(token: str) -> ExternalIdentity | None:
    """Verify an identity provider token and extract the caller's identity.

    Returns None for anything that does not verify: bad signature, expired, wrong audience or issuer, no subject.
    """
    options: dict[str, t.Any] = {"require": ["sub"]}
    kwargs: dict[str, t.Any] = {}
    if settings.AUTH_PROVIDER_JWT_AUDIENCE:
        kwargs["audience"] = settings.AUTH_PROVIDER_JWT_AUDIENCE
    else:
        options["verify_aud"] = False
    if settings.AUTH_PROVIDER_JWT_ISSUER:
        kwargs["issuer"] = settings.AUTH_PROVIDER_JWT_ISSUER
    try:
        claims = jwt.decode(
            token,
            key=settings.AUTH_PROVIDER_JWT_KEY,
            algorithms=[settings.AUTH_PROVIDER_JWT_ALGORITHM],
            options=options,
            **kwargs,
        )
    except jwt.InvalidTokenError as e:
        logger.info("identity_token_rejected", error=str(e))
        return None
    subject = claims.get("sub")
    if not subject:
        return None
    return ExternalIdentity(
        subject=str(subject),
        email=claims.get("email") or "",
        first_name=claims.get("first_name") or "",
        last_name=claims.get("last_name") or "",
        image_url=claims.get("image_url") or "",
    )


class AuthProviderJWTAuth(HttpBearer):
    """Bearer authentication against the identity provider's tokens.

    On success the resolved ClubUser is set as ``request.user`` and the decoded
    identity as ``request.identity``. Staff-only endpoints pass ``is_staff=True``.
    """

    def __init__(self, *, is_staff: bool = False) -> None:
        """Initialize the authentication class.

        Args:
            is_staff: Whether the user must be a moderator (Django staff member).
        """
        self.is_staff = is_staff
        super().__init__()

    def authenticate(self, request: HttpRequest, token: str) -> t.Any:
        """Authenticate and verify user permissions.

        Raises:
            PermissionDenied: If the user is not staff on a staff-only endpoint.
        """
        identity = decode_identity_token(token)
        if identity is None:
            return None
        user = resolve_user(identity)
        if not user.is_active:
            return None
        if self.is_staff and not user.is_staff:
            raise PermissionDenied("Staff access required.")
        request.user = user
        request.identity = identity  # type: ignore[attr-defined]
        return user


class OptionalAuth(AuthProviderJWTAuth):
    """Optional authentication.

    Without an Authorization header the request continues as AnonymousUser.
    A header that is present but invalid is still rejected.
    """

    def __call__(self, request: HttpRequest) -> t.Any | None:
        """Overrides HttpBearer __call__ to provide optional auth."""
        auth_value = request.headers.get(self.header)
        if not auth_value:
            request.user = AnonymousUser()
            return request.user
        return super().__call__(request)


class CronSecretAuth(HttpBearer):
    """Shared-secret bearer authentication for the external scheduler."""

    def authenticate(self, request: HttpRequest, token: str) -> str | None:
        """Accept the request only if the bearer token matches CRON_SECRET."""
        expected = settings.CRON_SECRET
        if not expected or not secrets.compare_digest(token.encode(), expected.encode()):
            logger.warning("cron_secret_rejected", path=request.path)
            return None
        return "cron"
