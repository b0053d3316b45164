import typing as t

from ninja_extra import ControllerBase

from accounts.models import ClubUser
from accounts.service.identity import ExternalIdentity


class UserAwareController(ControllerBase):
    def user(self) -> ClubUser:
        """Get the user for this request."""
        return t.cast(ClubUser, self.context.request.user)  # type: ignore[union-attr]

    def identity(self) -> ExternalIdentity:
        """Get the verified identity provider claims for this request."""
        return t.cast(ExternalIdentity, self.context.request.identity)  # type: ignore[union-attr]
