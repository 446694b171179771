from dataclasses import dataclass
from typing import Optional

from .errors import NotAuthenticated, PermissionDenied


@dataclass(frozen=True)
class RequestContext:
    """The authenticated principal of one request, passed into every workflow call."""

    user: Optional[object] = None

    @classmethod
    def from_request(cls, request):
        user = getattr(request, "user", None)
        if user is None or not user.is_authenticated:
            return cls()
        return cls(user=user)

    @property
    def is_authenticated(self):
        return self.user is not None

    @property
    def is_admin(self):
        return self.user is not None and self.user.has_admin_access

    def require_user(self):
        if self.user is None:
            raise NotAuthenticated()
        return self.user

    def require_admin(self):
        user = self.require_user()
        if not user.has_admin_access:
            raise PermissionDenied()
        return user
