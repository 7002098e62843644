"""
Role based permission classes for the JSON API.

The URL rule table already guards every path; these classes repeat the
role check at the view so the API stays closed if it is ever mounted
under another prefix.
"""
from rest_framework.permissions import BasePermission

from .models import ROLE_USER


def _has_role(request, role: str) -> bool:
    user = getattr(request, "user", None)
    return bool(user and user.is_authenticated and hasattr(user, "has_role") and user.has_role(role))


class IsUserRole(BasePermission):
    """Allow access only to principals holding the USER role (admins included)."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return _has_role(request, ROLE_USER)

