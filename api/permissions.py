"""Role permissions for REST API v1, built on the HTML route guard."""
from __future__ import annotations

from rest_framework.permissions import SAFE_METHODS, BasePermission

from accounts.guard import is_permitted
from accounts.models import EVERYONE
from accounts.session import session_context


def request_context(request):
    """The resolved `SessionContext` of a DRF request."""
    ctx = session_context(request._request)
    ctx.resolve()
    return ctx


class HasRole(BasePermission):
    """Admit the request when the viewer's role is permitted for this action.

    Views declare `read_roles` (safe methods) and `write_roles`; an
    `action_roles` mapping overrides both for named actions.
    """

    message = "Your role does not permit this action."

    def roles_for(self, request, view):
        action_roles = getattr(view, "action_roles", {}) or {}
        action = getattr(view, "action", None)
        if action in action_roles:
            return action_roles[action]
        if request.method in SAFE_METHODS:
            return getattr(view, "read_roles", EVERYONE)
        return getattr(view, "write_roles", ())

    def has_permission(self, request, view):  # noqa: D401
        return is_permitted(request_context(request), self.roles_for(request, view))
