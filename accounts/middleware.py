from __future__ import annotations

from .session import SessionContext


class SessionContextMiddleware:
    """Attach a lazily resolved `SessionContext` as ``request.erp_session``.

    Must run after `AuthenticationMiddleware`; resolution itself waits
    until a guard, view or template first asks for the role.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.erp_session = SessionContext(request)
        return self.get_response(request)
