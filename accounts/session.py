"""Session/role resolution.

`resolve_session` is the one operation that turns an authenticated
principal into an authorisation result. It is idempotent and runs both
lazily on every request (through `SessionContext`) and after every
sign-in / sign-out event (through `handle_auth_event`).

The result is a discriminated value rather than three loosely related
fields:

- ``anonymous``: nobody is signed in
- ``authorized``: signed in and the profile row carries a known role
- ``unauthorized``: signed in, but no usable role (no profile row, an
  unrecognised role value, or a failed lookup)

`unauthorized` is a legitimate terminal value, not an error state.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable

from django.conf import settings
from django.contrib import messages
from django.db import DatabaseError
from django.http import HttpRequest

from .models import Profile, Role

logger = logging.getLogger(__name__)

ROLE_LOOKUP_FAILED = "Failed to load user role."


class SessionKind(str, enum.Enum):
    ANONYMOUS = "anonymous"
    AUTHORIZED = "authorized"
    UNAUTHORIZED = "unauthorized"


class AuthEvent(str, enum.Enum):
    SIGNED_IN = "signed_in"
    SIGNED_OUT = "signed_out"
    OTHER = "other"


@dataclass(frozen=True)
class SessionResult:
    kind: SessionKind
    role: Role | None = None
    user_id: int | None = None
    error: str = ""

    @classmethod
    def anonymous(cls) -> "SessionResult":
        return cls(SessionKind.ANONYMOUS)

    @classmethod
    def authorized(cls, user_id: int, role: Role) -> "SessionResult":
        return cls(SessionKind.AUTHORIZED, role=role, user_id=user_id)

    @classmethod
    def unauthorized(cls, user_id: int, error: str = "") -> "SessionResult":
        return cls(SessionKind.UNAUTHORIZED, user_id=user_id, error=error)

    @property
    def is_authenticated(self) -> bool:
        return self.kind is not SessionKind.ANONYMOUS

    def as_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "role": self.role.value if self.role else None,
            "landing": landing_path(self.role) if self.is_authenticated else public_landing(),
        }


def parse_role(value) -> Role | None:
    """Map a stored role value to `Role`; anything unrecognised is None."""
    try:
        return Role(value)
    except ValueError:
        return None


def public_landing() -> str:
    return getattr(settings, "ERP_PUBLIC_LANDING", "/")


def fallback_landing() -> str:
    return getattr(settings, "ERP_FALLBACK_LANDING", "/dashboard/student")


def landing_path(role: Role | None) -> str:
    """Role-specific default location; the public landing for role=none."""
    if role is None:
        return public_landing()
    return f"/dashboard/{role.slug}"


def resolve_session(user) -> SessionResult:
    """Resolve the authorisation role of `user` from its profile row.

    Never raises: lookup failures are logged and resolve to
    ``unauthorized`` with an error text for the caller to surface.
    """
    if user is None or not getattr(user, "is_authenticated", False):
        return SessionResult.anonymous()
    try:
        stored = Profile.objects.filter(user_id=user.pk).values_list("role", flat=True).first()
    except DatabaseError:
        logger.exception("Profile lookup failed for user %s", user.pk)
        return SessionResult.unauthorized(user.pk, error=ROLE_LOOKUP_FAILED)
    if stored is None:
        logger.info("User %s has no profile row; treating as unauthorised", user.pk)
        return SessionResult.unauthorized(user.pk)
    role = parse_role(stored)
    if role is None:
        logger.warning("User %s has unrecognised role %r; treating as unauthorised", user.pk, stored)
        return SessionResult.unauthorized(user.pk)
    return SessionResult.authorized(user.pk, role)


class SessionContext:
    """Per-request view of who is signed in and with what role.

    Constructed by `SessionContextMiddleware` and injected as
    ``request.erp_session``. Consumers only read it; `loading` stays true
    until the first `resolve()`.
    """

    def __init__(self, request: HttpRequest | None = None, user=None,
                 resolver: Callable[[object], SessionResult] = resolve_session):
        self._request = request
        self._user = user
        self._resolver = resolver
        self._result: SessionResult | None = None

    @property
    def user(self):
        if self._request is not None:
            return getattr(self._request, "user", None)
        return self._user

    @property
    def loading(self) -> bool:
        return self._result is None

    @property
    def result(self) -> SessionResult | None:
        return self._result

    @property
    def session(self):
        """The authenticated principal, or None."""
        if self._result is None or not self._result.is_authenticated:
            return None
        return self.user

    @property
    def role(self) -> Role | None:
        return self._result.role if self._result else None

    def resolve(self) -> SessionResult:
        if self._result is None:
            self._result = self._resolver(self.user)
            if self._result.error and self._request is not None:
                messages.error(self._request, self._result.error, fail_silently=True)
        return self._result

    def refresh(self) -> SessionResult:
        self._result = None
        return self.resolve()

    def clear(self) -> SessionResult:
        self._result = SessionResult.anonymous()
        return self._result


def session_context(request: HttpRequest) -> SessionContext:
    """Return the request's context, creating one if middleware did not."""
    ctx = getattr(request, "erp_session", None)
    if ctx is None:
        ctx = SessionContext(request)
        request.erp_session = ctx
    return ctx


def handle_auth_event(event: AuthEvent, context: SessionContext) -> str | None:
    """Apply an auth event and return where to navigate, if anywhere.

    The sign-in target is computed only after resolution has completed.
    """
    if event is AuthEvent.SIGNED_IN:
        result = context.refresh()
        return landing_path(result.role) if result.role else fallback_landing()
    if event is AuthEvent.SIGNED_OUT:
        context.clear()
        return public_landing()
    context.refresh()
    return None
