"""Route guard: decide render-vs-redirect from the resolved session.

`evaluate` is pure; it never triggers resolution. Callers that own a
request resolve the context first (see `accounts.decorators`).
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable

from .models import Role
from .session import SessionContext, SessionKind, landing_path, public_landing


class Outcome(enum.Enum):
    WAIT = "wait"
    REDIRECT = "redirect"
    ALLOW = "allow"


@dataclass(frozen=True)
class GuardDecision:
    outcome: Outcome
    location: str | None = None

    @property
    def allowed(self) -> bool:
        return self.outcome is Outcome.ALLOW


WAIT = GuardDecision(Outcome.WAIT)
ALLOW = GuardDecision(Outcome.ALLOW)


def evaluate(context: SessionContext, permitted: Iterable[Role]) -> GuardDecision:
    """Decide what to do with a request for content gated on `permitted`.

    1. still loading          -> WAIT (no navigation decision yet)
    2. nobody signed in       -> REDIRECT to the public landing
    3. role none / not listed -> REDIRECT to the role's own landing
    4. otherwise              -> ALLOW

    A missing or unrecognised role never falls through to ALLOW.
    """
    if context.loading:
        return WAIT
    result = context.result
    if result.kind is SessionKind.ANONYMOUS:
        return GuardDecision(Outcome.REDIRECT, public_landing())
    role = result.role
    if role is None or role not in frozenset(permitted):
        return GuardDecision(Outcome.REDIRECT, landing_path(role))
    return ALLOW


def is_permitted(context: SessionContext, permitted: Iterable[Role]) -> bool:
    return evaluate(context, permitted).allowed
