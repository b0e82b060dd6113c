"""Role-based access decorators."""
from __future__ import annotations

from functools import wraps

from django.http import HttpRequest
from django.shortcuts import redirect, render

from .guard import Outcome, evaluate
from .models import Role
from .session import session_context


def role_required(*roles: Role):
    """Guard a view so only the given roles reach it.

    Anonymous visitors go to the public landing, signed-in visitors whose
    role is missing or not listed go to their own dashboard.
    """
    permitted = frozenset(Role(r) for r in roles)

    def decorator(view_func):
        @wraps(view_func)
        def _wrapped(request: HttpRequest, *args, **kwargs):
            ctx = session_context(request)
            ctx.resolve()
            decision = evaluate(ctx, permitted)
            if decision.outcome is Outcome.WAIT:
                return render(request, "accounts/loading.html", status=503)
            if decision.outcome is Outcome.REDIRECT:
                return redirect(decision.location)
            return view_func(request, *args, **kwargs)

        _wrapped.permitted_roles = permitted
        return _wrapped

    return decorator
