from __future__ import annotations

from django.http import HttpRequest

from .session import session_context


def erp_session(request: HttpRequest) -> dict:
    """Expose the resolved session to templates as `erp_session` / `erp_role`."""
    ctx = session_context(request)
    ctx.resolve()
    return {"erp_session": ctx, "erp_role": ctx.role}
