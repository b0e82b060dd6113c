from __future__ import annotations

from django.conf import settings
from django.http import HttpRequest

from accounts.session import session_context
from .navigation import sidebar_for


def navigation(request: HttpRequest) -> dict:
    """Sidebar links for the viewer's role plus the college name."""
    ctx = session_context(request)
    ctx.resolve()
    return {
        "sidebar_links": sidebar_for(ctx.role),
        "college_name": settings.ERP_COLLEGE_NAME,
    }
