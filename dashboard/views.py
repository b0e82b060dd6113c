"""Public landing page, per-role dashboards and the quick-start stats endpoint."""
from __future__ import annotations

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import redirect, render

from accounts.decorators import role_required
from accounts.models import HOME_ACCESS, SUPER_ADMIN_ONLY, Role
from accounts.session import SessionKind, landing_path, session_context
from .navigation import dashboard_for
from .stats import quick_start_counts

ROLE_CARDS = (
    (Role.SUPER_ADMIN, "Full control over users, departments, courses and fees."),
    (Role.ADMIN, "Add staff and students, review attendance, marks and fees."),
    (Role.TEACHER, "Mark attendance, upload marks and chat with classes."),
    (Role.STUDENT, "Check attendance, marks and fees, and request OD."),
)


def index(request: HttpRequest) -> HttpResponse:
    """Landing page with one sign-in card per role.

    Signed-in users with a role go straight to their dashboard.
    """
    result = session_context(request).resolve()
    if result.kind is SessionKind.AUTHORIZED:
        return redirect(landing_path(result.role))
    cards = [{"role": role, "slug": role.slug, "blurb": blurb} for role, blurb in ROLE_CARDS]
    return render(request, "dashboard/index.html", {"cards": cards})


def _dashboard_view(role: Role):
    @role_required(*HOME_ACCESS[role])
    def view(request: HttpRequest) -> HttpResponse:
        board = dashboard_for(role)
        ctx = {"board": board, "page_role": role}
        if any(s["quick_start"] for s in board["sections"]):
            ctx["counts"] = quick_start_counts()
        return render(request, "dashboard/dashboard.html", ctx)

    view.__name__ = f"dashboard_{role.slug.replace('-', '_')}"
    return view


dashboard_super_admin = _dashboard_view(Role.SUPER_ADMIN)
dashboard_admin = _dashboard_view(Role.ADMIN)
dashboard_teacher = _dashboard_view(Role.TEACHER)
dashboard_student = _dashboard_view(Role.STUDENT)


@role_required(*SUPER_ADMIN_ONLY)
def stats(request: HttpRequest) -> JsonResponse:
    return JsonResponse(quick_start_counts())
