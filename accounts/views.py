"""Accounts views: per-role sign-in, sign-out, profile pages and user admin."""
from __future__ import annotations

import logging
import time

from django.contrib import messages
from django.contrib.auth import get_user_model, login, logout
from django.contrib.auth.views import LoginView
from django.db import DatabaseError, transaction
from django.http import Http404, HttpRequest, HttpResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from .decorators import role_required
from .forms import AddStudentForm, AddTeacherForm, EditUserForm, EmailAuthenticationForm
from .models import ADMINS, HOME_ACCESS, SUPER_ADMIN_ONLY, Profile, Role
from .session import AuthEvent, SessionKind, handle_auth_event, landing_path, session_context

logger = logging.getLogger(__name__)

LOGIN_ATTEMPTS_PER_MINUTE = 10


class RoleLoginView(LoginView):
    """E-mail + password sign-in; the role in the URL only picks the heading."""

    template_name = "accounts/login.html"
    form_class = EmailAuthenticationForm

    def dispatch(self, request: HttpRequest, *args, **kwargs):
        self.role = Role.from_slug(kwargs.get("slug", ""))
        if self.role is None:
            raise Http404("unknown role")
        ctx = session_context(request)
        result = ctx.resolve()
        if result.kind is SessionKind.AUTHORIZED:
            return redirect(landing_path(result.role))
        return super().dispatch(request, *args, **kwargs)

    def post(self, request: HttpRequest, *args, **kwargs):
        # Per-session throttle: max 10 attempts per minute
        now = time.time()
        ts = [t for t in request.session.get("login_ts", []) if now - t < 60]
        if len(ts) >= LOGIN_ATTEMPTS_PER_MINUTE:
            messages.error(request, "Too many login attempts. Please wait a minute and try again.")
            return self.get(request, *args, **kwargs)
        ts.append(now)
        request.session["login_ts"] = ts
        return super().post(request, *args, **kwargs)

    def form_valid(self, form):
        login(self.request, form.get_user())
        target = handle_auth_event(AuthEvent.SIGNED_IN, session_context(self.request))
        return redirect(target)

    def form_invalid(self, form):
        messages.error(self.request, "Login Failed")
        return super().form_invalid(form)

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        ctx["login_role"] = self.role
        return ctx


def sign_out(request: HttpRequest) -> HttpResponse:
    """Sign out (GET or POST) and return to the public landing."""
    logout(request)
    return redirect(handle_auth_event(AuthEvent.SIGNED_OUT, session_context(request)))


def _profile_view(role: Role):
    @role_required(*HOME_ACCESS[role])
    def view(request: HttpRequest) -> HttpResponse:
        profile = Profile.objects.select_related("department", "user").filter(user=request.user).first()
        return render(request, "accounts/profile.html", {"profile_obj": profile, "page_role": role})

    view.__name__ = f"profile_{role.slug.replace('-', '_')}"
    return view


profile_super_admin = _profile_view(Role.SUPER_ADMIN)
profile_admin = _profile_view(Role.ADMIN)
profile_teacher = _profile_view(Role.TEACHER)
profile_student = _profile_view(Role.STUDENT)


@role_required(*SUPER_ADMIN_ONLY)
def manage_users(request: HttpRequest) -> HttpResponse:
    profiles = Profile.objects.select_related("user", "department").order_by("role", "first_name")
    return render(request, "accounts/manage_users.html", {"profiles": profiles})


@role_required(*SUPER_ADMIN_ONLY)
def edit_user(request: HttpRequest, user_id: int) -> HttpResponse:
    profile = get_object_or_404(Profile.objects.select_related("user"), user_id=user_id)
    if request.method == "POST":
        form = EditUserForm(request.POST, instance=profile)
        if form.is_valid():
            try:
                with transaction.atomic():
                    form.save()
            except DatabaseError:
                logger.exception("Updating user %s failed", user_id)
                messages.error(request, "Error updating user.")
            else:
                logger.info("User %s updated by %s", user_id, request.user.pk)
                messages.success(request, "User updated successfully!")
                return redirect("accounts:manage-users")
    else:
        form = EditUserForm(instance=profile)
    return render(request, "accounts/edit_user.html", {"form": form, "profile_obj": profile})


@require_POST
@role_required(*SUPER_ADMIN_ONLY)
def delete_user(request: HttpRequest, user_id: int) -> HttpResponse:
    User = get_user_model()
    user = get_object_or_404(User, pk=user_id)
    if user.pk == request.user.pk:
        messages.error(request, "You cannot delete your own account.")
        return redirect("accounts:manage-users")
    try:
        with transaction.atomic():
            user.delete()
    except DatabaseError:
        logger.exception("Deleting user %s failed", user_id)
        messages.error(request, "Error deleting user.")
    else:
        logger.info("User %s deleted by %s", user_id, request.user.pk)
        messages.success(request, "User deleted successfully!")
    return redirect("accounts:manage-users")


def _add_account(request: HttpRequest, form_class, template: str, label: str) -> HttpResponse:
    if request.method == "POST":
        form = form_class(request.POST)
        if form.is_valid():
            try:
                with transaction.atomic():
                    user = form.save()
            except DatabaseError:
                logger.exception("Creating %s failed", label.lower())
                messages.error(request, f"Error adding {label.lower()}.")
            else:
                logger.info("%s %s created by %s", label, user.pk, request.user.pk)
                messages.success(request, f"{label} added successfully!")
                return redirect(request.path)
    else:
        form = form_class()
    return render(request, template, {"form": form})


@role_required(*ADMINS)
def add_student(request: HttpRequest) -> HttpResponse:
    return _add_account(request, AddStudentForm, "accounts/add_student.html", "Student")


@role_required(*ADMINS)
def add_teacher(request: HttpRequest) -> HttpResponse:
    return _add_account(request, AddTeacherForm, "accounts/add_teacher.html", "Teacher")
