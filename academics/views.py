"""Department and course administration, and the staff class/student views."""
from __future__ import annotations

import logging

from django.contrib import messages
from django.db import DatabaseError, transaction
from django.db.models import ProtectedError
from django.http import HttpRequest, HttpResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from accounts.decorators import role_required
from accounts.models import STAFF, SUPER_ADMIN_ONLY, Profile, Role
from .forms import CourseForm, DepartmentForm, StudentFilterForm
from .models import Course, Department

logger = logging.getLogger(__name__)


def _save_new(request: HttpRequest, form, label: str) -> bool:
    try:
        with transaction.atomic():
            obj = form.save()
    except DatabaseError:
        logger.exception("Adding %s failed", label.lower())
        messages.error(request, f"Error adding {label.lower()}.")
        return False
    logger.info("%s %s added by %s", label, obj.pk, request.user.pk)
    messages.success(request, f"{label} added successfully!")
    return True


@role_required(*SUPER_ADMIN_ONLY)
def manage_departments(request: HttpRequest) -> HttpResponse:
    if request.method == "POST":
        form = DepartmentForm(request.POST)
        if form.is_valid() and _save_new(request, form, "Department"):
            return redirect("academics:manage-departments")
    else:
        form = DepartmentForm()
    departments = Department.objects.all()
    return render(request, "academics/manage_departments.html", {"form": form, "departments": departments})


@require_POST
@role_required(*SUPER_ADMIN_ONLY)
def delete_department(request: HttpRequest, pk: int) -> HttpResponse:
    department = get_object_or_404(Department, pk=pk)
    try:
        with transaction.atomic():
            department.delete()
    except ProtectedError:
        messages.error(request, "Cannot delete a department that still has courses.")
    except DatabaseError:
        logger.exception("Deleting department %s failed", pk)
        messages.error(request, "Error deleting department.")
    else:
        messages.success(request, "Department deleted successfully!")
    return redirect("academics:manage-departments")


@role_required(*SUPER_ADMIN_ONLY)
def manage_courses(request: HttpRequest) -> HttpResponse:
    if request.method == "POST":
        form = CourseForm(request.POST)
        if form.is_valid() and _save_new(request, form, "Course"):
            return redirect("academics:manage-courses")
    else:
        form = CourseForm()
    courses = Course.objects.select_related("department")
    return render(request, "academics/manage_courses.html", {"form": form, "courses": courses})


@require_POST
@role_required(*SUPER_ADMIN_ONLY)
def delete_course(request: HttpRequest, pk: int) -> HttpResponse:
    course = get_object_or_404(Course, pk=pk)
    try:
        with transaction.atomic():
            course.delete()
    except DatabaseError:
        logger.exception("Deleting course %s failed", pk)
        messages.error(request, "Error deleting course.")
    else:
        messages.success(request, "Course deleted successfully!")
    return redirect("academics:manage-courses")


@role_required(*STAFF)
def my_classes(request: HttpRequest) -> HttpResponse:
    """Courses of the viewer's department."""
    profile = Profile.objects.select_related("department").filter(user=request.user).first()
    department = profile.department if profile else None
    courses = Course.objects.filter(department=department) if department else Course.objects.none()
    return render(request, "academics/my_classes.html", {"department": department, "courses": courses})


@role_required(*STAFF)
def student_profiles(request: HttpRequest) -> HttpResponse:
    form = StudentFilterForm(request.GET or None)
    students = Profile.objects.filter(role=Role.STUDENT).select_related("department", "user").order_by("roll_number")
    if form.is_bound and form.is_valid():
        if form.cleaned_data.get("department"):
            students = students.filter(department=form.cleaned_data["department"])
        if form.cleaned_data.get("year"):
            students = students.filter(year=form.cleaned_data["year"])
    return render(request, "academics/student_profiles.html", {"form": form, "students": students})
