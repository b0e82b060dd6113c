"""Attendance marking (staff), personal history (everyone) and daily overview (admins)."""
from __future__ import annotations

import logging
from urllib.parse import urlencode

from django.contrib import messages
from django.db import DatabaseError, transaction
from django.http import HttpRequest, HttpResponse
from django.shortcuts import redirect, render
from django.utils import timezone

from accounts.decorators import role_required
from accounts.models import ADMINS, EVERYONE, STAFF, class_roster
from .forms import AttendanceFilterForm, RosterFilterForm, SubjectFilterForm
from .models import AttendanceRecord, AttendanceStatus, attendance_summary

logger = logging.getLogger(__name__)


def _row_from_post(post, student_id: int) -> tuple[str, str]:
    status = post.get(f"status_{student_id}", AttendanceStatus.PRESENT)
    if status not in AttendanceStatus.values:
        status = AttendanceStatus.PRESENT
    reason = (post.get(f"reason_{student_id}") or "").strip() if status == AttendanceStatus.ABSENT else ""
    return status, reason[:255]


@role_required(*STAFF)
def mark_attendance(request: HttpRequest) -> HttpResponse:
    """Show the roster for the selected class and upsert one record per student."""
    data = request.POST if request.method == "POST" else (request.GET or None)
    form = RosterFilterForm(data)
    roster, existing = [], {}
    if form.is_bound and form.is_valid():
        cd = form.cleaned_data
        roster = list(class_roster(cd["department"], cd["year"]))
        if request.method == "POST":
            if not roster:
                messages.info(request, "No students found for the selected class.")
            else:
                try:
                    with transaction.atomic():
                        for student in roster:
                            status, reason = _row_from_post(request.POST, student.user_id)
                            AttendanceRecord.objects.update_or_create(
                                student_id=student.user_id,
                                course=cd["course"],
                                date=cd["date"],
                                defaults={"status": status, "reason": reason},
                            )
                except DatabaseError:
                    logger.exception("Saving attendance for course %s on %s failed", cd["course"].pk, cd["date"])
                    messages.error(request, "Error marking attendance.")
                else:
                    logger.info("Attendance for course %s on %s marked by %s", cd["course"].pk, cd["date"], request.user.pk)
                    messages.success(request, "Attendance marked successfully!")
                    query = urlencode({
                        "date": cd["date"].isoformat(),
                        "department": cd["department"].pk,
                        "year": cd["year"],
                        "course": cd["course"].pk,
                    })
                    return redirect(f"{request.path}?{query}")
        existing = {
            r.student_id: r
            for r in AttendanceRecord.objects.filter(course=cd["course"], date=cd["date"])
        }
    rows = [{"student": s, "record": existing.get(s.user_id)} for s in roster]
    return render(request, "attendance/mark.html", {"form": form, "rows": rows, "statuses": AttendanceStatus.choices})


@role_required(*EVERYONE)
def student_attendance(request: HttpRequest) -> HttpResponse:
    form = SubjectFilterForm(request.GET or None)
    records = AttendanceRecord.objects.filter(student=request.user).select_related("course").order_by("-date", "-created_at")
    if form.is_bound and form.is_valid() and form.cleaned_data.get("course"):
        records = records.filter(course=form.cleaned_data["course"])
    records = list(records)
    return render(
        request,
        "attendance/student.html",
        {"form": form, "records": records, "summary": attendance_summary(records)},
    )


@role_required(*ADMINS)
def all_attendance(request: HttpRequest) -> HttpResponse:
    form = AttendanceFilterForm(request.GET or None)
    day = timezone.localdate()
    department = None
    if form.is_bound and form.is_valid():
        day = form.cleaned_data.get("date") or day
        department = form.cleaned_data.get("department")
    records = (
        AttendanceRecord.objects.filter(date=day)
        .select_related("course", "student__profile")
        .order_by("-created_at")
    )
    if department:
        records = records.filter(course__department=department)
    return render(request, "attendance/all.html", {"form": form, "records": records, "day": day})
