"""Marks upload (staff), personal results (everyone) and the marks register (admins)."""
from __future__ import annotations

import logging
from urllib.parse import urlencode

from django import forms
from django.contrib import messages
from django.db import DatabaseError, transaction
from django.http import HttpRequest, HttpResponse
from django.shortcuts import redirect, render

from accounts.decorators import role_required
from accounts.models import ADMINS, EVERYONE, STAFF, class_roster
from attendance.forms import SubjectFilterForm
from .forms import ClassSelectForm, MarksFilterForm, parse_score
from .models import Mark, grade_for

logger = logging.getLogger(__name__)


def _entered_scores(post, roster) -> tuple[dict[int, int], dict[int, str]]:
    """Collect non-blank scores from the POST; invalid entries become errors."""
    scores, errors = {}, {}
    for student in roster:
        try:
            value = parse_score(post.get(f"marks_{student.user_id}"))
        except forms.ValidationError as exc:
            errors[student.user_id] = exc.messages[0]
            continue
        if value is not None:
            scores[student.user_id] = value
    return scores, errors


@role_required(*STAFF)
def upload_marks(request: HttpRequest) -> HttpResponse:
    data = request.POST if request.method == "POST" else (request.GET or None)
    form = ClassSelectForm(data)
    roster, existing, errors = [], {}, {}
    if form.is_bound and form.is_valid():
        cd = form.cleaned_data
        roster = list(class_roster(cd["department"], cd["year"]))
        if request.method == "POST":
            scores, errors = _entered_scores(request.POST, roster)
            if errors:
                messages.error(request, "Some marks are invalid; nothing was saved.")
            elif not scores:
                messages.info(request, "No marks entered.")
            else:
                try:
                    with transaction.atomic():
                        for student_id, value in scores.items():
                            Mark.objects.update_or_create(
                                student_id=student_id,
                                course=cd["course"],
                                defaults={"marks": value, "grade": grade_for(value)},
                            )
                except DatabaseError:
                    logger.exception("Saving marks for course %s failed", cd["course"].pk)
                    messages.error(request, "Error uploading marks.")
                else:
                    logger.info("%d marks for course %s uploaded by %s", len(scores), cd["course"].pk, request.user.pk)
                    messages.success(request, "Marks uploaded successfully!")
                    query = urlencode({"department": cd["department"].pk, "year": cd["year"], "course": cd["course"].pk})
                    return redirect(f"{request.path}?{query}")
        existing = {m.student_id: m for m in Mark.objects.filter(course=cd["course"])}
    rows = [
        {"student": s, "mark": existing.get(s.user_id), "error": errors.get(s.user_id)}
        for s in roster
    ]
    return render(request, "marks/upload.html", {"form": form, "rows": rows})


@role_required(*EVERYONE)
def student_marks(request: HttpRequest) -> HttpResponse:
    form = SubjectFilterForm(request.GET or None)
    results = Mark.objects.filter(student=request.user).select_related("course")
    if form.is_bound and form.is_valid() and form.cleaned_data.get("course"):
        results = results.filter(course=form.cleaned_data["course"])
    return render(request, "marks/student.html", {"form": form, "results": results})


@role_required(*ADMINS)
def all_marks(request: HttpRequest) -> HttpResponse:
    form = MarksFilterForm(request.GET or None)
    results = Mark.objects.select_related("course", "student__profile").order_by(
        "student__profile__roll_number", "course__name"
    )
    if form.is_bound and form.is_valid():
        cd = form.cleaned_data
        if cd.get("department"):
            results = results.filter(student__profile__department=cd["department"])
        if cd.get("year"):
            results = results.filter(student__profile__year=cd["year"])
        if cd.get("course"):
            results = results.filter(course=cd["course"])
    return render(request, "marks/all.html", {"form": form, "results": results})
