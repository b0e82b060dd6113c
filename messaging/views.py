from __future__ import annotations

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import get_object_or_404, render

from academics.models import Course
from accounts.decorators import role_required
from accounts.models import EVERYONE, STAFF, Profile
from .models import ChatMessage

HISTORY_LIMIT = 50


def courses_for(user):
    """Courses of the user's department, or every course when there is none."""
    profile = Profile.objects.filter(user=user).select_related("department").first()
    if profile and profile.department_id:
        return Course.objects.filter(department_id=profile.department_id)
    return Course.objects.all()


def recent_messages(course_id: int) -> list[ChatMessage]:
    """Latest messages of a course, oldest first."""
    items = (
        ChatMessage.objects.filter(course_id=course_id)
        .select_related("sender__profile")
        .order_by("-created_at", "-id")[:HISTORY_LIMIT]
    )
    return list(reversed(list(items)))


def _chat_page(request: HttpRequest, template: str) -> HttpResponse:
    courses = courses_for(request.user)
    selected = None
    course_id = request.GET.get("course")
    if course_id and course_id.isdigit():
        selected = courses.filter(pk=int(course_id)).first()
    rows = []
    if selected:
        for m in recent_messages(selected.pk):
            rows.append({
                "message": m,
                "sender": "You" if m.sender_id == request.user.pk else m.as_payload()["sender"],
            })
    return render(request, template, {"courses": courses, "selected": selected, "rows": rows})


@role_required(*STAFF)
def chat_teacher(request: HttpRequest) -> HttpResponse:
    return _chat_page(request, "messaging/chat_teacher.html")


@role_required(*EVERYONE)
def chat_student(request: HttpRequest) -> HttpResponse:
    return _chat_page(request, "messaging/chat_student.html")


@role_required(*EVERYONE)
def course_history(request: HttpRequest, course_id: int) -> JsonResponse:
    """Recent chat messages for a course as JSON, oldest first."""
    get_object_or_404(Course, pk=course_id)
    data = [m.as_payload() for m in recent_messages(course_id)]
    return JsonResponse({"results": data})
