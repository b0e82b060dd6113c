from __future__ import annotations

import datetime as dt

import pytest
from django.utils import timezone

from accounts.models import Role
from academics.models import Course, Department
from attendance.models import AttendanceRecord, AttendanceStatus

DAY = dt.date(2024, 3, 4)


def _roster_query(course, year="1"):
    return {"date": DAY.isoformat(), "department": course.department_id, "year": year, "course": course.pk}


@pytest.fixture
def roster(make_user, course):
    return [
        make_user(role=Role.STUDENT, roll_number=f"CS{i}", department=course.department, year="1")
        for i in (1, 2)
    ]


@pytest.mark.django_db
def test_teacher_marks_roster_once_per_student(make_user, client_for, course, roster):
    c = client_for(make_user(role=Role.TEACHER))
    s1, s2 = roster
    data = {
        **_roster_query(course),
        f"status_{s1.pk}": "Present",
        f"status_{s2.pk}": "Absent",
        f"reason_{s2.pk}": "  fever ",
    }
    r = c.post("/erp/attendance/mark", data)
    assert r.status_code == 302
    assert r["Location"].startswith("/erp/attendance/mark?")
    assert AttendanceRecord.objects.count() == 2
    absent = AttendanceRecord.objects.get(student=s2)
    assert absent.status == AttendanceStatus.ABSENT
    assert absent.reason == "fever"

    # Marking the same class again updates instead of duplicating
    data[f"status_{s2.pk}"] = "Present"
    c.post("/erp/attendance/mark", data)
    assert AttendanceRecord.objects.count() == 2
    absent.refresh_from_db()
    assert absent.status == AttendanceStatus.PRESENT
    assert absent.reason == ""


@pytest.mark.django_db
def test_roster_get_shows_existing_records(make_user, client_for, course, roster):
    AttendanceRecord.objects.create(student=roster[0], course=course, date=DAY, status=AttendanceStatus.ABSENT)
    c = client_for(make_user(role=Role.TEACHER))
    r = c.get("/erp/attendance/mark", _roster_query(course))
    assert r.status_code == 200
    rows = r.context["rows"]
    assert [row["student"].user for row in rows] == roster
    assert rows[0]["record"].status == AttendanceStatus.ABSENT
    assert rows[1]["record"] is None


@pytest.mark.django_db
def test_empty_roster_reports_no_students(make_user, client_for, course):
    c = client_for(make_user(role=Role.TEACHER))
    r = c.post("/erp/attendance/mark", _roster_query(course, year="3"))
    assert r.status_code == 200
    assert b"No students found for the selected class." in r.content
    assert AttendanceRecord.objects.count() == 0


@pytest.mark.django_db
def test_course_from_another_department_is_rejected(make_user, client_for, course, roster):
    other = Department.objects.create(name="Electrical", code="ee")
    foreign = Course.objects.create(name="Circuits", code="ee101", department=other)
    c = client_for(make_user(role=Role.TEACHER))
    data = {**_roster_query(course), "course": foreign.pk}
    r = c.post("/erp/attendance/mark", data)
    assert r.status_code == 200
    assert b"This course does not belong to the selected department." in r.content
    assert AttendanceRecord.objects.count() == 0


@pytest.mark.django_db
def test_students_cannot_mark_attendance(make_user, client_for):
    r = client_for(make_user(role=Role.STUDENT)).get("/erp/attendance/mark")
    assert r["Location"] == "/dashboard/student"


@pytest.mark.django_db
def test_student_sees_own_history_and_summary(make_user, client_for, course, roster):
    me, other = roster
    AttendanceRecord.objects.create(student=me, course=course, date=DAY, status=AttendanceStatus.PRESENT)
    AttendanceRecord.objects.create(
        student=me, course=course, date=DAY - dt.timedelta(days=1), status=AttendanceStatus.ABSENT
    )
    AttendanceRecord.objects.create(student=other, course=course, date=DAY, status=AttendanceStatus.ABSENT)
    r = client_for(me).get("/erp/attendance/student")
    assert r.status_code == 200
    assert [rec.date for rec in r.context["records"]] == [DAY, DAY - dt.timedelta(days=1)]
    assert r.context["summary"]["percentage"] == 50.0


@pytest.mark.django_db
def test_admin_overview_defaults_to_today(make_user, client_for, course, roster):
    today = timezone.localdate()
    AttendanceRecord.objects.create(student=roster[0], course=course, date=today)
    AttendanceRecord.objects.create(student=roster[1], course=course, date=DAY)
    r = client_for(make_user(role=Role.ADMIN)).get("/erp/attendance/all")
    assert r.status_code == 200
    assert r.context["day"] == today
    assert [rec.student for rec in r.context["records"]] == [roster[0]]
    r = client_for(make_user(role=Role.ADMIN)).get("/erp/attendance/all", {"date": DAY.isoformat()})
    assert [rec.student for rec in r.context["records"]] == [roster[1]]
