from __future__ import annotations

import pytest

from accounts.models import Role
from academics.models import Course, Department


@pytest.mark.django_db
def test_my_classes_lists_department_courses_only(make_user, client_for, course):
    other = Department.objects.create(name="Electrical", code="ee")
    Course.objects.create(name="Circuits", code="ee101", department=other)
    teacher = make_user(role=Role.TEACHER, department=course.department)
    r = client_for(teacher).get("/erp/teacher/classes")
    assert r.status_code == 200
    assert list(r.context["courses"]) == [course]


@pytest.mark.django_db
def test_my_classes_without_department_is_empty(make_user, client_for, course):
    r = client_for(make_user(role=Role.TEACHER)).get("/erp/teacher/classes")
    assert r.status_code == 200
    assert list(r.context["courses"]) == []


@pytest.mark.django_db
def test_student_profiles_filter_by_department_and_year(make_user, client_for, department):
    other = Department.objects.create(name="Electrical", code="ee")
    a = make_user(role=Role.STUDENT, roll_number="A1", department=department, year="1")
    make_user(role=Role.STUDENT, roll_number="A2", department=department, year="2")
    make_user(role=Role.STUDENT, roll_number="B1", department=other, year="1")
    c = client_for(make_user(role=Role.TEACHER))
    r = c.get("/erp/teacher/student-profiles", {"department": department.pk, "year": "1"})
    assert r.status_code == 200
    assert [p.user for p in r.context["students"]] == [a]
    everyone = c.get("/erp/teacher/student-profiles")
    assert len(everyone.context["students"]) == 3


@pytest.mark.django_db
def test_students_cannot_browse_student_profiles(make_user, client_for):
    r = client_for(make_user(role=Role.STUDENT)).get("/erp/teacher/student-profiles")
    assert r["Location"] == "/dashboard/student"
