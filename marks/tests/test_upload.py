from __future__ import annotations

import pytest

from accounts.models import Role
from marks.models import Mark


@pytest.fixture
def roster(make_user, course):
    return [
        make_user(role=Role.STUDENT, roll_number=f"CS{i}", department=course.department, year="2")
        for i in (1, 2, 3)
    ]


def _class(course):
    return {"department": course.department_id, "year": "2", "course": course.pk}


@pytest.mark.django_db
def test_upload_saves_entered_marks_and_skips_blanks(make_user, client_for, course, roster):
    s1, s2, s3 = roster
    c = client_for(make_user(role=Role.TEACHER))
    r = c.post("/erp/marks/upload", {**_class(course), f"marks_{s1.pk}": "91", f"marks_{s2.pk}": "", f"marks_{s3.pk}": "38"})
    assert r.status_code == 302
    assert Mark.objects.count() == 2
    assert Mark.objects.get(student=s1).grade == "A+"
    assert Mark.objects.get(student=s3).grade == "F"
    assert not Mark.objects.filter(student=s2).exists()


@pytest.mark.django_db
def test_reupload_replaces_score_and_grade(make_user, client_for, course, roster):
    s1 = roster[0]
    c = client_for(make_user(role=Role.TEACHER))
    c.post("/erp/marks/upload", {**_class(course), f"marks_{s1.pk}": "45"})
    c.post("/erp/marks/upload", {**_class(course), f"marks_{s1.pk}": "75"})
    mark = Mark.objects.get(student=s1, course=course)
    assert (mark.marks, mark.grade) == (75, "B+")


@pytest.mark.django_db
def test_invalid_entry_saves_nothing(make_user, client_for, course, roster):
    s1, s2, _ = roster
    c = client_for(make_user(role=Role.TEACHER))
    r = c.post("/erp/marks/upload", {**_class(course), f"marks_{s1.pk}": "80", f"marks_{s2.pk}": "120"})
    assert r.status_code == 200
    assert b"Some marks are invalid; nothing was saved." in r.content
    assert Mark.objects.count() == 0
    rows = {row["student"].user_id: row for row in r.context["rows"]}
    assert rows[s2.pk]["error"] == "Marks must be between 0 and 100."


@pytest.mark.django_db
def test_no_entries_reports_info(make_user, client_for, course, roster):
    c = client_for(make_user(role=Role.TEACHER))
    r = c.post("/erp/marks/upload", _class(course))
    assert r.status_code == 200
    assert b"No marks entered." in r.content


@pytest.mark.django_db
def test_student_sees_only_own_results(make_user, client_for, course, roster):
    s1, s2, _ = roster
    Mark.objects.create(student=s1, course=course, marks=82)
    Mark.objects.create(student=s2, course=course, marks=55)
    r = client_for(s1).get("/erp/marks/student")
    assert r.status_code == 200
    assert [(m.marks, m.grade) for m in r.context["results"]] == [(82, "A")]


@pytest.mark.django_db
def test_admin_register_orders_by_roll_number(make_user, client_for, course, roster):
    s1, s2, s3 = roster
    for student, score in ((s3, 40), (s1, 70), (s2, 60)):
        Mark.objects.create(student=student, course=course, marks=score)
    r = client_for(make_user(role=Role.ADMIN)).get("/erp/marks/all")
    assert r.status_code == 200
    assert [m.student for m in r.context["results"]] == [s1, s2, s3]


@pytest.mark.django_db
def test_teacher_cannot_open_register(make_user, client_for):
    r = client_for(make_user(role=Role.TEACHER)).get("/erp/marks/all")
    assert r["Location"] == "/dashboard/teacher"
