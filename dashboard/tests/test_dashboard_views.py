from __future__ import annotations

import datetime as dt

import pytest

from accounts.models import Role
from dashboard.stats import GenerationCounter, quick_start_counts
from onduty.models import ODRequest, ODStatus


def test_generation_counter_only_latest_is_current():
    gen = GenerationCounter()
    assert gen.value == 0
    first = gen.next()
    second = gen.next()
    assert (first, second) == (1, 2)
    assert not gen.is_current(first)
    assert gen.is_current(second)


@pytest.mark.django_db
def test_quick_start_counts(make_user, course):
    student = make_user(role=Role.STUDENT)
    make_user(role=None)
    ODRequest.objects.create(student=student, reason="a", request_date=dt.date(2024, 1, 1))
    ODRequest.objects.create(student=student, reason="b", request_date=dt.date(2024, 1, 2), status=ODStatus.APPROVED)
    assert quick_start_counts() == {"profiles": 1, "departments": 1, "courses": 1, "pending_od": 1}


@pytest.mark.django_db
def test_super_admin_dashboard_shows_counts(make_user, client_for, course):
    r = client_for(make_user(role=Role.SUPER_ADMIN)).get("/dashboard/super-admin")
    assert r.status_code == 200
    assert r.context["counts"]["courses"] == 1
    assert b"Super Admin Dashboard" in r.content
    assert b"js/stats.js" in r.content


@pytest.mark.django_db
def test_teacher_dashboard_has_no_counts(make_user, client_for):
    r = client_for(make_user(role=Role.TEACHER)).get("/dashboard/teacher")
    assert r.status_code == 200
    assert "counts" not in r.context
    assert b"Upload Marks" in r.content
    assert b"Manage Users" not in r.content


@pytest.mark.django_db
def test_sidebar_follows_role(make_user, client_for):
    r = client_for(make_user(role=Role.STUDENT)).get("/dashboard/student")
    names = [link.name for link in r.context["sidebar_links"]]
    assert names[0] == "Dashboard"
    assert "Request OD" in names
    assert "Mark Attendance" not in names


@pytest.mark.django_db
def test_landing_page_shows_role_cards(client):
    r = client.get("/")
    assert r.status_code == 200
    assert [card["slug"] for card in r.context["cards"]] == ["super-admin", "admin", "teacher", "student"]
    assert r.context["sidebar_links"] == []


@pytest.mark.django_db
def test_stats_endpoint_is_super_admin_only(make_user, client_for, department):
    ok = client_for(make_user(role=Role.SUPER_ADMIN)).get("/dashboard/stats")
    assert ok.status_code == 200
    assert ok.json()["departments"] == 1
    denied = client_for(make_user(role=Role.ADMIN)).get("/dashboard/stats")
    assert denied.status_code == 302
