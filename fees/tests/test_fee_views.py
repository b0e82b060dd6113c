from __future__ import annotations

import datetime as dt
from decimal import Decimal

import pytest

from accounts.models import Role
from fees.models import Fee, FeeStatus


@pytest.fixture
def student(make_user):
    return make_user(role=Role.STUDENT, roll_number="R1")


def _fee(student, amount="500.00", **kw):
    return Fee.objects.create(
        student=student, fee_type=kw.pop("fee_type", "Tuition"), amount=Decimal(amount),
        due_date=kw.pop("due_date", dt.date(2024, 6, 1)), **kw
    )


@pytest.mark.django_db
def test_super_admin_adds_fee_as_outstanding(make_user, client_for, student):
    c = client_for(make_user(role=Role.SUPER_ADMIN))
    r = c.post(
        "/erp/fees-records",
        {"student": student.pk, "fee_type": "Library", "amount": "120.00", "due_date": "2024-07-01"},
        follow=True,
    )
    assert b"Fee added successfully!" in r.content
    fee = Fee.objects.get(fee_type="Library")
    assert fee.status == FeeStatus.OUTSTANDING
    assert fee.student == student


@pytest.mark.django_db
def test_fee_for_non_student_is_rejected(make_user, client_for):
    teacher = make_user(role=Role.TEACHER)
    c = client_for(make_user(role=Role.SUPER_ADMIN))
    r = c.post("/erp/fees-records", {"student": teacher.pk, "fee_type": "X", "amount": "1", "due_date": "2024-07-01"})
    assert r.status_code == 200
    assert not Fee.objects.exists()


@pytest.mark.django_db
def test_fee_amount_must_be_positive(make_user, client_for, student):
    c = client_for(make_user(role=Role.SUPER_ADMIN))
    r = c.post("/erp/fees-records", {"student": student.pk, "fee_type": "X", "amount": "0", "due_date": "2024-07-01"})
    assert r.status_code == 200
    assert b"Amount must be greater than zero." in r.content


@pytest.mark.django_db
def test_admin_records_payment(make_user, client_for, student):
    fee = _fee(student)
    c = client_for(make_user(role=Role.ADMIN))
    r = c.post(f"/erp/fees/{fee.pk}/pay", {"amount": "500"}, follow=True)
    assert b"Payment recorded successfully!" in r.content
    fee.refresh_from_db()
    assert fee.status == FeeStatus.PAID


@pytest.mark.django_db
def test_overpayment_is_reported(make_user, client_for, student):
    fee = _fee(student, amount="100.00")
    c = client_for(make_user(role=Role.ADMIN))
    r = c.post(f"/erp/fees/{fee.pk}/pay", {"amount": "150"}, follow=True)
    assert b"Payment exceeds the outstanding amount" in r.content
    fee.refresh_from_db()
    assert fee.amount == Decimal("100.00")


@pytest.mark.django_db
def test_admin_filters_by_status(make_user, client_for, student):
    _fee(student, fee_type="Tuition")
    _fee(student, fee_type="Hostel", status=FeeStatus.PAID)
    c = client_for(make_user(role=Role.ADMIN))
    r = c.get("/erp/fees/admin", {"status": FeeStatus.PAID})
    assert [f.fee_type for f in r.context["fees"]] == ["Hostel"]


@pytest.mark.django_db
def test_student_sees_own_fees_and_outstanding_total(make_user, client_for, student):
    _fee(student, amount="300.00")
    _fee(student, amount="200.00", due_date=dt.date(2024, 8, 1))
    _fee(student, amount="0.00", status=FeeStatus.PAID)
    _fee(make_user(role=Role.STUDENT), amount="999.00")
    r = client_for(student).get("/erp/fees/student")
    assert r.status_code == 200
    assert len(r.context["fees"]) == 3
    assert r.context["total_outstanding"] == Decimal("500.00")


@pytest.mark.django_db
def test_admin_cannot_create_fee_records(make_user, client_for):
    r = client_for(make_user(role=Role.ADMIN)).get("/erp/fees-records")
    assert r["Location"] == "/dashboard/admin"
