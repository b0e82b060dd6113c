"""Fee payment updates (admins), fee records (super admin) and personal fees."""
from __future__ import annotations

import logging

from django.contrib import messages
from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction
from django.db.models import Sum
from django.http import HttpRequest, HttpResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from accounts.decorators import role_required
from accounts.models import ADMINS, EVERYONE, SUPER_ADMIN_ONLY
from .forms import FeeForm, FeeStatusFilterForm, PaymentForm
from .models import Fee, FeeStatus, record_payment

logger = logging.getLogger(__name__)


@role_required(*ADMINS)
def fees_admin(request: HttpRequest) -> HttpResponse:
    form = FeeStatusFilterForm(request.GET or None)
    fees = Fee.objects.select_related("student__profile").order_by("due_date")
    if form.is_bound and form.is_valid() and form.cleaned_data.get("status"):
        fees = fees.filter(status=form.cleaned_data["status"])
    return render(request, "fees/admin.html", {"form": form, "fees": fees, "payment_form": PaymentForm()})


@require_POST
@role_required(*ADMINS)
def pay_fee(request: HttpRequest, pk: int) -> HttpResponse:
    fee = get_object_or_404(Fee, pk=pk)
    form = PaymentForm(request.POST)
    if not form.is_valid():
        messages.error(request, "Enter a valid payment amount.")
        return redirect("fees:admin")
    try:
        record_payment(fee, form.cleaned_data["amount"])
    except ValidationError as exc:
        messages.error(request, exc.messages[0])
    except DatabaseError:
        logger.exception("Recording payment on fee %s failed", pk)
        messages.error(request, "Error updating fee.")
    else:
        logger.info("Payment of %s recorded on fee %s by %s", form.cleaned_data["amount"], pk, request.user.pk)
        messages.success(request, "Payment recorded successfully!")
    return redirect("fees:admin")


@role_required(*SUPER_ADMIN_ONLY)
def fees_records(request: HttpRequest) -> HttpResponse:
    if request.method == "POST":
        form = FeeForm(request.POST)
        if form.is_valid():
            try:
                with transaction.atomic():
                    fee = form.save()
            except DatabaseError:
                logger.exception("Creating fee failed")
                messages.error(request, "Error adding fee.")
            else:
                logger.info("Fee %s created by %s", fee.pk, request.user.pk)
                messages.success(request, "Fee added successfully!")
                return redirect("fees:records")
    else:
        form = FeeForm()
    fees = Fee.objects.select_related("student__profile").order_by("-created_at")
    return render(request, "fees/records.html", {"form": form, "fees": fees})


@role_required(*EVERYONE)
def student_fees(request: HttpRequest) -> HttpResponse:
    fees = Fee.objects.filter(student=request.user).order_by("due_date")
    outstanding = fees.filter(status=FeeStatus.OUTSTANDING).aggregate(total=Sum("amount"))["total"] or 0
    return render(request, "fees/student.html", {"fees": fees, "total_outstanding": outstanding})
