"""OD request submission (everyone) and approval (staff)."""
from __future__ import annotations

import logging

from django.contrib import messages
from django.db import DatabaseError, transaction
from django.http import HttpRequest, HttpResponse, HttpResponseBadRequest
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from accounts.decorators import role_required
from accounts.models import EVERYONE, STAFF
from .forms import ODRequestForm
from .models import ODRequest, ODStatus

logger = logging.getLogger(__name__)

DECISIONS = {"approve": ODStatus.APPROVED, "reject": ODStatus.REJECTED}


@role_required(*EVERYONE)
def request_od(request: HttpRequest) -> HttpResponse:
    if request.method == "POST":
        form = ODRequestForm(request.POST, request.FILES)
        if form.is_valid():
            od = form.save(commit=False)
            od.student = request.user
            try:
                with transaction.atomic():
                    od.save()
            except DatabaseError:
                logger.exception("Saving OD request for user %s failed", request.user.pk)
                messages.error(request, "Error submitting OD request.")
            else:
                logger.info("OD request %s submitted by %s", od.pk, request.user.pk)
                messages.success(request, "OD request submitted successfully!")
                return redirect("onduty:request")
    else:
        form = ODRequestForm()
    mine = ODRequest.objects.filter(student=request.user).order_by("-request_date", "-created_at")
    return render(request, "onduty/request.html", {"form": form, "requests": mine})


@role_required(*STAFF)
def approve_od(request: HttpRequest) -> HttpResponse:
    pending_first = ODRequest.objects.select_related("student__profile").order_by("request_date", "created_at")
    return render(request, "onduty/approve.html", {"requests": pending_first})


@require_POST
@role_required(*STAFF)
def decide_od(request: HttpRequest, pk: int) -> HttpResponse:
    """Approve or reject a request; decided requests are read-only."""
    status = DECISIONS.get(request.POST.get("action", ""))
    if status is None:
        return HttpResponseBadRequest("unknown action")
    get_object_or_404(ODRequest, pk=pk)
    try:
        with transaction.atomic():
            od = ODRequest.objects.select_for_update().get(pk=pk)
            if not od.is_pending:
                messages.error(request, f"This request has already been {od.status.lower()}.")
                return redirect("onduty:approve")
            od.status = status
            od.save(update_fields=["status"])
    except DatabaseError:
        logger.exception("Updating OD request %s failed", pk)
        messages.error(request, "Error updating OD request.")
    else:
        logger.info("OD request %s %s by %s", pk, status.lower(), request.user.pk)
        messages.success(request, f"OD request {status.lower()}.")
    return redirect("onduty:approve")
