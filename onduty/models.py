"""On-duty (OD) requests raised by students and decided by staff."""
from __future__ import annotations

import mimetypes
import time
from pathlib import Path

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

ALLOWED_EXT = {".pdf", ".jpg", ".jpeg", ".png", ".webp"}
ALLOWED_MIME = {"application/pdf", "image/jpeg", "image/png", "image/webp"}


def validate_document(file) -> None:
    """Size limit plus an extension and filename-MIME check."""
    limit = getattr(settings, "ERP_OD_MAX_UPLOAD_BYTES", 5 * 1024 * 1024)
    size = getattr(file, "size", None)
    if size is not None and size > limit:
        raise ValidationError(f"File too large (max {limit // (1024 * 1024)} MB)")
    ext = Path(getattr(file, "name", "")).suffix.lower()
    if ext not in ALLOWED_EXT:
        raise ValidationError("Unsupported file type (PDF, JPEG, PNG or WEBP only)")
    guessed, _ = mimetypes.guess_type(getattr(file, "name", ""))
    if guessed and guessed not in ALLOWED_MIME:
        raise ValidationError("Unsupported MIME type")


def document_path(instance: "ODRequest", filename: str) -> str:
    """od_documents/<user id>/<timestamp>.<ext>"""
    ext = Path(filename).suffix.lower()
    return f"od_documents/{instance.student_id}/{int(time.time() * 1000)}{ext}"


class ODStatus(models.TextChoices):
    PENDING = "Pending", "Pending"
    APPROVED = "Approved", "Approved"
    REJECTED = "Rejected", "Rejected"


class ODRequest(models.Model):
    student = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="od_requests")
    reason = models.TextField()
    request_date = models.DateField()
    status = models.CharField(max_length=10, choices=ODStatus.choices, default=ODStatus.PENDING, db_index=True)
    supporting_document = models.FileField(
        upload_to=document_path, validators=[validate_document], blank=True
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["request_date", "created_at"]
        verbose_name = "OD request"

    def __str__(self) -> str:  # pragma: no cover
        return f"OD<{self.student_id}:{self.request_date}:{self.status}>"

    @property
    def is_pending(self) -> bool:
        return self.status == ODStatus.PENDING

    @property
    def document_url(self) -> str:
        return self.supporting_document.url if self.supporting_document else ""
