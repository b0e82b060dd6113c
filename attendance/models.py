from __future__ import annotations

from django.conf import settings
from django.db import models


class AttendanceStatus(models.TextChoices):
    PRESENT = "Present", "Present"
    ABSENT = "Absent", "Absent"


class AttendanceRecord(models.Model):
    """One student's attendance for one course on one day."""

    student = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="attendance_records")
    course = models.ForeignKey("academics.Course", on_delete=models.CASCADE, related_name="attendance_records")
    date = models.DateField()
    status = models.CharField(max_length=10, choices=AttendanceStatus.choices, default=AttendanceStatus.PRESENT)
    reason = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-date", "course__name"]
        constraints = [
            models.UniqueConstraint(fields=["student", "course", "date"], name="uniq_attendance_student_course_date"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.student_id}:{self.course_id}:{self.date}:{self.status}"


def attendance_summary(records) -> dict:
    """Totals for a set of records; percentage has one decimal, 0 when empty."""
    total = len(records)
    present = sum(1 for r in records if r.status == AttendanceStatus.PRESENT)
    percentage = round(present * 100 / total, 1) if total else 0
    return {"total": total, "present": present, "absent": total - present, "percentage": percentage}
