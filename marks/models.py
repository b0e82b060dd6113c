from __future__ import annotations

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

# (lower bound, grade) from the highest band down
GRADE_BANDS = (
    (90, "A+"),
    (80, "A"),
    (70, "B+"),
    (60, "B"),
    (50, "C+"),
    (40, "C"),
)


def grade_for(score: int) -> str:
    """Letter grade for a 0-100 score."""
    for floor, grade in GRADE_BANDS:
        if score >= floor:
            return grade
    return "F"


class Mark(models.Model):
    student = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="marks")
    course = models.ForeignKey("academics.Course", on_delete=models.CASCADE, related_name="marks")
    marks = models.PositiveSmallIntegerField(validators=[MinValueValidator(0), MaxValueValidator(100)])
    grade = models.CharField(max_length=2)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["course__name"]
        constraints = [
            models.UniqueConstraint(fields=["student", "course"], name="uniq_mark_student_course"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.student_id}:{self.course_id}={self.marks}"

    def save(self, *args, **kwargs):
        self.grade = grade_for(self.marks)
        super().save(*args, **kwargs)
