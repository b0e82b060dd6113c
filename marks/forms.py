from __future__ import annotations

from django import forms

from accounts.models import Year
from academics.models import Course, Department


class ClassSelectForm(forms.Form):
    department = forms.ModelChoiceField(queryset=Department.objects.all())
    year = forms.ChoiceField(choices=Year.choices)
    course = forms.ModelChoiceField(queryset=Course.objects.all())

    def clean(self):
        cleaned = super().clean()
        course, department = cleaned.get("course"), cleaned.get("department")
        if course and department and course.department_id != department.pk:
            self.add_error("course", "This course does not belong to the selected department.")
        return cleaned


class MarksFilterForm(forms.Form):
    department = forms.ModelChoiceField(queryset=Department.objects.all(), required=False, empty_label="All departments")
    year = forms.ChoiceField(choices=[("", "All years"), *Year.choices], required=False)
    course = forms.ModelChoiceField(queryset=Course.objects.all(), required=False, empty_label="All subjects")


def parse_score(raw) -> int | None:
    """Blank input means "not entered"; anything else must be an integer 0-100."""
    text = (raw or "").strip()
    if not text:
        return None
    try:
        value = int(text)
    except ValueError:
        raise forms.ValidationError(f"'{text}' is not a whole number.")
    if not 0 <= value <= 100:
        raise forms.ValidationError("Marks must be between 0 and 100.")
    return value
