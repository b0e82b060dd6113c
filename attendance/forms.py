from __future__ import annotations

from django import forms
from django.utils import timezone

from accounts.models import Year
from academics.models import Course, Department


class RosterFilterForm(forms.Form):
    """Selects the class whose roster is marked: date, department, year, course."""

    date = forms.DateField(widget=forms.DateInput(attrs={"type": "date"}))
    department = forms.ModelChoiceField(queryset=Department.objects.all())
    year = forms.ChoiceField(choices=Year.choices)
    course = forms.ModelChoiceField(queryset=Course.objects.all())

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["date"].initial = timezone.localdate()

    def clean(self):
        cleaned = super().clean()
        course, department = cleaned.get("course"), cleaned.get("department")
        if course and department and course.department_id != department.pk:
            self.add_error("course", "This course does not belong to the selected department.")
        return cleaned


class AttendanceFilterForm(forms.Form):
    date = forms.DateField(required=False, widget=forms.DateInput(attrs={"type": "date"}))
    department = forms.ModelChoiceField(queryset=Department.objects.all(), required=False, empty_label="All departments")


class SubjectFilterForm(forms.Form):
    course = forms.ModelChoiceField(queryset=Course.objects.all(), required=False, empty_label="All subjects")
