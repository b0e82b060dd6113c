"""Forms for departments, courses and the student directory filters."""
from __future__ import annotations

from django import forms

from accounts.models import Year
from .models import Course, Department


class DepartmentForm(forms.ModelForm):
    class Meta:
        model = Department
        fields = ("name", "code")

    def clean_code(self):
        code = (self.cleaned_data.get("code") or "").strip().upper()
        if Department.objects.filter(code__iexact=code).exists():
            raise forms.ValidationError("A department with this code already exists.")
        return code


class CourseForm(forms.ModelForm):
    """Super-admin form for adding a course to a department."""

    class Meta:
        model = Course
        fields = ("name", "code", "department", "credits")

    def clean_code(self):
        code = (self.cleaned_data.get("code") or "").strip().upper()
        if Course.objects.filter(code__iexact=code).exists():
            raise forms.ValidationError("A course with this code already exists.")
        return code


class StudentFilterForm(forms.Form):
    department = forms.ModelChoiceField(queryset=Department.objects.all(), required=False, empty_label="All departments")
    year = forms.ChoiceField(choices=[("", "All years"), *Year.choices], required=False)
