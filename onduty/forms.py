from __future__ import annotations

from django import forms
from django.utils import timezone

from .models import ODRequest


class ODRequestForm(forms.ModelForm):
    class Meta:
        model = ODRequest
        fields = ("reason", "request_date", "supporting_document")
        widgets = {
            "reason": forms.Textarea(attrs={"rows": 4, "placeholder": "Reason for on-duty"}),
            "request_date": forms.DateInput(attrs={"type": "date"}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["request_date"].initial = timezone.localdate()

    def clean_reason(self):
        reason = (self.cleaned_data.get("reason") or "").strip()
        if not reason:
            raise forms.ValidationError("Please give a reason.")
        return reason
