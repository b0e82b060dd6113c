from __future__ import annotations

from decimal import Decimal

from django import forms
from django.contrib.auth import get_user_model

from accounts.models import Role
from .models import Fee, FeeStatus


class FeeForm(forms.ModelForm):
    """New fee for a student; always starts Outstanding."""

    class Meta:
        model = Fee
        fields = ("student", "fee_type", "amount", "due_date")
        widgets = {"due_date": forms.DateInput(attrs={"type": "date"})}

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["student"].queryset = (
            get_user_model().objects.filter(profile__role=Role.STUDENT).order_by("profile__roll_number")
        )

    def clean_amount(self):
        amount = self.cleaned_data["amount"]
        if amount <= 0:
            raise forms.ValidationError("Amount must be greater than zero.")
        return amount

    def save(self, commit: bool = True) -> Fee:
        fee = super().save(commit=False)
        fee.status = FeeStatus.OUTSTANDING
        if commit:
            fee.save()
        return fee


class PaymentForm(forms.Form):
    amount = forms.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0.01"))


class FeeStatusFilterForm(forms.Form):
    status = forms.ChoiceField(choices=[("", "All"), *FeeStatus.choices], required=False)
