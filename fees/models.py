"""Student fees.

`Fee.amount` is the amount still outstanding, not the original charge:
payments reduce it, and a fee whose amount reaches zero is Paid.
"""
from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models, transaction
from django.utils import timezone


class FeeStatus(models.TextChoices):
    OUTSTANDING = "Outstanding", "Outstanding"
    PAID = "Paid", "Paid"


class Fee(models.Model):
    student = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="fees")
    fee_type = models.CharField(max_length=100)
    amount = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal("0"))])
    due_date = models.DateField()
    status = models.CharField(max_length=12, choices=FeeStatus.choices, default=FeeStatus.OUTSTANDING)
    paid_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["due_date"]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.fee_type} for {self.student_id}: {self.amount} ({self.status})"


def record_payment(fee: Fee, amount) -> Fee:
    """Apply a payment of `amount` against the outstanding balance of `fee`.

    Raises ValidationError, leaving the fee untouched, unless
    0 < amount <= outstanding.
    """
    amount = Decimal(str(amount))
    if amount <= 0:
        raise ValidationError("Payment amount must be greater than zero.")
    with transaction.atomic():
        locked = Fee.objects.select_for_update().get(pk=fee.pk)
        if amount > locked.amount:
            raise ValidationError(f"Payment exceeds the outstanding amount of {locked.amount}.")
        locked.amount -= amount
        fields = ["amount"]
        if locked.amount == 0:
            locked.status = FeeStatus.PAID
            locked.paid_at = timezone.now()
            fields += ["status", "paid_at"]
        locked.save(update_fields=fields)
    fee.amount, fee.status, fee.paid_at = locked.amount, locked.status, locked.paid_at
    return fee
