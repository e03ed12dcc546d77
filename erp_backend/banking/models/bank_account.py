# banking/models/bank_account.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from companies.models import Company


class BankAccount(models.Model):
    """
    Bank / cash account (conta corrente) whose history is made of LedgerMovement rows.

    current_balance is derived: it is rewritten by the balance service from
    opening_balance + settled movements, never edited by hand.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    company = models.ForeignKey(
        Company,
        on_delete=models.PROTECT,
        related_name="bank_accounts",
    )

    description = models.CharField(max_length=150)
    bank_name = models.CharField(max_length=100, blank=True, default="")
    agency_number = models.CharField(max_length=20, blank=True, default="")
    account_number = models.CharField(max_length=30, blank=True, default="")

    opening_balance = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )
    current_balance = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )
    balance_updated_at = models.DateTimeField(null=True, blank=True)

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["description"]
        indexes = [
            models.Index(fields=["company", "is_active"], name="bank_acc_company_active_idx"),
        ]

    def clean(self):
        if not (self.description or "").strip():
            raise ValidationError({"description": "description is required"})

    def save(self, *args, **kwargs):
        if self.description is not None:
            self.description = self.description.strip()
        self.full_clean()
        return super().save(*args, **kwargs)

    def __str__(self):
        return self.description
