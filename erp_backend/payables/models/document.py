# payables/models/document.py

"""
PAYABLE DOCUMENT (conta a pagar)

Header of an obligation owed by the company, split into installments.

Created once per request by payables.services.payable_service together with
its installments, ledger movements and allocations (single transaction).
Header fields are not mutated by that flow afterwards.
"""

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

from accounting.models.account import Account
from accounting.models.cost_center import CostCenter
from companies.models import Company
from payables.models.counterparty import Counterparty

User = settings.AUTH_USER_MODEL


class PayableDocument(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    STATUS_PENDING = "PENDENTE"
    STATUS_PARTIAL = "PARCIAL"
    STATUS_SETTLED = "QUITADO"

    STATUSES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_PARTIAL, "Partially paid"),
        (STATUS_SETTLED, "Settled"),
    ]

    company = models.ForeignKey(
        Company,
        on_delete=models.PROTECT,
        related_name="payable_documents",
    )
    counterparty = models.ForeignKey(
        Counterparty,
        on_delete=models.PROTECT,
        related_name="payable_documents",
    )

    title = models.CharField(max_length=255)
    total_value = models.DecimalField(max_digits=14, decimal_places=2)

    # Scalar targets; used as a 100% allocation when no explicit split is sent.
    chart_of_account = models.ForeignKey(
        Account,
        on_delete=models.PROTECT,
        related_name="payable_documents",
        null=True,
        blank=True,
    )
    cost_center = models.ForeignKey(
        CostCenter,
        on_delete=models.PROTECT,
        related_name="payable_documents",
        null=True,
        blank=True,
    )

    issue_date = models.DateField()
    settlement_date = models.DateField(null=True, blank=True)
    period = models.CharField(max_length=20, blank=True, default="")
    origin = models.CharField(max_length=100, blank=True, default="")
    notes = models.TextField(blank=True, default="")

    status = models.CharField(max_length=20, choices=STATUSES, default=STATUS_PENDING)

    installment_plan_id = models.UUIDField(null=True, blank=True)

    created_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="payable_documents_created",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(total_value__gte=Decimal("0.00")),
                name="payable_document_total_nonnegative",
            ),
        ]
        indexes = [
            models.Index(fields=["company", "created_at"], name="payable_company_created_idx"),
            models.Index(fields=["status", "created_at"], name="payable_status_created_idx"),
        ]

    def clean(self):
        if not (self.title or "").strip():
            raise ValidationError({"title": "title is required"})

        if self.total_value is not None and self.total_value < Decimal("0.00"):
            raise ValidationError({"total_value": "total_value cannot be negative"})

    def save(self, *args, **kwargs):
        if self.title is not None:
            self.title = self.title.strip()
        self.full_clean()
        return super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.title} ({self.total_value})"
