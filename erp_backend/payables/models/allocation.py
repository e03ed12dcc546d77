# payables/models/allocation.py

"""
ALLOCATION ROWS (rateio)

Two targets (chart-of-accounts, cost center) x two levels (document,
installment). Every row is write-once, created in the same transaction as
its document.

- Document-level rows keep the caller-supplied (value, percent).
- Installment-level rows hold the proportional share computed by
  payables.services.allocation, rounded to cents, percent derived from it.
"""

import uuid

from django.db import models

from accounting.models.account import Account
from accounting.models.cost_center import CostCenter
from payables.models.document import PayableDocument
from payables.models.installment import Installment


class AllocationRow(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    value = models.DecimalField(max_digits=14, decimal_places=2)
    percent = models.DecimalField(max_digits=9, decimal_places=4, null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        abstract = True
        ordering = ["created_at"]


class DocumentAccountAllocation(AllocationRow):
    document = models.ForeignKey(
        PayableDocument,
        on_delete=models.CASCADE,
        related_name="account_allocations",
    )
    account = models.ForeignKey(
        Account,
        on_delete=models.PROTECT,
        related_name="payable_document_allocations",
    )

    def __str__(self):
        return f"{self.document_id} | {self.account_id} | {self.value}"


class InstallmentAccountAllocation(AllocationRow):
    document = models.ForeignKey(
        PayableDocument,
        on_delete=models.CASCADE,
        related_name="installment_account_allocations",
    )
    installment = models.ForeignKey(
        Installment,
        on_delete=models.CASCADE,
        related_name="account_allocations",
    )
    account = models.ForeignKey(
        Account,
        on_delete=models.PROTECT,
        related_name="payable_installment_allocations",
    )

    def __str__(self):
        return f"{self.installment_id} | {self.account_id} | {self.value}"


class DocumentCostCenterAllocation(AllocationRow):
    document = models.ForeignKey(
        PayableDocument,
        on_delete=models.CASCADE,
        related_name="cost_center_allocations",
    )
    cost_center = models.ForeignKey(
        CostCenter,
        on_delete=models.PROTECT,
        related_name="payable_document_allocations",
    )

    def __str__(self):
        return f"{self.document_id} | {self.cost_center_id} | {self.value}"


class InstallmentCostCenterAllocation(AllocationRow):
    document = models.ForeignKey(
        PayableDocument,
        on_delete=models.CASCADE,
        related_name="installment_cost_center_allocations",
    )
    installment = models.ForeignKey(
        Installment,
        on_delete=models.CASCADE,
        related_name="cost_center_allocations",
    )
    cost_center = models.ForeignKey(
        CostCenter,
        on_delete=models.PROTECT,
        related_name="payable_installment_allocations",
    )

    def __str__(self):
        return f"{self.installment_id} | {self.cost_center_id} | {self.value}"
