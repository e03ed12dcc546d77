# payables/models/installment.py

import uuid

from django.db import models

from banking.models.bank_account import BankAccount
from payables.models.document import PayableDocument


class Installment(models.Model):
    """
    Scheduled partial payment of a PayableDocument (parcela).

    Stored verbatim from the request: no derived values are computed here.
    `sequence` keeps the caller's array order.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    STATUS_PENDING = "pendente"
    STATUS_PAID = "pago"

    STATUSES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_PAID, "Paid"),
    ]

    document = models.ForeignKey(
        PayableDocument,
        on_delete=models.CASCADE,
        related_name="installments",
    )
    sequence = models.PositiveIntegerField(default=0)

    title = models.CharField(max_length=255, blank=True, default="")

    due_date = models.DateField(null=True, blank=True)
    payment_date = models.DateField(null=True, blank=True)
    clearing_date = models.DateField(null=True, blank=True)

    installment_value = models.DecimalField(
        max_digits=14, decimal_places=2, null=True, blank=True
    )
    difference = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    total_value = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)

    status = models.CharField(max_length=10, choices=STATUSES, default=STATUS_PENDING)

    payment_method_id = models.UUIDField(null=True, blank=True)
    bank_account = models.ForeignKey(
        BankAccount,
        on_delete=models.PROTECT,
        related_name="payable_installments",
        null=True,
        blank=True,
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["document", "sequence"]
        indexes = [
            models.Index(fields=["document", "title"], name="installment_doc_title_idx"),
            models.Index(fields=["status", "due_date"], name="installment_status_due_idx"),
        ]

    @property
    def is_paid(self) -> bool:
        return self.status == self.STATUS_PAID

    def __str__(self):
        return f"{self.title or 'parcela'} ({self.installment_value})"
