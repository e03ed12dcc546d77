# banking/models/ledger_movement.py

"""
======================================================
PATH: banking/models/ledger_movement.py
======================================================
LEDGER MOVEMENT MODEL

One entry in a bank account's transaction history.

Guarantees:
- Amount is never negative; direction is via `direction`
- At most one movement per (origin_screen, origin_installment_id) when an
  installment is referenced (partial unique index ORIGIN_GUARD_NAME)
- balance_before / balance_after are written as 0 on insert and filled in
  by banking.services.balance_service
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.db.models import Q

from banking.models.bank_account import BankAccount

User = settings.AUTH_USER_MODEL

ORIGIN_GUARD_NAME = "uniq_movement_origin_installment"


class LedgerMovement(models.Model):
    DIRECTION_IN = "entrada"
    DIRECTION_OUT = "saida"

    DIRECTIONS = [
        (DIRECTION_IN, "Inflow"),
        (DIRECTION_OUT, "Outflow"),
    ]

    STATUS_PENDING = "pendente"
    STATUS_PAID = "pago"

    STATUSES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_PAID, "Paid"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    account = models.ForeignKey(
        BankAccount,
        on_delete=models.PROTECT,
        related_name="movements",
    )

    direction = models.CharField(max_length=10, choices=DIRECTIONS)

    amount = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )

    description = models.CharField(max_length=255)
    detailed_description = models.TextField(blank=True, default="")

    movement_date = models.DateTimeField()

    balance_before = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )
    balance_after = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )

    status = models.CharField(max_length=10, choices=STATUSES, default=STATUS_PAID)

    created_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="ledger_movements_created",
    )

    # Origin triple: which document / screen / installment produced this row.
    origin_id = models.UUIDField(null=True, blank=True)
    origin_screen = models.CharField(max_length=64, blank=True, default="")
    origin_installment_id = models.UUIDField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["movement_date", "created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["origin_screen", "origin_installment_id"],
                condition=Q(origin_installment_id__isnull=False),
                name=ORIGIN_GUARD_NAME,
            ),
            models.CheckConstraint(
                condition=Q(amount__gte=Decimal("0.00")),
                name="ledger_movement_amount_nonnegative",
            ),
        ]
        indexes = [
            models.Index(fields=["account", "movement_date"], name="bank_mov_account_date_idx"),
            models.Index(fields=["origin_id"], name="bank_mov_origin_idx"),
        ]

    @property
    def signed_amount(self) -> Decimal:
        if self.status != self.STATUS_PAID:
            return Decimal("0.00")
        if self.direction == self.DIRECTION_OUT:
            return -self.amount
        return self.amount

    def save(self, *args, **kwargs):
        # The origin guard is left to the database so that concurrent writers
        # surface as IntegrityError (see record_origin_movement).
        self.full_clean(validate_constraints=False)
        return super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.direction} {self.amount} → {self.account}"
