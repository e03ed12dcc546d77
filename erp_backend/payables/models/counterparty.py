# payables/models/counterparty.py

import uuid

from django.core.exceptions import ValidationError
from django.db import models

from companies.models import Company


class Counterparty(models.Model):
    """
    Supplier / client master record (cadastro) owned by a company.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    company = models.ForeignKey(
        Company,
        on_delete=models.PROTECT,
        related_name="counterparties",
    )

    legal_name = models.CharField(max_length=255, blank=True, default="")
    trade_name = models.CharField(max_length=255, blank=True, default="")
    tax_id = models.CharField(max_length=20, blank=True, default="")

    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["legal_name", "trade_name"]
        verbose_name_plural = "Counterparties"
        indexes = [
            models.Index(fields=["company", "legal_name"], name="cp_company_legal_name_idx"),
        ]

    @property
    def display_name(self) -> str:
        return self.legal_name or self.trade_name or ""

    def clean(self):
        if not (self.legal_name or "").strip() and not (self.trade_name or "").strip():
            raise ValidationError("legal_name or trade_name is required")

    def save(self, *args, **kwargs):
        self.legal_name = (self.legal_name or "").strip()
        self.trade_name = (self.trade_name or "").strip()
        self.full_clean()
        return super().save(*args, **kwargs)

    def __str__(self):
        return self.display_name
