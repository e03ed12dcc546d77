# accounting/models/cost_center.py

from __future__ import annotations

import uuid

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from companies.models import Company


class CostCenter(models.Model):
    """
    Cost center (centro de custo) used as a second allocation dimension.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    company = models.ForeignKey(
        Company,
        on_delete=models.PROTECT,
        related_name="cost_centers",
    )

    code = models.CharField(max_length=20)
    name = models.CharField(max_length=150)

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["code"]
        verbose_name = "Cost Center"
        verbose_name_plural = "Cost Centers"
        constraints = [
            models.UniqueConstraint(
                fields=["company", "code"],
                name="uniq_cost_center_company_code",
            ),
            models.CheckConstraint(
                condition=~Q(code=""),
                name="chk_cost_center_code_not_blank",
            ),
        ]

    def __str__(self):
        return f"{self.code} – {self.name}"

    def clean(self):
        self.code = (self.code or "").strip()
        self.name = (self.name or "").strip()

        if not self.code:
            raise ValidationError("Cost center code is required")
        if not self.name:
            raise ValidationError("Cost center name is required")

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)
