# companies/models.py

import uuid

from django.db import models
from django.db.models import Q


class Company(models.Model):
    """
    Owning tenant of every financial record.

    Guarantees:
    - Companies are stable master-data
    - code is optional, but if provided it must be unique
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=255)

    code = models.CharField(
        max_length=50,
        null=True,
        blank=True,
        help_text="Unique company code (optional). If set, must be unique.",
        db_index=True,
    )

    tax_id = models.CharField(max_length=20, blank=True, default="")

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "Companies"
        constraints = [
            models.UniqueConstraint(
                fields=["code"],
                condition=Q(code__isnull=False) & ~Q(code=""),
                name="uniq_company_code_when_present",
            ),
        ]

    def __str__(self):
        c = (self.code or "").strip()
        if c:
            return f"{self.name} ({c})"
        return self.name
