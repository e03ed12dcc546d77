# history/models.py

"""
HISTORY ENTRY (IMMUTABLE)

Append-only audit trail of business actions (document created, installment
paid, ...). Created once. Never updated. Never deleted.
"""

import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone

from companies.models import Company

User = settings.AUTH_USER_MODEL


class HistoryEntry(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    company = models.ForeignKey(
        Company,
        on_delete=models.PROTECT,
        related_name="history_entries",
        null=True,
        blank=True,
    )

    user = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="history_entries",
    )

    action = models.CharField(max_length=64)
    entity = models.CharField(max_length=64)
    entity_id = models.CharField(max_length=64, blank=True, default="")

    description = models.TextField(blank=True, default="")
    metadata = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-created_at"]
        verbose_name_plural = "History entries"
        indexes = [
            models.Index(fields=["entity", "entity_id"], name="history_entity_idx"),
            models.Index(fields=["company", "created_at"], name="history_company_created_idx"),
        ]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise RuntimeError("HistoryEntry records are immutable")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise RuntimeError("HistoryEntry records cannot be deleted")

    def __str__(self):
        return f"{self.action} | {self.entity}:{self.entity_id}"
