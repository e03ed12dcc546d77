# history/services.py

from __future__ import annotations

import json
import logging

from django.core.serializers.json import DjangoJSONEncoder
from django.db import DEFAULT_DB_ALIAS

from history.models import HistoryEntry

logger = logging.getLogger("history")


def _json_safe(metadata: dict | None) -> dict:
    # Decimal / UUID / date values must survive a JSONField round-trip.
    return json.loads(json.dumps(metadata or {}, cls=DjangoJSONEncoder))


def log_history(
    *,
    company_id=None,
    action: str,
    entity: str,
    entity_id=None,
    description: str = "",
    metadata: dict | None = None,
    user=None,
    using: str = DEFAULT_DB_ALIAS,
) -> HistoryEntry:
    """
    Append one audit row inside the caller's transaction.

    Failures propagate: an audit row that cannot be written aborts the
    enclosing business operation.
    """
    entry = HistoryEntry(
        company_id=company_id,
        user=user if getattr(user, "is_authenticated", False) else None,
        action=action,
        entity=entity,
        entity_id=str(entity_id or ""),
        description=description or "",
        metadata=_json_safe(metadata),
    )
    entry.save(using=using)

    logger.debug(
        "History entry recorded",
        extra={"action": action, "entity": entity, "entity_id": entry.entity_id},
    )
    return entry
