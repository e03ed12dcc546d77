# banking/services/schema.py

"""
CORE SCHEMA CHECK

The movement origin columns and their partial unique index are created by
banking/migrations/0001_initial.py at deploy time. At request time we only
verify, once per process and database alias, that the guard is really there;
without it the payable flow would silently lose its idempotency.
"""

from __future__ import annotations

import logging
import threading

from django.db import DEFAULT_DB_ALIAS, connections

from banking.models.ledger_movement import ORIGIN_GUARD_NAME, LedgerMovement
from banking.services.exceptions import SchemaPrerequisiteError

logger = logging.getLogger("banking")

_verified_aliases: set[str] = set()
_lock = threading.Lock()


def clear_schema_cache() -> None:
    with _lock:
        _verified_aliases.clear()


def ensure_core_schema(*, using: str = DEFAULT_DB_ALIAS) -> None:
    if using in _verified_aliases:
        return

    connection = connections[using]
    table = LedgerMovement._meta.db_table

    with connection.cursor() as cursor:
        constraints = connection.introspection.get_constraints(cursor, table)

    guard = constraints.get(ORIGIN_GUARD_NAME)
    if not guard or not guard.get("unique"):
        logger.error(
            "Movement origin guard missing",
            extra={"table": table, "constraint": ORIGIN_GUARD_NAME, "using": using},
        )
        raise SchemaPrerequisiteError(
            f"Unique index {ORIGIN_GUARD_NAME} is missing on {table}. Run `manage.py migrate banking`."
        )

    with _lock:
        _verified_aliases.add(using)
