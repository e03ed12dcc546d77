# banking/services/movement_service.py

"""
======================================================
PATH: banking/services/movement_service.py
======================================================
ORIGIN-GUARDED MOVEMENT RECORDING

The only place that inserts LedgerMovement rows produced by another screen
(payable installments, ...).

Idempotency:
- (origin_screen, origin_installment_id) is unique in the database.
- A duplicate is NOT an error: the insert is skipped and the caller gets
  MovementOutcome.SKIPPED_CONFLICT.
- The pre-check gives the common case a clean answer; the savepoint +
  IntegrityError branch covers the race where another transaction wins
  between the check and the insert.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from django.db import DEFAULT_DB_ALIAS, IntegrityError, transaction

from banking.models.ledger_movement import LedgerMovement

logger = logging.getLogger("banking")


class MovementOutcome(str, enum.Enum):
    CREATED = "created"
    SKIPPED_CONFLICT = "skipped_conflict"
    SKIPPED_NO_ACCOUNT = "skipped_no_account"


@dataclass(frozen=True)
class MovementRecordResult:
    outcome: MovementOutcome
    movement: LedgerMovement | None = None

    @property
    def created(self) -> bool:
        return self.outcome is MovementOutcome.CREATED


def _origin_exists(*, origin_screen: str, origin_installment_id, using: str) -> bool:
    if origin_installment_id is None:
        return False
    return (
        LedgerMovement.objects.using(using)
        .filter(
            origin_screen=origin_screen,
            origin_installment_id=origin_installment_id,
        )
        .exists()
    )


def record_origin_movement(
    *,
    account_id,
    direction: str,
    amount: Decimal,
    description: str,
    detailed_description: str = "",
    movement_date: datetime,
    origin_id=None,
    origin_screen: str = "",
    origin_installment_id=None,
    status: str = LedgerMovement.STATUS_PAID,
    created_by=None,
    using: str = DEFAULT_DB_ALIAS,
) -> MovementRecordResult:
    """
    Insert a movement unless one already exists for the same origin installment.

    Balances are written as 0/0; callers trigger recompute_account_balances
    when the outcome is CREATED.
    """
    if _origin_exists(
        origin_screen=origin_screen,
        origin_installment_id=origin_installment_id,
        using=using,
    ):
        logger.info(
            "Movement already recorded for origin, skipping",
            extra={
                "origin_screen": origin_screen,
                "origin_installment_id": str(origin_installment_id),
            },
        )
        return MovementRecordResult(MovementOutcome.SKIPPED_CONFLICT)

    movement = LedgerMovement(
        account_id=account_id,
        direction=direction,
        amount=amount,
        description=description,
        detailed_description=detailed_description,
        movement_date=movement_date,
        balance_before=Decimal("0.00"),
        balance_after=Decimal("0.00"),
        status=status,
        created_by=created_by,
        origin_id=origin_id,
        origin_screen=origin_screen,
        origin_installment_id=origin_installment_id,
    )

    try:
        with transaction.atomic(using=using):
            movement.save(using=using)
    except IntegrityError:
        if _origin_exists(
            origin_screen=origin_screen,
            origin_installment_id=origin_installment_id,
            using=using,
        ):
            logger.info(
                "Concurrent movement insert lost the origin race, skipping",
                extra={
                    "origin_screen": origin_screen,
                    "origin_installment_id": str(origin_installment_id),
                },
            )
            return MovementRecordResult(MovementOutcome.SKIPPED_CONFLICT)
        raise

    logger.debug(
        "Ledger movement recorded",
        extra={
            "movement_id": str(movement.id),
            "account_id": str(account_id),
            "direction": direction,
            "amount": str(amount),
        },
    )
    return MovementRecordResult(MovementOutcome.CREATED, movement)
