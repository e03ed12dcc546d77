# payables/services/ledger_movements.py

"""
======================================================
PATH: payables/services/ledger_movements.py
======================================================
PAID INSTALLMENT -> BANK LEDGER MOVEMENT

For every installment of a document whose status is "pago":
- no bank account          -> skipped, nothing written
- origin already recorded  -> skipped (MovementOutcome.SKIPPED_CONFLICT)
- otherwise                -> one outflow movement, the account's running
                              balances recomputed, one history entry

Runs inside the caller's transaction. Any failure propagates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, time

from django.db import DEFAULT_DB_ALIAS
from django.utils import timezone

from banking.models.ledger_movement import LedgerMovement
from banking.services.balance_service import recompute_account_balances
from banking.services.movement_service import MovementOutcome, record_origin_movement
from history.services import log_history
from payables.models import Installment, PayableDocument
from payables.services.rounding import round2

logger = logging.getLogger("payables")

ORIGIN_SCREEN = "contas_pagar_parcelas"
MOVEMENT_DESCRIPTION = "Pagamento de conta a pagar"

HISTORY_ACTION_PAID = "parcela_paga"
HISTORY_ENTITY_INSTALLMENT = "parcela_contas_pagar"


@dataclass
class SynthesisReport:
    created: list[LedgerMovement] = field(default_factory=list)
    skipped: dict[str, MovementOutcome] = field(default_factory=dict)

    @property
    def created_count(self) -> int:
        return len(self.created)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


def movement_value(installment: Installment):
    """Installment total, else installment value, else 0; rounded to cents."""
    if installment.total_value is not None:
        return round2(installment.total_value)
    return round2(installment.installment_value)


def movement_datetime(installment: Installment) -> datetime:
    """Clearing date, else payment date, else now (aware, local midnight)."""
    day = installment.clearing_date or installment.payment_date
    if day is None:
        return timezone.now()
    return timezone.make_aware(datetime.combine(day, time.min))


def _counterparty_name(document: PayableDocument, *, using: str) -> str:
    names = (
        PayableDocument.objects.using(using)
        .filter(pk=document.pk)
        .values_list("counterparty__legal_name", "counterparty__trade_name")
        .first()
    )
    if not names:
        return ""
    legal_name, trade_name = names
    return legal_name or trade_name or ""


def synthesize_paid_installment_movements(
    *,
    document: PayableDocument,
    created_by=None,
    using: str = DEFAULT_DB_ALIAS,
) -> SynthesisReport:
    report = SynthesisReport()

    paid = list(
        Installment.objects.using(using)
        .filter(document=document, status=Installment.STATUS_PAID)
        .order_by("sequence", "created_at")
    )
    if not paid:
        return report

    counterparty = _counterparty_name(document, using=using)

    for installment in paid:
        if installment.bank_account_id is None:
            logger.info(
                "Paid installment has no bank account, no movement recorded",
                extra={"document_id": str(document.id), "installment_id": str(installment.id)},
            )
            report.skipped[str(installment.id)] = MovementOutcome.SKIPPED_NO_ACCOUNT
            continue

        value = movement_value(installment)
        title = installment.title or "parcela"

        result = record_origin_movement(
            account_id=installment.bank_account_id,
            direction=LedgerMovement.DIRECTION_OUT,
            amount=value,
            description=MOVEMENT_DESCRIPTION,
            detailed_description=f'pagamento titulo "{title}" de "{counterparty}"',
            movement_date=movement_datetime(installment),
            origin_id=document.id,
            origin_screen=ORIGIN_SCREEN,
            origin_installment_id=installment.id,
            created_by=created_by,
            using=using,
        )
        if not result.created:
            report.skipped[str(installment.id)] = result.outcome
            continue

        recompute_account_balances(account_id=installment.bank_account_id, using=using)

        log_history(
            company_id=document.company_id,
            action=HISTORY_ACTION_PAID,
            entity=HISTORY_ENTITY_INSTALLMENT,
            entity_id=installment.id,
            description=f'Parcela paga: "{installment.title}" (valor {value})',
            metadata={"conta_pagar_id": str(document.id)},
            user=created_by,
            using=using,
        )
        report.created.append(result.movement)

    logger.info(
        "Paid installment movements synthesized",
        extra={
            "document_id": str(document.id),
            "movements_created": report.created_count,
            "movements_skipped": report.skipped_count,
        },
    )
    return report
