# payables/services/payable_service.py

"""
PAYABLE CREATION (APPLICATION SERVICE)

Purpose:
- Persist a new accounts-payable document with its installments.
- Turn paid installments into bank ledger outflows (idempotent per installment).
- Distribute the chart-of-accounts and cost-center allocations.

Hard rules:
- Validation runs BEFORE the transaction: a rejected request never opens one.
- Every referenced counterparty, bank account, account and cost center must
  belong to the document's company.
- Everything after validation is one transaction: document, history,
  installments, movements, balances, allocations commit together or roll back
  together.
- Installments are handed to the distributor as saved rows; no title lookups
  for freshly created installments.

Notes:
- The database alias is explicit (`using`) so callers and tests choose the
  connection; services never reach for a module-level one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from django.db import DEFAULT_DB_ALIAS, transaction

from banking.services.schema import ensure_core_schema
from history.services import log_history
from payables.services.allocation import (
    KIND_ACCOUNT,
    KIND_COST_CENTER,
    distribute_allocations,
)
from payables.services.exceptions import PayableTransactionError, PayableValidationError
from payables.services.inputs import PayableInput
from payables.services.installment_store import (
    create_document,
    create_installments,
    validate_payable,
)
from payables.services.ledger_movements import synthesize_paid_installment_movements

logger = logging.getLogger("payables")

HISTORY_ACTION_CREATE = "create"
HISTORY_ENTITY_DOCUMENT = "contas_pagar"


@dataclass(frozen=True)
class PayableCreationResult:
    document_id: UUID
    installments: int
    movements_created: int
    movements_skipped: int
    account_mode: str
    cost_center_mode: str


def _actor(user):
    return user if getattr(user, "is_authenticated", False) else None


def create_payable(
    payload: PayableInput,
    *,
    user=None,
    using: str = DEFAULT_DB_ALIAS,
) -> PayableCreationResult:
    header = payload.header
    validate_payable(payload, using=using)

    actor = _actor(user)
    log_extra = {
        "company_id": str(header.company_id),
        "title": header.title,
        "installments": len(payload.installments),
    }
    logger.info("Creating payable document", extra=log_extra)

    try:
        with transaction.atomic(using=using):
            ensure_core_schema(using=using)

            document = create_document(header, created_by=actor, using=using)

            log_history(
                company_id=document.company_id,
                action=HISTORY_ACTION_CREATE,
                entity=HISTORY_ENTITY_DOCUMENT,
                entity_id=document.id,
                description=f'Criado título a pagar: "{document.title}" (valor {document.total_value})',
                metadata={"titulo": document.title, "valorTotal": document.total_value},
                user=actor,
                using=using,
            )

            installments = []
            if payload.installments:
                installments = create_installments(document, payload.installments, using=using)

            report = synthesize_paid_installment_movements(
                document=document, created_by=actor, using=using
            )

            accounts = distribute_allocations(
                document=document,
                total_value=header.total_value,
                installments=installments,
                allocations=payload.account_allocations,
                scalar_target_id=header.chart_of_account_id,
                kind=KIND_ACCOUNT,
                using=using,
            )
            cost_centers = distribute_allocations(
                document=document,
                total_value=header.total_value,
                installments=installments,
                allocations=payload.cost_center_allocations,
                scalar_target_id=header.cost_center_id,
                kind=KIND_COST_CENTER,
                using=using,
            )
    except PayableValidationError:
        raise
    except Exception as exc:
        logger.exception("Payable creation failed, transaction rolled back", extra=log_extra)
        raise PayableTransactionError(str(exc)) from exc

    logger.info(
        "Payable document created",
        extra={
            **log_extra,
            "document_id": str(document.id),
            "movements_created": report.created_count,
        },
    )

    return PayableCreationResult(
        document_id=document.id,
        installments=len(installments),
        movements_created=report.created_count,
        movements_skipped=report.skipped_count,
        account_mode=accounts.mode,
        cost_center_mode=cost_centers.mode,
    )
