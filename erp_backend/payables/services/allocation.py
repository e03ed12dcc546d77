# payables/services/allocation.py

"""
======================================================
PATH: payables/services/allocation.py
======================================================
ALLOCATION DISTRIBUTOR (rateio)

One routine, two targets: chart of accounts ("account") and cost centers
("cost_center"). For a document it runs exactly one of:

1) Explicit split (allocation list non-empty)
   - entries without a target or with value <= 0 are skipped
   - one document-level row per entry, (value, percent) stored as sent
   - one installment-level row per (entry, installment):
         share   = round2(value / document_total * installment_value)
         percent = round2(share / installment_value * 100)
     share is 0 when document_total <= 0; percent is 0 when
     installment_value <= 0.

2) Scalar fallback (empty list, scalar target set)
   - one document-level row at 100% of the total
   - one installment-level row per installment at 100% of its value

3) Nothing (empty list, no scalar target)

Per-installment shares are rounded independently; their sum may drift from
the entry value by a few cents. No correction is applied.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Sequence, Union

from django.db import DEFAULT_DB_ALIAS, models

from payables.models import (
    DocumentAccountAllocation,
    DocumentCostCenterAllocation,
    Installment,
    InstallmentAccountAllocation,
    InstallmentCostCenterAllocation,
    PayableDocument,
)
from payables.services.inputs import AllocationInput, InstallmentInput
from payables.services.installment_store import find_installment_id_by_title
from payables.services.rounding import round2, to_decimal

logger = logging.getLogger("payables")

KIND_ACCOUNT = "account"
KIND_COST_CENTER = "cost_center"

MODE_EXPLICIT = "explicit"
MODE_FALLBACK = "fallback"
MODE_NONE = "none"

HUNDRED = Decimal("100")
FULL_PERCENT = Decimal("100.00")


@dataclass(frozen=True)
class AllocationKind:
    document_model: type[models.Model]
    installment_model: type[models.Model]
    target_field: str


ALLOCATION_KINDS: dict[str, AllocationKind] = {
    KIND_ACCOUNT: AllocationKind(
        DocumentAccountAllocation, InstallmentAccountAllocation, "account_id"
    ),
    KIND_COST_CENTER: AllocationKind(
        DocumentCostCenterAllocation, InstallmentCostCenterAllocation, "cost_center_id"
    ),
}


@dataclass(frozen=True)
class ResolvedInstallment:
    id: object
    value: Decimal


@dataclass
class DistributionResult:
    kind: str
    mode: str
    document_rows: list = field(default_factory=list)
    installment_rows: list = field(default_factory=list)


# Saved rows are used as-is; request items are matched to stored rows by title.
InstallmentRef = Union[Installment, InstallmentInput]


def proportional_share(*, allocation_value, document_total, installment_value) -> tuple[Decimal, Decimal]:
    """(share, percent) of one allocation entry carried by one installment."""
    total = to_decimal(document_total)
    inst_value = to_decimal(installment_value)

    if total <= 0:
        share = round2(0)
    else:
        share = round2(to_decimal(allocation_value) / total * inst_value)

    if inst_value <= 0:
        percent = round2(0)
    else:
        percent = round2(share / inst_value * HUNDRED)

    return share, percent


def _resolve_installments(
    document: PayableDocument,
    installments: Sequence[InstallmentRef],
    *,
    using: str,
) -> list[ResolvedInstallment]:
    resolved: list[ResolvedInstallment] = []
    for item in installments:
        if isinstance(item, Installment):
            resolved.append(ResolvedInstallment(item.id, to_decimal(item.installment_value)))
            continue

        installment_id = find_installment_id_by_title(document.id, item.title, using=using)
        if installment_id is None:
            logger.warning(
                "Installment not found by title, allocation rows skipped",
                extra={"document_id": str(document.id), "title": item.title},
            )
            continue
        resolved.append(ResolvedInstallment(installment_id, to_decimal(item.installment_value)))
    return resolved


def distribute_allocations(
    *,
    document: PayableDocument,
    total_value,
    installments: Sequence[InstallmentRef],
    allocations: Sequence[AllocationInput],
    scalar_target_id=None,
    kind: str,
    using: str = DEFAULT_DB_ALIAS,
) -> DistributionResult:
    try:
        tables = ALLOCATION_KINDS[kind]
    except KeyError as exc:
        raise ValueError(f"Unknown allocation kind: {kind}") from exc

    if allocations:
        result = DistributionResult(kind=kind, mode=MODE_EXPLICIT)
        resolved = _resolve_installments(document, installments, using=using)

        for entry in allocations:
            if not entry.target_id or to_decimal(entry.value) <= 0:
                continue

            target = {tables.target_field: entry.target_id}
            result.document_rows.append(
                tables.document_model(
                    document=document, value=entry.value, percent=entry.percent, **target
                )
            )
            for inst in resolved:
                share, percent = proportional_share(
                    allocation_value=entry.value,
                    document_total=total_value,
                    installment_value=inst.value,
                )
                result.installment_rows.append(
                    tables.installment_model(
                        document=document,
                        installment_id=inst.id,
                        value=share,
                        percent=percent,
                        **target,
                    )
                )

    elif scalar_target_id:
        result = DistributionResult(kind=kind, mode=MODE_FALLBACK)
        resolved = _resolve_installments(document, installments, using=using)
        target = {tables.target_field: scalar_target_id}

        result.document_rows.append(
            tables.document_model(
                document=document, value=round2(total_value), percent=FULL_PERCENT, **target
            )
        )
        for inst in resolved:
            result.installment_rows.append(
                tables.installment_model(
                    document=document,
                    installment_id=inst.id,
                    value=round2(inst.value),
                    percent=FULL_PERCENT,
                    **target,
                )
            )

    else:
        return DistributionResult(kind=kind, mode=MODE_NONE)

    if result.document_rows:
        tables.document_model.objects.using(using).bulk_create(result.document_rows)
    if result.installment_rows:
        tables.installment_model.objects.using(using).bulk_create(result.installment_rows)

    logger.debug(
        "Allocations distributed",
        extra={
            "document_id": str(document.id),
            "kind": kind,
            "mode": result.mode,
            "document_rows": len(result.document_rows),
            "installment_rows": len(result.installment_rows),
        },
    )
    return result
