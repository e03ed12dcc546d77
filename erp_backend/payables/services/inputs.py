# payables/services/inputs.py

"""
Typed request payload for the payable creation flow.

Built by payables.api.serializers from the wire format; services only ever
see these dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from uuid import UUID


@dataclass(frozen=True)
class PayableHeader:
    title: str | None = None
    counterparty_id: UUID | None = None
    total_value: Decimal | None = None
    issue_date: date | None = None
    company_id: UUID | None = None

    chart_of_account_id: UUID | None = None
    cost_center_id: UUID | None = None
    settlement_date: date | None = None
    period: str = ""
    origin: str = ""
    notes: str = ""
    status: str = "PENDENTE"
    installment_plan_id: UUID | None = None


@dataclass(frozen=True)
class InstallmentInput:
    title: str = ""
    due_date: date | None = None
    payment_date: date | None = None
    clearing_date: date | None = None
    installment_value: Decimal | None = None
    difference: Decimal | None = None
    total_value: Decimal | None = None
    status: str = "pendente"
    payment_method_id: UUID | None = None
    bank_account_id: UUID | None = None


@dataclass(frozen=True)
class AllocationInput:
    # Account id or cost center id, depending on the list it belongs to.
    target_id: UUID | None = None
    value: Decimal | None = None
    percent: Decimal | None = None


@dataclass(frozen=True)
class PayableInput:
    header: PayableHeader
    installments: tuple[InstallmentInput, ...] = field(default_factory=tuple)
    account_allocations: tuple[AllocationInput, ...] = field(default_factory=tuple)
    cost_center_allocations: tuple[AllocationInput, ...] = field(default_factory=tuple)
