# payables/services/installment_store.py

"""
======================================================
PATH: payables/services/installment_store.py
======================================================
DOCUMENT + INSTALLMENT PERSISTENCE

Plain writes used inside the creation transaction. No derived values are
computed here: what the caller sent is what gets stored.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Sequence

from django.db import DEFAULT_DB_ALIAS

from accounting.models import Account, CostCenter
from banking.models import BankAccount
from payables.models import Counterparty, Installment, PayableDocument
from payables.services.exceptions import PayableValidationError
from payables.services.inputs import InstallmentInput, PayableHeader, PayableInput

logger = logging.getLogger("payables")


def _missing_header_fields(header: PayableHeader) -> dict[str, str]:
    errors: dict[str, str] = {}

    if not (header.title or "").strip():
        errors["title"] = "This field is required."
    # A zero total is treated as absent.
    if header.total_value is None or header.total_value == 0:
        errors["total_value"] = "This field is required."
    elif header.total_value < Decimal("0"):
        errors["total_value"] = "Must not be negative."
    if header.issue_date is None:
        errors["issue_date"] = "This field is required."
    if header.company_id is None:
        errors["company_id"] = "This field is required."
    if header.counterparty_id is None:
        errors["counterparty_id"] = "This field is required."

    return errors


def validate_header(header: PayableHeader, *, using: str = DEFAULT_DB_ALIAS) -> None:
    """
    Check required header fields and that the counterparty belongs to the
    company. Raises PayableValidationError; never writes.
    """
    errors = _missing_header_fields(header)
    if errors:
        raise PayableValidationError(errors)

    counterparty_ok = (
        Counterparty.objects.using(using)
        .filter(pk=header.counterparty_id, company_id=header.company_id)
        .exists()
    )
    if not counterparty_ok:
        raise PayableValidationError(
            {"counterparty_id": "Counterparty not found for this company."}
        )


def _ids_outside_company(model, ids, *, company_id, using: str) -> list[str]:
    wanted = {value for value in ids if value}
    if not wanted:
        return []
    owned = set(
        model.objects.using(using)
        .filter(pk__in=wanted, company_id=company_id)
        .values_list("id", flat=True)
    )
    return sorted(str(value) for value in wanted - owned)


def validate_payable(payload: PayableInput, *, using: str = DEFAULT_DB_ALIAS) -> None:
    """
    validate_header plus company ownership of every referenced bank account,
    chart-of-accounts entry and cost center. Unknown ids fail the same way
    as ids of another company.
    """
    header = payload.header
    validate_header(header, using=using)

    references = {
        "installments": (
            BankAccount,
            [item.bank_account_id for item in payload.installments],
        ),
        "chart_of_account_id": (Account, [header.chart_of_account_id]),
        "account_allocations": (
            Account,
            [entry.target_id for entry in payload.account_allocations],
        ),
        "cost_center_id": (CostCenter, [header.cost_center_id]),
        "cost_center_allocations": (
            CostCenter,
            [entry.target_id for entry in payload.cost_center_allocations],
        ),
    }

    errors: dict[str, str] = {}
    for field_name, (model, ids) in references.items():
        foreign = _ids_outside_company(model, ids, company_id=header.company_id, using=using)
        if foreign:
            errors[field_name] = (
                f"{model._meta.verbose_name.capitalize()} not found for this company: "
                + ", ".join(foreign)
            )

    if errors:
        raise PayableValidationError(errors)


def create_document(
    header: PayableHeader,
    *,
    created_by=None,
    using: str = DEFAULT_DB_ALIAS,
) -> PayableDocument:
    errors = _missing_header_fields(header)
    if errors:
        raise PayableValidationError(errors)

    document = PayableDocument(
        company_id=header.company_id,
        counterparty_id=header.counterparty_id,
        title=header.title,
        total_value=header.total_value,
        chart_of_account_id=header.chart_of_account_id,
        cost_center_id=header.cost_center_id,
        issue_date=header.issue_date,
        settlement_date=header.settlement_date,
        period=header.period or "",
        origin=header.origin or "",
        notes=header.notes or "",
        status=header.status or PayableDocument.STATUS_PENDING,
        installment_plan_id=header.installment_plan_id,
        created_by=created_by,
    )
    document.save(using=using)

    logger.debug(
        "Payable document inserted",
        extra={"document_id": str(document.id), "company_id": str(header.company_id)},
    )
    return document


def create_installments(
    document: PayableDocument,
    installments: Sequence[InstallmentInput],
    *,
    using: str = DEFAULT_DB_ALIAS,
) -> list[Installment]:
    """
    Insert installments in caller order. Returns the saved rows, so callers
    can reference them directly instead of looking them up by title.
    """
    rows = [
        Installment(
            document=document,
            sequence=index,
            title=item.title or "",
            due_date=item.due_date,
            payment_date=item.payment_date,
            clearing_date=item.clearing_date,
            installment_value=item.installment_value,
            difference=item.difference,
            total_value=item.total_value,
            status=item.status or Installment.STATUS_PENDING,
            payment_method_id=item.payment_method_id,
            bank_account_id=item.bank_account_id,
        )
        for index, item in enumerate(installments)
    ]
    for row in rows:
        row.save(using=using)
    return rows


def find_installment_id_by_title(document_id, title: str, *, using: str = DEFAULT_DB_ALIAS):
    """
    Id of the first installment (caller order) of `document_id` titled `title`,
    or None. Titles are not unique; duplicates resolve to the first.
    """
    return (
        Installment.objects.using(using)
        .filter(document_id=document_id, title=title or "")
        .order_by("sequence", "created_at")
        .values_list("id", flat=True)
        .first()
    )
