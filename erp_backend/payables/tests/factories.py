# payables/tests/factories.py

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal

from accounting.models import Account, CostCenter
from banking.models import BankAccount
from companies.models import Company
from payables.models import Counterparty, PayableDocument
from payables.services.inputs import (
    AllocationInput,
    InstallmentInput,
    PayableHeader,
    PayableInput,
)


def make_company(name="Empresa Teste"):
    return Company.objects.create(name=name, code=f"CO-{uuid.uuid4().hex[:6].upper()}")


def make_counterparty(company, legal_name="Fornecedor Ltda", trade_name=""):
    return Counterparty.objects.create(
        company=company, legal_name=legal_name, trade_name=trade_name
    )


def make_account(company, code="4.1.01", name="Despesas gerais"):
    return Account.objects.create(company=company, code=code, name=name)


def make_cost_center(company, code="CC-01", name="Administrativo"):
    return CostCenter.objects.create(company=company, code=code, name=name)


def make_bank_account(company, description="Conta Principal", opening_balance="0.00"):
    return BankAccount.objects.create(
        company=company,
        description=description,
        opening_balance=Decimal(opening_balance),
    )


def make_document(company, counterparty, total_value="1000.00", title="Aluguel"):
    return PayableDocument.objects.create(
        company=company,
        counterparty=counterparty,
        title=title,
        total_value=Decimal(total_value),
        issue_date=date(2025, 1, 10),
    )


def header_for(company, counterparty, **overrides):
    values = {
        "title": "Aluguel",
        "counterparty_id": counterparty.id,
        "total_value": Decimal("1000.00"),
        "issue_date": date(2025, 1, 10),
        "company_id": company.id,
    }
    values.update(overrides)
    return PayableHeader(**values)


def installment(title, value, **overrides):
    values = {"title": title, "installment_value": Decimal(value)}
    values.update(overrides)
    return InstallmentInput(**values)


def allocation(target, value, percent=None):
    return AllocationInput(
        target_id=target.id,
        value=Decimal(value),
        percent=Decimal(percent) if percent is not None else None,
    )


def payable_input(header, installments=(), accounts=(), cost_centers=()):
    return PayableInput(
        header=header,
        installments=tuple(installments),
        account_allocations=tuple(accounts),
        cost_center_allocations=tuple(cost_centers),
    )
