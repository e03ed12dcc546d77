# banking/services/balance_service.py

"""
RUNNING BALANCE SERVICE

Recomputes balance_before / balance_after for every movement of a bank
account, in timeline order, and the account's current_balance.

RULES:
- Start from BankAccount.opening_balance
- Timeline order: movement_date, then created_at, then id
- Only settled ("pago") movements move the balance; pending rows carry
  balance_after == balance_before
- entrada adds, saida subtracts
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal

from django.db import DEFAULT_DB_ALIAS, transaction
from django.utils import timezone

from banking.models.bank_account import BankAccount
from banking.models.ledger_movement import LedgerMovement
from banking.services.exceptions import BankAccountNotFoundError

logger = logging.getLogger("banking")

TWOPLACES = Decimal("0.01")


def _q2(v) -> Decimal:
    return Decimal(str(v or "0.00")).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def recompute_account_balances(*, account_id, using: str = DEFAULT_DB_ALIAS) -> Decimal:
    """
    Rewrite the running balances of one account. Returns the new current balance.
    """
    with transaction.atomic(using=using):
        try:
            account = (
                BankAccount.objects.using(using).select_for_update().get(pk=account_id)
            )
        except BankAccount.DoesNotExist as exc:
            raise BankAccountNotFoundError(f"Bank account not found: {account_id}") from exc

        movements = list(
            LedgerMovement.objects.using(using)
            .filter(account=account)
            .order_by("movement_date", "created_at", "id")
        )

        running = _q2(account.opening_balance)
        for movement in movements:
            movement.balance_before = running
            running = _q2(running + movement.signed_amount)
            movement.balance_after = running

        if movements:
            LedgerMovement.objects.using(using).bulk_update(
                movements, ["balance_before", "balance_after"]
            )

        account.current_balance = running
        account.balance_updated_at = timezone.now()
        account.save(
            using=using,
            update_fields=["current_balance", "balance_updated_at", "updated_at"],
        )

    logger.debug(
        "Account balances recomputed",
        extra={
            "account_id": str(account_id),
            "movements": len(movements),
            "current_balance": str(running),
        },
    )
    return running


def recompute_all_balances(*, using: str = DEFAULT_DB_ALIAS) -> dict[str, Decimal]:
    results: dict[str, Decimal] = {}
    account_ids = (
        BankAccount.objects.using(using)
        .filter(is_active=True)
        .order_by("description")
        .values_list("id", flat=True)
    )
    for account_id in account_ids:
        results[str(account_id)] = recompute_account_balances(
            account_id=account_id, using=using
        )
    return results
