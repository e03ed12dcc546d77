# banking/management/commands/recompute_balances.py

from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError
from django.db import DEFAULT_DB_ALIAS

from banking.services.balance_service import (
    recompute_account_balances,
    recompute_all_balances,
)
from banking.services.exceptions import BankAccountNotFoundError


class Command(BaseCommand):
    help = "Recompute running balances of one bank account (--account) or of every active account."

    def add_arguments(self, parser):
        parser.add_argument("--account", dest="account_id", default=None)
        parser.add_argument("--database", default=DEFAULT_DB_ALIAS)

    def handle(self, *args, **options):
        account_id = options.get("account_id")
        using = options["database"]

        if account_id:
            try:
                balance = recompute_account_balances(account_id=account_id, using=using)
            except BankAccountNotFoundError as exc:
                raise CommandError(str(exc)) from exc
            self.stdout.write(self.style.SUCCESS(f"{account_id}: {balance}"))
            return

        results = recompute_all_balances(using=using)
        for acc_id, balance in results.items():
            self.stdout.write(f"{acc_id}: {balance}")
        self.stdout.write(self.style.SUCCESS(f"Recomputed {len(results)} account(s)."))
