# banking/tests/test_movements.py

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from unittest import mock

from django.db import IntegrityError
from django.test import TestCase
from django.utils import timezone

from banking.models import BankAccount, LedgerMovement
from banking.services import movement_service
from banking.services.balance_service import recompute_account_balances, recompute_all_balances
from banking.services.exceptions import BankAccountNotFoundError
from banking.services.movement_service import MovementOutcome, record_origin_movement
from companies.models import Company


def _at(day: int):
    return timezone.make_aware(datetime(2025, 1, day))


class RecordOriginMovementTests(TestCase):
    def setUp(self):
        self.company = Company.objects.create(name="Empresa Teste")
        self.account = BankAccount.objects.create(
            company=self.company,
            description="Conta Principal",
            opening_balance=Decimal("100.00"),
        )
        self.installment_id = uuid.uuid4()

    def _record(self, **overrides):
        values = {
            "account_id": self.account.id,
            "direction": LedgerMovement.DIRECTION_OUT,
            "amount": Decimal("40.00"),
            "description": "Pagamento",
            "movement_date": _at(5),
            "origin_screen": "contas_pagar_parcelas",
            "origin_installment_id": self.installment_id,
        }
        values.update(overrides)
        return record_origin_movement(**values)

    def test_first_insert_is_created(self):
        result = self._record()

        self.assertTrue(result.created)
        self.assertEqual(result.outcome, MovementOutcome.CREATED)
        self.assertEqual(result.movement.balance_before, Decimal("0.00"))
        self.assertEqual(LedgerMovement.objects.count(), 1)

    def test_same_origin_is_skipped(self):
        self._record()
        result = self._record(amount=Decimal("99.00"))

        self.assertFalse(result.created)
        self.assertEqual(result.outcome, MovementOutcome.SKIPPED_CONFLICT)
        self.assertEqual(LedgerMovement.objects.get().amount, Decimal("40.00"))

    def test_same_installment_on_another_screen_is_allowed(self):
        self._record()
        result = self._record(origin_screen="contas_receber_parcelas")

        self.assertTrue(result.created)
        self.assertEqual(LedgerMovement.objects.count(), 2)

    def test_movements_without_installment_are_never_deduplicated(self):
        self._record(origin_installment_id=None)
        self._record(origin_installment_id=None)

        self.assertEqual(LedgerMovement.objects.count(), 2)

    def test_lost_race_is_reported_as_conflict(self):
        # The pre-check misses the concurrent row; the unique index catches it.
        self._record()
        with mock.patch.object(movement_service, "_origin_exists", side_effect=[False, True]):
            result = self._record()

        self.assertEqual(result.outcome, MovementOutcome.SKIPPED_CONFLICT)
        self.assertEqual(LedgerMovement.objects.count(), 1)

    def test_unrelated_integrity_errors_propagate(self):
        with self.assertRaises(IntegrityError):
            self._record(amount=Decimal("-1.00"))


class BalanceRecomputeTests(TestCase):
    def setUp(self):
        self.company = Company.objects.create(name="Empresa Teste")
        self.account = BankAccount.objects.create(
            company=self.company,
            description="Conta Principal",
            opening_balance=Decimal("100.00"),
        )

    def _movement(self, day, direction, amount, status=LedgerMovement.STATUS_PAID):
        return LedgerMovement.objects.create(
            account=self.account,
            direction=direction,
            amount=Decimal(amount),
            description="Movimento",
            movement_date=_at(day),
            status=status,
        )

    def test_running_balance_in_timeline_order(self):
        late = self._movement(20, LedgerMovement.DIRECTION_OUT, "30.00")
        early = self._movement(2, LedgerMovement.DIRECTION_IN, "50.00")

        current = recompute_account_balances(account_id=self.account.id)

        self.assertEqual(current, Decimal("120.00"))
        early.refresh_from_db()
        late.refresh_from_db()
        self.assertEqual((early.balance_before, early.balance_after), (Decimal("100.00"), Decimal("150.00")))
        self.assertEqual((late.balance_before, late.balance_after), (Decimal("150.00"), Decimal("120.00")))

        self.account.refresh_from_db()
        self.assertEqual(self.account.current_balance, Decimal("120.00"))
        self.assertIsNotNone(self.account.balance_updated_at)

    def test_pending_movements_do_not_move_the_balance(self):
        pending = self._movement(3, LedgerMovement.DIRECTION_OUT, "80.00", LedgerMovement.STATUS_PENDING)

        current = recompute_account_balances(account_id=self.account.id)

        self.assertEqual(current, Decimal("100.00"))
        pending.refresh_from_db()
        self.assertEqual(pending.balance_after, pending.balance_before)

    def test_unknown_account_raises(self):
        with self.assertRaises(BankAccountNotFoundError):
            recompute_account_balances(account_id=uuid.uuid4())

    def test_recompute_all_covers_active_accounts(self):
        other = BankAccount.objects.create(
            company=self.company, description="Caixa", opening_balance=Decimal("10.00")
        )
        self._movement(4, LedgerMovement.DIRECTION_OUT, "25.00")

        results = recompute_all_balances()

        self.assertEqual(
            results,
            {str(self.account.id): Decimal("75.00"), str(other.id): Decimal("10.00")},
        )
