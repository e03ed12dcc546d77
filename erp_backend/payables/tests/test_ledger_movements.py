# payables/tests/test_ledger_movements.py

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.test import TestCase
from django.utils import timezone

from banking.models import LedgerMovement
from banking.services.movement_service import MovementOutcome
from history.models import HistoryEntry
from payables.models import Installment
from payables.services.installment_store import create_installments
from payables.services.ledger_movements import (
    MOVEMENT_DESCRIPTION,
    ORIGIN_SCREEN,
    synthesize_paid_installment_movements,
)
from payables.tests.factories import (
    installment,
    make_bank_account,
    make_company,
    make_counterparty,
    make_document,
)


class PaidInstallmentMovementTests(TestCase):
    def setUp(self):
        self.company = make_company()
        self.counterparty = make_counterparty(self.company, legal_name="Imobiliária Central")
        self.bank = make_bank_account(self.company, opening_balance="2000.00")
        self.document = make_document(self.company, self.counterparty, total_value="500.00")

    def _paid(self, title="1/1", value="500.00", **overrides):
        values = {
            "status": Installment.STATUS_PAID,
            "bank_account_id": self.bank.id,
            "payment_date": date(2025, 2, 5),
        }
        values.update(overrides)
        return installment(title, value, **values)

    def test_paid_installment_creates_one_outflow(self):
        (row,) = create_installments(self.document, [self._paid()])

        report = synthesize_paid_installment_movements(document=self.document)

        self.assertEqual(report.created_count, 1)
        movement = LedgerMovement.objects.get(origin_installment_id=row.id)
        self.assertEqual(movement.amount, Decimal("500.00"))
        self.assertEqual(movement.direction, LedgerMovement.DIRECTION_OUT)
        self.assertEqual(movement.status, LedgerMovement.STATUS_PAID)
        self.assertEqual(movement.origin_screen, ORIGIN_SCREEN)
        self.assertEqual(movement.origin_id, self.document.id)
        self.assertEqual(movement.description, MOVEMENT_DESCRIPTION)
        self.assertEqual(
            movement.detailed_description,
            'pagamento titulo "1/1" de "Imobiliária Central"',
        )
        self.assertEqual(timezone.localtime(movement.movement_date).date(), date(2025, 2, 5))

    def test_running_again_never_duplicates_the_movement(self):
        create_installments(self.document, [self._paid()])

        synthesize_paid_installment_movements(document=self.document)
        report = synthesize_paid_installment_movements(document=self.document)

        self.assertEqual(report.created_count, 0)
        self.assertEqual(list(report.skipped.values()), [MovementOutcome.SKIPPED_CONFLICT])
        movements = LedgerMovement.objects.filter(origin_screen=ORIGIN_SCREEN)
        self.assertEqual(movements.count(), 1)
        self.assertEqual(movements.get().amount, Decimal("500.00"))

        self.bank.refresh_from_db()
        self.assertEqual(self.bank.current_balance, Decimal("1500.00"))

    def test_paid_installment_without_bank_account_is_skipped(self):
        (row,) = create_installments(self.document, [self._paid(bank_account_id=None)])

        report = synthesize_paid_installment_movements(document=self.document)

        self.assertEqual(report.skipped, {str(row.id): MovementOutcome.SKIPPED_NO_ACCOUNT})
        self.assertFalse(LedgerMovement.objects.exists())
        self.assertFalse(HistoryEntry.objects.filter(action="parcela_paga").exists())

    def test_pending_installments_are_ignored(self):
        create_installments(
            self.document,
            [installment("1/1", "500.00", bank_account_id=self.bank.id)],
        )

        report = synthesize_paid_installment_movements(document=self.document)

        self.assertEqual(report.created_count, 0)
        self.assertFalse(LedgerMovement.objects.exists())

    def test_value_prefers_installment_total(self):
        (row,) = create_installments(
            self.document, [self._paid(value="500.00", total_value=Decimal("512.35"))]
        )

        synthesize_paid_installment_movements(document=self.document)

        movement = LedgerMovement.objects.get(origin_installment_id=row.id)
        self.assertEqual(movement.amount, Decimal("512.35"))

    def test_clearing_date_wins_over_payment_date(self):
        (row,) = create_installments(
            self.document, [self._paid(clearing_date=date(2025, 2, 7))]
        )

        synthesize_paid_installment_movements(document=self.document)

        movement = LedgerMovement.objects.get(origin_installment_id=row.id)
        self.assertEqual(timezone.localtime(movement.movement_date).date(), date(2025, 2, 7))

    def test_missing_dates_fall_back_to_now(self):
        before = timezone.now()
        (row,) = create_installments(self.document, [self._paid(payment_date=None)])

        synthesize_paid_installment_movements(document=self.document)

        movement = LedgerMovement.objects.get(origin_installment_id=row.id)
        self.assertGreaterEqual(movement.movement_date, before)

    def test_balances_follow_the_timeline(self):
        create_installments(
            self.document,
            [
                self._paid(title="2/2", value="200.00", payment_date=date(2025, 3, 5)),
                self._paid(title="1/2", value="300.00", payment_date=date(2025, 2, 5)),
            ],
        )

        synthesize_paid_installment_movements(document=self.document)

        movements = list(
            LedgerMovement.objects.filter(account=self.bank).order_by("movement_date")
        )
        self.assertEqual(
            [(m.balance_before, m.balance_after) for m in movements],
            [
                (Decimal("2000.00"), Decimal("1700.00")),
                (Decimal("1700.00"), Decimal("1500.00")),
            ],
        )
        self.bank.refresh_from_db()
        self.assertEqual(self.bank.current_balance, Decimal("1500.00"))

    def test_history_entry_is_written_per_created_movement(self):
        (row,) = create_installments(self.document, [self._paid()])

        synthesize_paid_installment_movements(document=self.document)
        synthesize_paid_installment_movements(document=self.document)

        entries = HistoryEntry.objects.filter(action="parcela_paga")
        self.assertEqual(entries.count(), 1)
        entry = entries.get()
        self.assertEqual(entry.entity, "parcela_contas_pagar")
        self.assertEqual(entry.entity_id, str(row.id))
        self.assertEqual(entry.description, 'Parcela paga: "1/1" (valor 500.00)')
        self.assertEqual(entry.metadata, {"conta_pagar_id": str(self.document.id)})

    def test_summary_is_logged_at_info_level(self):
        create_installments(self.document, [self._paid(), self._paid(title="2/2", bank_account_id=None)])

        with self.assertLogs("payables", level="INFO") as logs:
            report = synthesize_paid_installment_movements(document=self.document)

        self.assertEqual(report.created_count, 1)
        summary = logs.records[-1]
        self.assertEqual(summary.movements_created, 1)
        self.assertEqual(summary.movements_skipped, 1)
        self.assertEqual(LedgerMovement.objects.count(), 1)
