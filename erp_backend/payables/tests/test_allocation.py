# payables/tests/test_allocation.py

from __future__ import annotations

from decimal import Decimal

from django.test import SimpleTestCase, TestCase

from payables.models import (
    DocumentAccountAllocation,
    DocumentCostCenterAllocation,
    InstallmentAccountAllocation,
    InstallmentCostCenterAllocation,
)
from payables.services.allocation import (
    KIND_ACCOUNT,
    KIND_COST_CENTER,
    MODE_EXPLICIT,
    MODE_FALLBACK,
    MODE_NONE,
    distribute_allocations,
    proportional_share,
)
from payables.services.inputs import AllocationInput
from payables.services.installment_store import create_installments
from payables.tests.factories import (
    allocation,
    installment,
    make_account,
    make_company,
    make_cost_center,
    make_counterparty,
    make_document,
)


class ProportionalShareTests(SimpleTestCase):
    def test_share_and_percent(self):
        share, percent = proportional_share(
            allocation_value=Decimal("700"),
            document_total=Decimal("1000"),
            installment_value=Decimal("600"),
        )
        self.assertEqual(share, Decimal("420.00"))
        self.assertEqual(percent, Decimal("70.00"))

    def test_zero_document_total_gives_zero_share(self):
        share, percent = proportional_share(
            allocation_value=Decimal("100"),
            document_total=Decimal("0"),
            installment_value=Decimal("50"),
        )
        self.assertEqual(share, Decimal("0.00"))
        self.assertEqual(percent, Decimal("0.00"))

    def test_zero_installment_value_gives_zero_percent(self):
        share, percent = proportional_share(
            allocation_value=Decimal("100"),
            document_total=Decimal("1000"),
            installment_value=None,
        )
        self.assertEqual(share, Decimal("0.00"))
        self.assertEqual(percent, Decimal("0.00"))


class DistributeAllocationsTests(TestCase):
    def setUp(self):
        self.company = make_company()
        self.counterparty = make_counterparty(self.company)
        self.document = make_document(self.company, self.counterparty, total_value="1000.00")
        self.t1 = make_account(self.company, code="4.1.01", name="Aluguel")
        self.t2 = make_account(self.company, code="4.1.02", name="Condomínio")
        self.installments = create_installments(
            self.document,
            [installment("1/2", "600.00"), installment("2/2", "400.00")],
        )

    def _rows(self, model=InstallmentAccountAllocation, target="account_id"):
        return {
            (getattr(row, target), row.installment_id): (row.value, row.percent)
            for row in model.objects.filter(document=self.document)
        }

    def test_single_full_allocation_copies_installment_values(self):
        result = distribute_allocations(
            document=self.document,
            total_value=Decimal("1000.00"),
            installments=self.installments,
            allocations=[allocation(self.t1, "1000.00", "100")],
            kind=KIND_ACCOUNT,
        )

        self.assertEqual(result.mode, MODE_EXPLICIT)
        first, second = self.installments
        self.assertEqual(
            self._rows(),
            {
                (self.t1.id, first.id): (Decimal("600.00"), Decimal("100.0000")),
                (self.t1.id, second.id): (Decimal("400.00"), Decimal("100.0000")),
            },
        )
        doc_row = DocumentAccountAllocation.objects.get(document=self.document)
        self.assertEqual(doc_row.value, Decimal("1000.00"))
        self.assertEqual(doc_row.percent, Decimal("100.0000"))

    def test_two_targets_split_every_installment(self):
        distribute_allocations(
            document=self.document,
            total_value=Decimal("1000.00"),
            installments=self.installments,
            allocations=[allocation(self.t1, "700.00"), allocation(self.t2, "300.00")],
            kind=KIND_ACCOUNT,
        )

        first, second = self.installments
        self.assertEqual(
            self._rows(),
            {
                (self.t1.id, first.id): (Decimal("420.00"), Decimal("70.0000")),
                (self.t2.id, first.id): (Decimal("180.00"), Decimal("30.0000")),
                (self.t1.id, second.id): (Decimal("280.00"), Decimal("70.0000")),
                (self.t2.id, second.id): (Decimal("120.00"), Decimal("30.0000")),
            },
        )
        self.assertEqual(DocumentAccountAllocation.objects.filter(document=self.document).count(), 2)
        # Caller percent is absent, so document rows keep it null.
        self.assertTrue(
            all(
                row.percent is None
                for row in DocumentAccountAllocation.objects.filter(document=self.document)
            )
        )

    def test_rounding_drift_is_not_corrected(self):
        document = make_document(self.company, self.counterparty, total_value="10.00", title="Drift")
        rows = create_installments(
            document,
            [installment("a", "3.33"), installment("b", "3.33"), installment("c", "3.34")],
        )

        distribute_allocations(
            document=document,
            total_value=Decimal("10.00"),
            installments=rows,
            allocations=[allocation(self.t1, "5.00"), allocation(self.t2, "5.00")],
            kind=KIND_ACCOUNT,
        )

        t1_rows = InstallmentAccountAllocation.objects.filter(document=document, account=self.t1)
        shares = sorted(r.value for r in t1_rows)
        self.assertEqual(shares, [Decimal("1.67")] * 3)
        total = sum(shares, Decimal("0"))
        self.assertEqual(total, Decimal("5.01"))
        self.assertLessEqual(abs(total - Decimal("5.00")), Decimal("0.03"))

        first_percent = t1_rows.get(installment=rows[0]).percent
        self.assertEqual(first_percent, Decimal("50.1500"))

    def test_invalid_entries_are_skipped_without_fallback(self):
        result = distribute_allocations(
            document=self.document,
            total_value=Decimal("1000.00"),
            installments=self.installments,
            allocations=[
                AllocationInput(target_id=None, value=Decimal("500.00")),
                allocation(self.t1, "0.00"),
                allocation(self.t2, "-10.00"),
            ],
            scalar_target_id=self.t1.id,
            kind=KIND_ACCOUNT,
        )

        self.assertEqual(result.mode, MODE_EXPLICIT)
        self.assertFalse(DocumentAccountAllocation.objects.filter(document=self.document).exists())
        self.assertFalse(InstallmentAccountAllocation.objects.filter(document=self.document).exists())

    def test_scalar_fallback_allocates_everything_to_one_target(self):
        center = make_cost_center(self.company)

        result = distribute_allocations(
            document=self.document,
            total_value=Decimal("1000.00"),
            installments=self.installments,
            allocations=[],
            scalar_target_id=center.id,
            kind=KIND_COST_CENTER,
        )

        self.assertEqual(result.mode, MODE_FALLBACK)
        doc_row = DocumentCostCenterAllocation.objects.get(document=self.document)
        self.assertEqual(doc_row.cost_center_id, center.id)
        self.assertEqual(doc_row.value, Decimal("1000.00"))
        self.assertEqual(doc_row.percent, Decimal("100.0000"))

        first, second = self.installments
        self.assertEqual(
            self._rows(InstallmentCostCenterAllocation, "cost_center_id"),
            {
                (center.id, first.id): (Decimal("600.00"), Decimal("100.0000")),
                (center.id, second.id): (Decimal("400.00"), Decimal("100.0000")),
            },
        )

    def test_nothing_is_written_without_allocations_or_scalar_target(self):
        result = distribute_allocations(
            document=self.document,
            total_value=Decimal("1000.00"),
            installments=self.installments,
            allocations=[],
            scalar_target_id=None,
            kind=KIND_ACCOUNT,
        )

        self.assertEqual(result.mode, MODE_NONE)
        self.assertFalse(DocumentAccountAllocation.objects.exists())
        self.assertFalse(InstallmentAccountAllocation.objects.exists())

    def test_zero_document_total_yields_zero_shares(self):
        result = distribute_allocations(
            document=self.document,
            total_value=Decimal("0"),
            installments=self.installments,
            allocations=[allocation(self.t1, "100.00")],
            kind=KIND_ACCOUNT,
        )

        self.assertEqual(len(result.installment_rows), 2)
        self.assertTrue(all(row.value == Decimal("0.00") for row in result.installment_rows))
        self.assertTrue(all(row.percent == Decimal("0.00") for row in result.installment_rows))

    def test_unresolved_installments_are_looked_up_by_title(self):
        result = distribute_allocations(
            document=self.document,
            total_value=Decimal("1000.00"),
            installments=[installment("2/2", "400.00"), installment("9/9", "1.00")],
            allocations=[allocation(self.t1, "1000.00", "100")],
            kind=KIND_ACCOUNT,
        )

        self.assertEqual(len(result.installment_rows), 1)
        row = InstallmentAccountAllocation.objects.get(document=self.document)
        self.assertEqual(row.installment_id, self.installments[1].id)
        self.assertEqual(row.value, Decimal("400.00"))

    def test_unknown_kind_is_rejected(self):
        with self.assertRaises(ValueError):
            distribute_allocations(
                document=self.document,
                total_value=Decimal("1000.00"),
                installments=self.installments,
                allocations=[],
                kind="project",
            )
