# payables/tests/test_installment_store.py

from __future__ import annotations

import uuid
from decimal import Decimal

from django.test import TestCase

from payables.models import Installment, PayableDocument
from payables.services.exceptions import PayableValidationError
from payables.services.installment_store import (
    create_document,
    create_installments,
    find_installment_id_by_title,
    validate_header,
)
from payables.tests.factories import (
    header_for,
    installment,
    make_company,
    make_counterparty,
)


class CreateDocumentTests(TestCase):
    def setUp(self):
        self.company = make_company()
        self.counterparty = make_counterparty(self.company)

    def test_document_is_persisted_with_header_values(self):
        document = create_document(
            header_for(self.company, self.counterparty, notes="contrato 12", period="2025-01")
        )

        document.refresh_from_db()
        self.assertEqual(document.title, "Aluguel")
        self.assertEqual(document.total_value, Decimal("1000.00"))
        self.assertEqual(document.notes, "contrato 12")
        self.assertEqual(document.period, "2025-01")
        self.assertEqual(document.status, PayableDocument.STATUS_PENDING)

    def test_missing_required_fields_are_reported_together(self):
        with self.assertRaises(PayableValidationError) as ctx:
            create_document(
                header_for(self.company, self.counterparty, title="  ", issue_date=None)
            )

        self.assertIn("title", ctx.exception.errors)
        self.assertIn("issue_date", ctx.exception.errors)
        self.assertEqual(PayableDocument.objects.count(), 0)

    def test_zero_total_counts_as_missing(self):
        with self.assertRaises(PayableValidationError) as ctx:
            create_document(
                header_for(self.company, self.counterparty, total_value=Decimal("0"))
            )
        self.assertIn("total_value", ctx.exception.errors)

    def test_counterparty_of_another_company_is_rejected(self):
        other = make_company(name="Outra Empresa")
        foreign = make_counterparty(other, legal_name="Fornecedor Externo")

        with self.assertRaises(PayableValidationError) as ctx:
            validate_header(header_for(self.company, foreign))
        self.assertIn("counterparty_id", ctx.exception.errors)

    def test_unknown_counterparty_is_rejected(self):
        with self.assertRaises(PayableValidationError):
            validate_header(
                header_for(self.company, self.counterparty, counterparty_id=uuid.uuid4())
            )


class InstallmentPersistenceTests(TestCase):
    def setUp(self):
        self.company = make_company()
        self.counterparty = make_counterparty(self.company)
        self.document = create_document(header_for(self.company, self.counterparty))

    def test_installments_are_saved_in_caller_order(self):
        rows = create_installments(
            self.document,
            [installment("1/2", "600.00"), installment("2/2", "400.00")],
        )

        self.assertEqual([r.sequence for r in rows], [0, 1])
        stored = list(self.document.installments.values_list("title", "installment_value"))
        self.assertEqual(stored, [("1/2", Decimal("600.00")), ("2/2", Decimal("400.00"))])

    def test_optional_fields_are_stored_as_null(self):
        (row,) = create_installments(self.document, [installment("única", "1000.00")])

        row.refresh_from_db()
        self.assertIsNone(row.total_value)
        self.assertIsNone(row.due_date)
        self.assertIsNone(row.bank_account_id)
        self.assertEqual(row.status, Installment.STATUS_PENDING)

    def test_lookup_by_title(self):
        rows = create_installments(
            self.document,
            [installment("1/2", "600.00"), installment("2/2", "400.00")],
        )

        self.assertEqual(find_installment_id_by_title(self.document.id, "2/2"), rows[1].id)
        self.assertIsNone(find_installment_id_by_title(self.document.id, "3/2"))

    def test_duplicate_titles_resolve_to_the_first(self):
        rows = create_installments(
            self.document,
            [installment("parcela", "500.00"), installment("parcela", "500.00")],
        )

        self.assertEqual(find_installment_id_by_title(self.document.id, "parcela"), rows[0].id)
