# history/tests/test_history.py

import uuid
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.test import TestCase

from companies.models import Company
from history.models import HistoryEntry
from history.services import log_history

User = get_user_model()


class LogHistoryTests(TestCase):
    def setUp(self):
        self.company = Company.objects.create(name="Empresa Teste")
        self.user = User.objects.create_user(username="auditor", password="pass1234")

    def test_entry_is_recorded_with_json_safe_metadata(self):
        entity_id = uuid.uuid4()

        entry = log_history(
            company_id=self.company.id,
            action="create",
            entity="contas_pagar",
            entity_id=entity_id,
            description="Criado",
            metadata={"valorTotal": Decimal("10.50"), "ref": entity_id},
            user=self.user,
        )

        entry.refresh_from_db()
        self.assertEqual(entry.entity_id, str(entity_id))
        self.assertEqual(entry.user, self.user)
        self.assertEqual(entry.metadata, {"valorTotal": "10.50", "ref": str(entity_id)})

    def test_anonymous_user_is_not_stored(self):
        entry = log_history(action="create", entity="contas_pagar", user=AnonymousUser())
        self.assertIsNone(entry.user)
        self.assertEqual(entry.metadata, {})

    def test_entries_are_immutable(self):
        entry = log_history(action="create", entity="contas_pagar")

        entry.description = "alterado"
        with self.assertRaises(RuntimeError):
            entry.save()
        with self.assertRaises(RuntimeError):
            entry.delete()
        self.assertEqual(HistoryEntry.objects.count(), 1)
