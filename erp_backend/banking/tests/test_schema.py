# banking/tests/test_schema.py

from django.db import connection
from django.test import TestCase

from banking.models.ledger_movement import ORIGIN_GUARD_NAME
from banking.services.exceptions import SchemaPrerequisiteError
from banking.services.schema import clear_schema_cache, ensure_core_schema


class EnsureCoreSchemaTests(TestCase):
    def setUp(self):
        clear_schema_cache()

    def tearDown(self):
        clear_schema_cache()

    def test_migrated_database_passes(self):
        ensure_core_schema()
        # Cached: a second call does not introspect again.
        ensure_core_schema()

    def test_missing_origin_guard_is_reported(self):
        with connection.cursor() as cursor:
            cursor.execute(f"DROP INDEX {ORIGIN_GUARD_NAME}")

        with self.assertRaises(SchemaPrerequisiteError) as ctx:
            ensure_core_schema()

        self.assertIn(ORIGIN_GUARD_NAME, str(ctx.exception))
