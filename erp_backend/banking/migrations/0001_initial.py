# banking/migrations/0001_initial.py

"""
Bank accounts and ledger movements.

Includes the movement origin guard: a partial unique index on
(origin_screen, origin_installment_id) WHERE origin_installment_id IS NOT NULL.
"""

import uuid
from decimal import Decimal

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("companies", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="BankAccount",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("description", models.CharField(max_length=150)),
                ("bank_name", models.CharField(blank=True, default="", max_length=100)),
                ("agency_number", models.CharField(blank=True, default="", max_length=20)),
                ("account_number", models.CharField(blank=True, default="", max_length=30)),
                (
                    "opening_balance",
                    models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14),
                ),
                (
                    "current_balance",
                    models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14),
                ),
                ("balance_updated_at", models.DateTimeField(blank=True, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bank_accounts",
                        to="companies.company",
                    ),
                ),
            ],
            options={
                "ordering": ["description"],
                "indexes": [
                    models.Index(
                        fields=["company", "is_active"], name="bank_acc_company_active_idx"
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="LedgerMovement",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "direction",
                    models.CharField(
                        choices=[("entrada", "Inflow"), ("saida", "Outflow")],
                        max_length=10,
                    ),
                ),
                (
                    "amount",
                    models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14),
                ),
                ("description", models.CharField(max_length=255)),
                ("detailed_description", models.TextField(blank=True, default="")),
                ("movement_date", models.DateTimeField()),
                (
                    "balance_before",
                    models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14),
                ),
                (
                    "balance_after",
                    models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("pendente", "Pending"), ("pago", "Paid")],
                        default="pago",
                        max_length=10,
                    ),
                ),
                ("origin_id", models.UUIDField(blank=True, null=True)),
                ("origin_screen", models.CharField(blank=True, default="", max_length=64)),
                ("origin_installment_id", models.UUIDField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="movements",
                        to="banking.bankaccount",
                    ),
                ),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="ledger_movements_created",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["movement_date", "created_at"],
                "indexes": [
                    models.Index(
                        fields=["account", "movement_date"], name="bank_mov_account_date_idx"
                    ),
                    models.Index(fields=["origin_id"], name="bank_mov_origin_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("origin_installment_id__isnull", False)),
                        fields=("origin_screen", "origin_installment_id"),
                        name="uniq_movement_origin_installment",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("amount__gte", Decimal("0.00"))),
                        name="ledger_movement_amount_nonnegative",
                    ),
                ],
            },
        ),
    ]
