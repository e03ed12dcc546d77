# payables/migrations/0001_initial.py

import uuid
from decimal import Decimal

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


def _uuid_pk():
    return (
        "id",
        models.UUIDField(
            default=uuid.uuid4,
            editable=False,
            primary_key=True,
            serialize=False,
        ),
    )


def _allocation_fields():
    return [
        _uuid_pk(),
        ("value", models.DecimalField(decimal_places=2, max_digits=14)),
        (
            "percent",
            models.DecimalField(blank=True, decimal_places=4, max_digits=9, null=True),
        ),
        ("created_at", models.DateTimeField(auto_now_add=True)),
    ]


def _document_fk(related_name):
    return (
        "document",
        models.ForeignKey(
            on_delete=django.db.models.deletion.CASCADE,
            related_name=related_name,
            to="payables.payabledocument",
        ),
    )


def _installment_fk(related_name):
    return (
        "installment",
        models.ForeignKey(
            on_delete=django.db.models.deletion.CASCADE,
            related_name=related_name,
            to="payables.installment",
        ),
    )


def _target_fk(name, to, related_name):
    return (
        name,
        models.ForeignKey(
            on_delete=django.db.models.deletion.PROTECT,
            related_name=related_name,
            to=to,
        ),
    )


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("companies", "0001_initial"),
        ("accounting", "0001_initial"),
        ("banking", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Counterparty",
            fields=[
                _uuid_pk(),
                ("legal_name", models.CharField(blank=True, default="", max_length=255)),
                ("trade_name", models.CharField(blank=True, default="", max_length=255)),
                ("tax_id", models.CharField(blank=True, default="", max_length=20)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="counterparties",
                        to="companies.company",
                    ),
                ),
            ],
            options={
                "ordering": ["legal_name", "trade_name"],
                "verbose_name_plural": "Counterparties",
                "indexes": [
                    models.Index(
                        fields=["company", "legal_name"], name="cp_company_legal_name_idx"
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="PayableDocument",
            fields=[
                _uuid_pk(),
                ("title", models.CharField(max_length=255)),
                ("total_value", models.DecimalField(decimal_places=2, max_digits=14)),
                ("issue_date", models.DateField()),
                ("settlement_date", models.DateField(blank=True, null=True)),
                ("period", models.CharField(blank=True, default="", max_length=20)),
                ("origin", models.CharField(blank=True, default="", max_length=100)),
                ("notes", models.TextField(blank=True, default="")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("PENDENTE", "Pending"),
                            ("PARCIAL", "Partially paid"),
                            ("QUITADO", "Settled"),
                        ],
                        default="PENDENTE",
                        max_length=20,
                    ),
                ),
                ("installment_plan_id", models.UUIDField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payable_documents",
                        to="companies.company",
                    ),
                ),
                (
                    "counterparty",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payable_documents",
                        to="payables.counterparty",
                    ),
                ),
                (
                    "chart_of_account",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payable_documents",
                        to="accounting.account",
                    ),
                ),
                (
                    "cost_center",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payable_documents",
                        to="accounting.costcenter",
                    ),
                ),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="payable_documents_created",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("total_value__gte", Decimal("0.00"))),
                        name="payable_document_total_nonnegative",
                    ),
                ],
                "indexes": [
                    models.Index(
                        fields=["company", "created_at"], name="payable_company_created_idx"
                    ),
                    models.Index(
                        fields=["status", "created_at"], name="payable_status_created_idx"
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Installment",
            fields=[
                _uuid_pk(),
                ("sequence", models.PositiveIntegerField(default=0)),
                ("title", models.CharField(blank=True, default="", max_length=255)),
                ("due_date", models.DateField(blank=True, null=True)),
                ("payment_date", models.DateField(blank=True, null=True)),
                ("clearing_date", models.DateField(blank=True, null=True)),
                (
                    "installment_value",
                    models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True),
                ),
                (
                    "difference",
                    models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True),
                ),
                (
                    "total_value",
                    models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("pendente", "Pending"), ("pago", "Paid")],
                        default="pendente",
                        max_length=10,
                    ),
                ),
                ("payment_method_id", models.UUIDField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "document",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="installments",
                        to="payables.payabledocument",
                    ),
                ),
                (
                    "bank_account",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payable_installments",
                        to="banking.bankaccount",
                    ),
                ),
            ],
            options={
                "ordering": ["document", "sequence"],
                "indexes": [
                    models.Index(fields=["document", "title"], name="installment_doc_title_idx"),
                    models.Index(fields=["status", "due_date"], name="installment_status_due_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="DocumentAccountAllocation",
            fields=_allocation_fields()
            + [
                _document_fk("account_allocations"),
                _target_fk("account", "accounting.account", "payable_document_allocations"),
            ],
            options={"ordering": ["created_at"], "abstract": False},
        ),
        migrations.CreateModel(
            name="InstallmentAccountAllocation",
            fields=_allocation_fields()
            + [
                _document_fk("installment_account_allocations"),
                _installment_fk("account_allocations"),
                _target_fk("account", "accounting.account", "payable_installment_allocations"),
            ],
            options={"ordering": ["created_at"], "abstract": False},
        ),
        migrations.CreateModel(
            name="DocumentCostCenterAllocation",
            fields=_allocation_fields()
            + [
                _document_fk("cost_center_allocations"),
                _target_fk(
                    "cost_center", "accounting.costcenter", "payable_document_allocations"
                ),
            ],
            options={"ordering": ["created_at"], "abstract": False},
        ),
        migrations.CreateModel(
            name="InstallmentCostCenterAllocation",
            fields=_allocation_fields()
            + [
                _document_fk("installment_cost_center_allocations"),
                _installment_fk("cost_center_allocations"),
                _target_fk(
                    "cost_center",
                    "accounting.costcenter",
                    "payable_installment_allocations",
                ),
            ],
            options={"ordering": ["created_at"], "abstract": False},
        ),
    ]
