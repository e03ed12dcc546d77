# companies/migrations/0001_initial.py

import uuid

from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Company",
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
                ("name", models.CharField(max_length=255)),
                (
                    "code",
                    models.CharField(
                        blank=True,
                        db_index=True,
                        help_text="Unique company code (optional). If set, must be unique.",
                        max_length=50,
                        null=True,
                    ),
                ),
                ("tax_id", models.CharField(blank=True, default="", max_length=20)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["name"],
                "verbose_name_plural": "Companies",
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(
                            ("code__isnull", False), models.Q(("code", ""), _negated=True)
                        ),
                        fields=("code",),
                        name="uniq_company_code_when_present",
                    )
                ],
            },
        ),
    ]
