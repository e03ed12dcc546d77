# accounting/admin.py

from django.contrib import admin

from accounting.models.account import Account
from accounting.models.cost_center import CostCenter

# ============================================================
# ACCOUNT
# ============================================================


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    list_display = (
        "code",
        "name",
        "account_type",
        "company",
        "is_active",
    )
    list_filter = ("account_type", "is_active", "company")
    search_fields = ("code", "name")
    ordering = ("company", "code")
    readonly_fields = ("created_at", "updated_at")

    fieldsets = (
        (
            "Account Identity",
            {
                "fields": ("company", "code", "name", "account_type"),
            },
        ),
        (
            "Status",
            {
                "fields": ("is_active",),
            },
        ),
        (
            "Audit",
            {
                "fields": ("created_at", "updated_at"),
            },
        ),
    )


# ============================================================
# COST CENTER
# ============================================================


@admin.register(CostCenter)
class CostCenterAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "company", "is_active")
    list_filter = ("is_active", "company")
    search_fields = ("code", "name")
    ordering = ("company", "code")
    readonly_fields = ("created_at", "updated_at")
