# banking/admin.py

from django.contrib import admin

from banking.models.bank_account import BankAccount
from banking.models.ledger_movement import LedgerMovement


@admin.register(BankAccount)
class BankAccountAdmin(admin.ModelAdmin):
    list_display = (
        "description",
        "company",
        "bank_name",
        "opening_balance",
        "current_balance",
        "balance_updated_at",
        "is_active",
    )
    list_filter = ("is_active", "company")
    search_fields = ("description", "bank_name", "account_number")
    readonly_fields = ("current_balance", "balance_updated_at", "created_at", "updated_at")


@admin.register(LedgerMovement)
class LedgerMovementAdmin(admin.ModelAdmin):
    """
    Movements are produced by services; the admin is read-only.
    """

    list_display = (
        "movement_date",
        "account",
        "direction",
        "amount",
        "balance_before",
        "balance_after",
        "status",
        "origin_screen",
    )
    list_filter = ("direction", "status", "origin_screen")
    search_fields = ("description", "detailed_description")
    ordering = ("-movement_date",)

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
