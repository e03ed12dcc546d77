# payables/admin.py

from django.contrib import admin

from payables.models import (
    Counterparty,
    DocumentAccountAllocation,
    DocumentCostCenterAllocation,
    Installment,
    PayableDocument,
)


@admin.register(Counterparty)
class CounterpartyAdmin(admin.ModelAdmin):
    list_display = ("display_name", "company", "tax_id", "is_active")
    list_filter = ("is_active", "company")
    search_fields = ("legal_name", "trade_name", "tax_id")


class ReadOnlyInline(admin.TabularInline):
    extra = 0
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False


class InstallmentInline(ReadOnlyInline):
    model = Installment
    fields = (
        "sequence",
        "title",
        "due_date",
        "payment_date",
        "installment_value",
        "total_value",
        "status",
        "bank_account",
    )
    readonly_fields = fields


class DocumentAccountAllocationInline(ReadOnlyInline):
    model = DocumentAccountAllocation
    fields = ("account", "value", "percent")
    readonly_fields = fields


class DocumentCostCenterAllocationInline(ReadOnlyInline):
    model = DocumentCostCenterAllocation
    fields = ("cost_center", "value", "percent")
    readonly_fields = fields


@admin.register(PayableDocument)
class PayableDocumentAdmin(admin.ModelAdmin):
    """
    Documents are created through the API in a single transaction; the
    admin only inspects them.
    """

    list_display = ("title", "company", "counterparty", "total_value", "issue_date", "status")
    list_filter = ("status", "company")
    search_fields = ("title", "counterparty__legal_name", "counterparty__trade_name")
    date_hierarchy = "issue_date"
    inlines = [
        InstallmentInline,
        DocumentAccountAllocationInline,
        DocumentCostCenterAllocationInline,
    ]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
