# companies/admin.py

from django.contrib import admin

from companies.models import Company


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
    list_display = ("name", "code", "tax_id", "is_active", "created_at")
    list_filter = ("is_active",)
    search_fields = ("name", "code", "tax_id")
    readonly_fields = ("created_at", "updated_at")
    ordering = ("name",)
