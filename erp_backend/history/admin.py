# history/admin.py

from django.contrib import admin

from history.models import HistoryEntry


@admin.register(HistoryEntry)
class HistoryEntryAdmin(admin.ModelAdmin):
    list_display = ("created_at", "company", "action", "entity", "entity_id", "user")
    list_filter = ("action", "entity", "company")
    search_fields = ("description", "entity_id")
    ordering = ("-created_at",)

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
