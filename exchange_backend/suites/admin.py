# suites/admin.py

from django.contrib import admin

from suites.models import Suite


@admin.register(Suite)
class SuiteAdmin(admin.ModelAdmin):
    list_display = ("display_name", "area", "number", "capacity", "is_active")
    list_filter = ("area", "is_active")
    search_fields = ("display_name",)
    readonly_fields = ("display_name", "created_at", "updated_at")
