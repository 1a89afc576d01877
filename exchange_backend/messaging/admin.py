# messaging/admin.py

from django.contrib import admin

from messaging.models import Message


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ("listing", "from_user", "to_user", "is_read", "created_at")
    list_filter = ("is_read",)
    search_fields = ("body", "from_user__email", "to_user__email", "listing__event_title")
    readonly_fields = ("listing", "from_user", "to_user", "body", "read_at", "created_at")
