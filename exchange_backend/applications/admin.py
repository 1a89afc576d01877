# applications/admin.py

from django.contrib import admin

from applications.models import ApplicationAttachment, SellerApplication


class ApplicationAttachmentInline(admin.TabularInline):
    model = ApplicationAttachment
    extra = 0
    readonly_fields = ("file", "original_name", "content_type", "size", "uploaded_by", "created_at")


@admin.register(SellerApplication)
class SellerApplicationAdmin(admin.ModelAdmin):
    list_display = ("suite", "legal_name", "user", "status", "created_at", "decided_at")
    list_filter = ("status", "suite__area")
    search_fields = ("legal_name", "user__email", "suite__display_name")
    readonly_fields = ("reviewed_by", "decided_at", "verified_at", "created_at", "updated_at")
    inlines = [ApplicationAttachmentInline]
