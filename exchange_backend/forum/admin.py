# forum/admin.py

from django.contrib import admin

from forum.models import Discussion, DiscussionReply


class DiscussionReplyInline(admin.TabularInline):
    model = DiscussionReply
    extra = 0
    readonly_fields = ("author", "created_at")


@admin.register(Discussion)
class DiscussionAdmin(admin.ModelAdmin):
    list_display = ("title", "author", "category", "is_pinned", "is_locked", "reply_count", "last_activity_at")
    list_filter = ("category", "is_pinned", "is_locked")
    search_fields = ("title", "content", "author__email")
    readonly_fields = ("view_count", "reply_count", "last_activity_at", "created_at", "updated_at")
    inlines = [DiscussionReplyInline]
