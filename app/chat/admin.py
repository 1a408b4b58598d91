"""
Django admin configuration for chat models.

Conversations are never deleted by the API; admin is where staff can
inspect them and their messages.
"""

from django.contrib import admin

from chat.models import Conversation, Message


class MessageInline(admin.TabularInline):
    model = Message
    extra = 0
    fields = ("sender_type", "sender", "message_type", "message", "file_name", "is_read", "created_at")
    readonly_fields = fields
    ordering = ("-created_at",)
    show_change_link = True


@admin.register(Conversation)
class ConversationAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "superstar", "status", "started_at", "ended_at", "updated_at")
    list_filter = ("status",)
    search_fields = ("user__email", "superstar__email", "superstar__username")
    raw_id_fields = ("user", "superstar")
    readonly_fields = ("created_at", "updated_at")
    inlines = [MessageInline]


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ("id", "conversation", "sender_type", "sender", "message_type", "is_read", "created_at")
    list_filter = ("message_type", "sender_type", "is_read")
    search_fields = ("message", "file_name")
    raw_id_fields = ("conversation", "sender")
    readonly_fields = ("created_at", "updated_at", "read_at")
