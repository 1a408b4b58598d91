"""
Chat application configuration.

This app provides fan/superstar direct messaging with:
- Conversation lifecycle (active, ended, blocked)
- Text and attachment messages
- Read tracking and unread counts
"""

from django.apps import AppConfig


class ChatConfig(AppConfig):
    """Configuration for the chat application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "chat"
    verbose_name = "Chat"
