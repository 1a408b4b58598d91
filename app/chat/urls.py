"""
URL configuration for chat app.

The same views are mounted for both sides of the platform:
    /api/v1/user/chat/        -> user_urlpatterns (actor_role="user")
    /api/v1/superstar/chat/   -> superstar_urlpatterns (actor_role="superstar")

Starting a chat is only available to users.
"""

from django.urls import path

from authentication.models import UserRole
from chat import views


def build_patterns(role: str) -> list:
    """Role-scoped chat routes."""
    return [
        path(
            "conversations",
            views.ConversationListView.as_view(actor_role=role),
            name="conversation-list",
        ),
        path(
            "unread-count",
            views.UnreadCountView.as_view(actor_role=role),
            name="unread-count",
        ),
        path(
            "messages/<int:conversation_id>",
            views.MessageListView.as_view(actor_role=role),
            name="message-list",
        ),
        path(
            "send/<int:conversation_id>",
            views.SendMessageView.as_view(actor_role=role),
            name="message-send",
        ),
        path(
            "read/<int:conversation_id>",
            views.MarkAsReadView.as_view(actor_role=role),
            name="mark-read",
        ),
        path(
            "conversation/<int:conversation_id>/status",
            views.ConversationStatusView.as_view(actor_role=role),
            name="conversation-status",
        ),
        path(
            "message/<int:message_id>",
            views.DeleteMessageView.as_view(actor_role=role),
            name="message-delete",
        ),
        path(
            "file/<int:message_id>",
            views.MessageFileView.as_view(actor_role=role),
            name="message-file",
        ),
    ]


user_urlpatterns = build_patterns(UserRole.USER) + [
    path(
        "start/<int:superstar_id>",
        views.StartConversationView.as_view(actor_role=UserRole.USER),
        name="conversation-start",
    ),
]

superstar_urlpatterns = build_patterns(UserRole.SUPERSTAR)
