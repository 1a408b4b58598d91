"""
URL configuration for the Django application.

The `urlpatterns` list routes URLs to views. This is the root URL configuration
that includes all app-specific routes.

URL Structure:
    /                              - ReDoc API documentation
    /admin/                        - Django admin interface
    /health/                       - Health check endpoint (for load balancers, Docker)
    /schema/                       - OpenAPI schema (YAML)
    /api/v1/auth/                  - Authentication endpoints
        token/                     - Obtain JWT pair (email + password)
        token/refresh/             - Refresh access token
        me/                        - Current account and role
    /api/v1/user/chat/             - Chat endpoints for users (fans)
        conversations              - Conversation list
        unread-count               - Unread messages across conversations
        start/{superstar_id}       - Start or resume a chat with a superstar
        messages/{conversation_id} - Message page
        send/{conversation_id}     - Send message (JSON or multipart)
        read/{conversation_id}     - Mark messages read
        conversation/{id}/status   - Update conversation status
        message/{message_id}       - Delete own message
        file/{message_id}          - Download attachment
    /api/v1/superstar/chat/        - Same chat endpoints for superstars (no start/)
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView

from chat.urls import superstar_urlpatterns, user_urlpatterns
from core.views import health_check

# =============================================================================
# API v1 Routes
# =============================================================================
# All routes here are prefixed with /api/v1/ automatically
api_v1_patterns = [
    # Authentication (simplejwt tokens + identity)
    path("auth/", include("authentication.urls")),
    # Chat, one mount per role
    path("user/chat/", include((user_urlpatterns, "chat"), namespace="user-chat")),
    path(
        "superstar/chat/",
        include((superstar_urlpatterns, "chat"), namespace="superstar-chat"),
    ),
]

urlpatterns = [
    # Documentation
    path("", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    # Admin
    path("admin/", admin.site.urls),
    # Health check (Docker, Kubernetes, load balancers)
    path("health/", health_check, name="health_check"),
    # API v1
    path("api/v1/", include(api_v1_patterns)),
]

# =============================================================================
# Admin Site Customization
# =============================================================================
admin.site.site_header = "Superstar Chat Admin"
admin.site.site_title = "Superstar Chat"
admin.site.index_title = "Conversations and accounts"
