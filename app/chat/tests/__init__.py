"""
Tests for chat app.

This package contains test modules for:
- test_models.py: Conversation, Message model tests
- test_authorization.py: Actor and conversation access guard tests
- test_pagination.py: Page arithmetic tests
- test_storage.py: Attachment storage tests
- test_services.py: ConversationService, MessageService tests
- test_views.py: REST API endpoint tests for both role prefixes

Usage:
    pytest chat/tests/
    pytest chat/tests/test_services.py
"""
