"""
Test configuration and fixtures for chat tests.

This module provides:
- Accounts on both sides of a conversation plus outsiders
- Conversation fixtures
- Actor values for service-level tests
- API clients authenticated with JWT bearer tokens

Usage:
    def test_example(conversation, user_client):
        response = user_client.get(f"/api/v1/user/chat/messages/{conversation.id}")
        assert response.status_code == 200
"""

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.tests.factories import SuperstarFactory, UserFactory
from chat.authorization import Actor
from chat.tests.factories import ConversationFactory

# 1x1 transparent PNG
PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"
    b"\x08\x06\x00\x00\x00\x1f\x15\xc4\x89\x00\x00\x00\rIDATx\x9cc\xf8\x0f"
    b"\x00\x00\x01\x01\x00\x05\x18\xd8N\x00\x00\x00\x00IEND\xaeB`\x82"
)


# =============================================================================
# Account Fixtures
# =============================================================================


@pytest.fixture
def fan(db):
    """The user (fan) side of ``conversation``."""
    return UserFactory(display_name="Fan One", username="fan_one")


@pytest.fixture
def star(db):
    """The superstar side of ``conversation``."""
    return SuperstarFactory(display_name="Star One", username="star_one")


@pytest.fixture
def other_fan(db):
    """A user who is not part of ``conversation``."""
    return UserFactory()


@pytest.fixture
def other_star(db):
    """A superstar who is not part of ``conversation``."""
    return SuperstarFactory()


# =============================================================================
# Conversation Fixtures
# =============================================================================


@pytest.fixture
def conversation(fan, star):
    """Active conversation between ``fan`` and ``star``."""
    return ConversationFactory(user=fan, superstar=star)


# =============================================================================
# Actor Fixtures
# =============================================================================


@pytest.fixture
def fan_actor(fan):
    return Actor.user(fan.id)


@pytest.fixture
def star_actor(star):
    return Actor.superstar(star.id)


# =============================================================================
# Upload Fixtures
# =============================================================================


@pytest.fixture
def png_upload():
    """Small PNG upload."""
    return SimpleUploadedFile("photo.png", PNG_BYTES, content_type="image/png")


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def api_client():
    """Unauthenticated API client."""
    return APIClient()


@pytest.fixture
def authenticated_client_factory():
    """
    Factory for API clients authenticated as a given account.

    Usage:
        client = authenticated_client_factory(some_user)
    """

    def _make(account):
        client = APIClient()
        refresh = RefreshToken.for_user(account)
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
        return client

    return _make


@pytest.fixture
def user_client(authenticated_client_factory, fan):
    """API client authenticated as ``fan``."""
    return authenticated_client_factory(fan)


@pytest.fixture
def star_client(authenticated_client_factory, star):
    """API client authenticated as ``star``."""
    return authenticated_client_factory(star)
