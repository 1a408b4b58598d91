"""
Test configuration and fixtures for authentication tests.

Usage:
    def test_example(user, authenticated_client):
        response = authenticated_client.get('/api/v1/auth/me/')
        assert response.status_code == 200
"""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.tests.factories import SuperstarFactory, UserFactory


@pytest.fixture
def api_client():
    """Unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """A fan account with a known password."""
    return UserFactory(email="fan@example.com", password="TestPass123!")


@pytest.fixture
def superstar(db):
    """A superstar account."""
    return SuperstarFactory(email="star@example.com")


@pytest.fixture
def authenticated_client(user):
    """API client authenticated as ``user`` via a JWT bearer token."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return client
