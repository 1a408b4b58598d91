"""
Tests for authentication API endpoints.

- Token obtain/refresh (simplejwt)
- MeView: identity and role of the bearer
"""

import pytest
from rest_framework import status

TOKEN_URL = "/api/v1/auth/token/"
REFRESH_URL = "/api/v1/auth/token/refresh/"
ME_URL = "/api/v1/auth/me/"


@pytest.mark.django_db
class TestTokenEndpoints:
    """Tests for JWT token obtain and refresh."""

    def test_obtain_pair_with_valid_credentials(self, api_client, user):
        response = api_client.post(
            TOKEN_URL,
            {"email": "fan@example.com", "password": "TestPass123!"},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert "access" in response.data
        assert "refresh" in response.data

    def test_obtain_pair_with_wrong_password(self, api_client, user):
        response = api_client.post(
            TOKEN_URL,
            {"email": "fan@example.com", "password": "wrong"},
            format="json",
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_refresh_returns_new_access_token(self, api_client, user):
        pair = api_client.post(
            TOKEN_URL,
            {"email": "fan@example.com", "password": "TestPass123!"},
            format="json",
        ).data

        response = api_client.post(REFRESH_URL, {"refresh": pair["refresh"]}, format="json")

        assert response.status_code == status.HTTP_200_OK
        assert "access" in response.data


@pytest.mark.django_db
class TestMeView:
    """Tests for GET /api/v1/auth/me/."""

    def test_returns_identity_and_role(self, authenticated_client, user):
        response = authenticated_client.get(ME_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.data["id"] == user.id
        assert response.data["email"] == "fan@example.com"
        assert response.data["role"] == "user"

    def test_requires_authentication(self, api_client):
        response = api_client.get(ME_URL)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
