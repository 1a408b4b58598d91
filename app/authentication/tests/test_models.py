"""
Tests for the User model and UserManager.

Covers email-based creation, role defaults and the public naming helpers
that chat payloads rely on.
"""

import pytest
from django.core.exceptions import ValidationError

from authentication.models import User, UserRole
from authentication.tests.factories import SuperstarFactory, UserFactory


@pytest.mark.django_db
class TestUserManager:
    """Tests for UserManager.create_user() and create_superuser()."""

    def test_creates_user_with_hashed_password(self):
        user = User.objects.create_user(email="mgr@example.com", password="SecurePass123!")

        assert user.pk is not None
        assert user.check_password("SecurePass123!") is True
        assert user.password != "SecurePass123!"

    def test_defaults_role_to_user(self):
        user = User.objects.create_user(email="default@example.com", password="x-Pass-123")

        assert user.role == UserRole.USER
        assert user.is_fan is True
        assert user.is_superstar is False

    def test_normalizes_email_domain(self):
        user = User.objects.create_user(email="Test.User@EXAMPLE.COM")

        assert user.email == "Test.User@example.com"

    def test_missing_password_is_unusable(self):
        user = User.objects.create_user(email="nopass@example.com")

        assert user.has_usable_password() is False

    def test_empty_username_stored_as_null(self):
        """
        Why it matters: the username column is unique, so two accounts
        without a handle must not collide on an empty string.
        """
        first = User.objects.create_user(email="a@example.com", username="")
        second = User.objects.create_user(email="b@example.com", username="")

        assert first.username is None
        assert second.username is None

    def test_raises_when_email_missing(self):
        with pytest.raises(ValueError, match="Email"):
            User.objects.create_user(email="", password="x")

    def test_create_superuser_sets_flags(self):
        admin = User.objects.create_superuser(email="admin@example.com", password="AdminPass1!")

        assert admin.is_staff is True
        assert admin.is_superuser is True

    def test_create_superuser_rejects_is_staff_false(self):
        with pytest.raises(ValueError, match="is_staff"):
            User.objects.create_superuser(
                email="admin2@example.com", password="x", is_staff=False
            )


@pytest.mark.django_db
class TestUserModel:
    """Tests for User helpers and validators."""

    def test_superstar_role(self):
        star = SuperstarFactory()

        assert star.is_superstar is True
        assert star.is_fan is False

    def test_full_name_prefers_display_name(self):
        user = UserFactory(display_name="Jane Fan", username="janefan")

        assert user.get_full_name() == "Jane Fan"

    def test_full_name_falls_back_to_username_then_email(self):
        with_handle = UserFactory(display_name="", username="handle_only")
        bare = UserFactory(display_name="", username=None, email="bare@example.com")

        assert with_handle.get_full_name() == "handle_only"
        assert bare.get_full_name() == "bare@example.com"

    def test_str_is_email(self):
        user = UserFactory(email="str@example.com")

        assert str(user) == "str@example.com"

    @pytest.mark.parametrize("username", ["admin", "Superstar", "me"])
    def test_reserved_username_rejected(self, username):
        user = UserFactory.build(username=username)

        with pytest.raises(ValidationError) as exc_info:
            user.full_clean(exclude=["password"])

        assert "username" in exc_info.value.message_dict

    @pytest.mark.parametrize("username", ["ab", "has space", "x" * 31])
    def test_malformed_username_rejected(self, username):
        user = UserFactory.build(username=username)

        with pytest.raises(ValidationError) as exc_info:
            user.full_clean(exclude=["password"])

        assert "username" in exc_info.value.message_dict
