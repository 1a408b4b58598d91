"""
Authentication models.

This module defines the account model shared by both sides of the platform:
- User: Email-based account carrying a role (user or superstar)

The role is the identity the chat system acts on: a conversation always
pairs one ``user`` account with one ``superstar`` account.

Related files:
    - managers.py: Custom user manager for email-based creation
    - views.py: Token and identity endpoints
"""

import re

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.core.exceptions import ValidationError
from django.db import models

from authentication.managers import UserManager


RESERVED_USERNAMES = frozenset([
    "admin", "administrator", "root", "system", "api", "www",
    "support", "help", "superstar", "superstars", "user", "users",
    "chat", "me", "null", "undefined", "anonymous", "official",
    "verified", "staff", "moderator", "bot",
])


def validate_username_not_reserved(value):
    """Validate that username is not in the reserved list."""
    if value.lower() in RESERVED_USERNAMES:
        raise ValidationError(
            f"The username '{value}' is reserved and cannot be used."
        )


def validate_username_format(value):
    """Validate username format: 3-30 chars, alphanumeric + _ + -."""
    if not re.match(r"^[a-zA-Z0-9_-]{3,30}$", value):
        raise ValidationError(
            "Username must be 3-30 characters and contain only "
            "letters, numbers, underscores, and hyphens."
        )


class UserRole(models.TextChoices):
    """
    Which side of the platform an account belongs to.

    USER: A fan who subscribes to and chats with superstars
    SUPERSTAR: A creator who receives subscriptions and chats with fans
    """

    USER = "user", "User"
    SUPERSTAR = "superstar", "Superstar"


class User(AbstractBaseUser, PermissionsMixin):
    """
    Custom User model using email as the primary identifier.

    Fields:
        email: Primary identifier, unique, used for login
        role: user or superstar (immutable in practice; drives chat access)
        username: Optional public handle, unique when set
        display_name: Public name shown to the other party
        is_active: Whether the account can log in
        is_staff: Whether the account can access Django admin
        date_joined: When the account was created
        updated_at: When the record was last modified
    """

    email = models.EmailField(
        unique=True,
        db_index=True,
        max_length=254,
        help_text="User's email address (primary identifier)",
    )

    role = models.CharField(
        max_length=10,
        choices=UserRole.choices,
        default=UserRole.USER,
        db_index=True,
        help_text="Platform side of this account (user or superstar)",
    )

    username = models.CharField(
        max_length=30,
        unique=True,
        null=True,
        blank=True,
        validators=[validate_username_format, validate_username_not_reserved],
        help_text="Public handle (3-30 chars, letters, digits, _ and -)",
    )

    display_name = models.CharField(
        max_length=100,
        blank=True,
        default="",
        help_text="Name shown to the other party in conversations",
    )

    is_active = models.BooleanField(
        default=True,
        help_text="Whether this user account is active. Deselect instead of deleting.",
    )
    is_staff = models.BooleanField(
        default=False,
        help_text="Whether the user can access the admin site.",
    )

    date_joined = models.DateTimeField(
        auto_now_add=True,
        help_text="When the user account was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the user record was last modified",
    )

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    objects = UserManager()

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["-date_joined"]

    def __str__(self):
        return self.email

    def get_full_name(self):
        """Return the public name, falling back to username then email."""
        return self.display_name or self.username or self.email

    def get_short_name(self):
        return self.username or self.email.split("@")[0]

    @property
    def is_superstar(self) -> bool:
        """Check if this account is a superstar (creator)."""
        return self.role == UserRole.SUPERSTAR

    @property
    def is_fan(self) -> bool:
        """Check if this account is a regular user (fan)."""
        return self.role == UserRole.USER
