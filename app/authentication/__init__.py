"""
Authentication application.

Resolves who is calling the API. Every account is either a regular user
(a fan) or a superstar (a creator); the chat apps derive the acting party
from ``User.role``.

Key components:
    - User model: Email-based login with role, username and display name
    - JWT token endpoints (djangorestframework-simplejwt)
    - MeView: Identity of the authenticated caller

Usage:
    from authentication.models import User, UserRole
"""
