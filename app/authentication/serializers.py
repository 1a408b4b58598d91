"""
Serializers for account identity.

Serializers:
    UserIdentitySerializer: Public identity embedded in chat payloads
    MeSerializer: Full identity of the authenticated account
"""

from rest_framework import serializers

from authentication.models import User


class UserIdentitySerializer(serializers.ModelSerializer):
    """
    Public identity of an account, as seen by the other conversation party.

    Used for the ``user``, ``superstar`` and ``counterpart`` blocks of
    conversation payloads.
    """

    name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ["id", "role", "username", "display_name", "name"]
        read_only_fields = fields

    def get_name(self, obj) -> str:
        return obj.get_full_name()


class MeSerializer(serializers.ModelSerializer):
    """Identity of the authenticated account (GET /api/v1/auth/me/)."""

    class Meta:
        model = User
        fields = ["id", "email", "role", "username", "display_name", "date_joined"]
        read_only_fields = fields
