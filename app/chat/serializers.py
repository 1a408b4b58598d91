"""
Serializers for chat API.

This module provides serializers for the chat system:
- Query serializers validating page/per_page/status query parameters
- Write serializers for sending messages and changing status
- Read serializers shaping conversations and messages

Serializer Hierarchy:
    ConversationSerializer: Conversation with both party identities
    ConversationListSerializer: Adds counterpart and latest_message
    MessageSerializer: Message with attachment metadata and read state
    MessageWithConversationSerializer: Send response, embeds the conversation

Design Decisions:
    - Read and write serializers are separate for clarity
    - Validation failures are rendered as 422 by the views
    - The counterpart is resolved from the ``actor`` in serializer context
"""

from __future__ import annotations

from rest_framework import serializers

from authentication.serializers import UserIdentitySerializer
from chat.constants import get_setting
from chat.models import Conversation, ConversationStatus, Message, MessageType


# =============================================================================
# Query Serializers
# =============================================================================


class PageQuerySerializer(serializers.Serializer):
    """Validates ``page`` and ``per_page`` query parameters."""

    page = serializers.IntegerField(required=False, default=1, min_value=1)
    per_page = serializers.IntegerField(required=False, min_value=1)

    def validate_per_page(self, value: int) -> int:
        max_page_size = get_setting("MAX_PAGE_SIZE")
        if value > max_page_size:
            raise serializers.ValidationError(
                f"Ensure this value is less than or equal to {max_page_size}."
            )
        return value


class ConversationListQuerySerializer(PageQuerySerializer):
    """Adds the optional ``status`` filter."""

    status = serializers.ChoiceField(
        choices=ConversationStatus.choices,
        required=False,
    )


# =============================================================================
# Write Serializers
# =============================================================================


class MessageCreateSerializer(serializers.Serializer):
    """
    Validates a send request (JSON or multipart).

    ``message`` is required unless ``file`` is present; blank text counts
    as absent.
    """

    message_type = serializers.ChoiceField(choices=MessageType.choices)
    message = serializers.CharField(
        required=False,
        allow_blank=True,
        allow_null=True,
        help_text="Text body (required when no file is attached)",
    )
    file = serializers.FileField(
        required=False,
        allow_null=True,
        help_text="Attachment, at most CHAT_ATTACHMENT_MAX_BYTES",
    )

    def validate_file(self, value):
        max_bytes = get_setting("ATTACHMENT_MAX_BYTES")
        if value is not None and value.size > max_bytes:
            raise serializers.ValidationError(
                f"File may not be larger than {max_bytes // 1024} kilobytes."
            )
        return value

    def validate(self, attrs):
        attrs["message"] = attrs.get("message") or None
        attrs["file"] = attrs.get("file")
        if attrs["message"] is None and attrs["file"] is None:
            raise serializers.ValidationError(
                {"message": ["This field is required when no file is attached."]}
            )
        return attrs


class ConversationStatusSerializer(serializers.Serializer):
    """Validates a status change request."""

    status = serializers.ChoiceField(choices=ConversationStatus.choices)


# =============================================================================
# Read Serializers
# =============================================================================


class MessageSerializer(serializers.ModelSerializer):
    """Message as returned by list and send endpoints."""

    class Meta:
        model = Message
        fields = [
            "id",
            "conversation_id",
            "sender_type",
            "sender_id",
            "message_type",
            "message",
            "file_path",
            "file_name",
            "file_size",
            "is_read",
            "read_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ConversationSerializer(serializers.ModelSerializer):
    """Conversation with both party identities."""

    user = UserIdentitySerializer(read_only=True)
    superstar = UserIdentitySerializer(read_only=True)

    class Meta:
        model = Conversation
        fields = [
            "id",
            "user_id",
            "superstar_id",
            "status",
            "started_at",
            "ended_at",
            "created_at",
            "updated_at",
            "user",
            "superstar",
        ]
        read_only_fields = fields


class ConversationListSerializer(ConversationSerializer):
    """
    Conversation list item.

    Requires ``actor`` in context to resolve the counterpart, and a
    ``latest_message`` attribute set by ConversationService.
    """

    counterpart = serializers.SerializerMethodField()
    latest_message = serializers.SerializerMethodField()

    class Meta(ConversationSerializer.Meta):
        fields = ConversationSerializer.Meta.fields + ["counterpart", "latest_message"]
        read_only_fields = fields

    def get_counterpart(self, obj: Conversation) -> dict:
        actor = self.context["actor"]
        return UserIdentitySerializer(obj.counterpart_of(actor.role)).data

    def get_latest_message(self, obj: Conversation) -> dict | None:
        latest = getattr(obj, "latest_message", None)
        if latest is None:
            return None
        return MessageSerializer(latest).data


class MessageWithConversationSerializer(MessageSerializer):
    """Send response: the new message with its conversation."""

    conversation = ConversationSerializer(read_only=True)

    class Meta(MessageSerializer.Meta):
        fields = MessageSerializer.Meta.fields + ["conversation"]
        read_only_fields = fields
