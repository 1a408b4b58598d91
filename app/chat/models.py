"""
Chat system models.

This module defines the data models for fan/superstar direct messaging:

Models:
    Conversation: Pairing of one user account with one superstar account
    Message: Individual message within a conversation, optionally carrying
             an attachment stored through the storage backend

Design Decisions:
    - A conversation is never hard-deleted by the chat core
    - Several conversations may exist for the same pair over time
      (a new one is started after the previous one ended)
    - Message senders are recorded as (sender_type, sender) so the role
      is explicit and can be filtered on without joining the user table
    - Attachments are referenced by storage path; the bytes live in storage
"""

from __future__ import annotations

from django.conf import settings
from django.db import models
from django.db.models import Q

from authentication.models import UserRole
from core.models import BaseModel


class ConversationStatus(models.TextChoices):
    """
    Lifecycle status of a conversation.

    ACTIVE: Both parties may exchange messages
    ENDED: Conversation was closed; ended_at records when
    BLOCKED: One party blocked the other; no new conversation may be started
    """

    ACTIVE = "active", "Active"
    ENDED = "ended", "Ended"
    BLOCKED = "blocked", "Blocked"


class MessageType(models.TextChoices):
    """Kind of content a message carries."""

    TEXT = "text", "Text"
    IMAGE = "image", "Image"
    VIDEO = "video", "Video"
    FILE = "file", "File"


class Conversation(BaseModel):
    """
    A direct conversation between a user (fan) and a superstar.

    Fields:
        user: Fan side of the conversation
        superstar: Superstar side of the conversation
        status: Lifecycle status (active, ended, blocked)
        started_at: Set on first activation only
        ended_at: Set every time the conversation enters "ended"

    Relationships:
        messages: All Message records for this conversation

    Ordering:
        Most recently updated first; sending a message touches updated_at.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="user_conversations",
        help_text="Fan account participating in this conversation",
    )

    superstar = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="superstar_conversations",
        help_text="Superstar account participating in this conversation",
    )

    status = models.CharField(
        max_length=10,
        choices=ConversationStatus.choices,
        default=ConversationStatus.ACTIVE,
        db_index=True,
        help_text="Lifecycle status of the conversation",
    )

    started_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the conversation was first activated",
    )

    ended_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the conversation last entered the ended status",
    )

    class Meta:
        db_table = "chat_conversation"
        ordering = ["-updated_at", "-id"]
        indexes = [
            # Conversation lists per side
            models.Index(
                fields=["user", "-updated_at"],
                name="chat_conv_user_updated_idx",
            ),
            models.Index(
                fields=["superstar", "-updated_at"],
                name="chat_conv_star_updated_idx",
            ),
            # Latest conversation for a pair (start chat)
            models.Index(
                fields=["user", "superstar", "-created_at"],
                name="chat_conv_pair_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"Conversation {self.pk} (user {self.user_id} / superstar {self.superstar_id}, {self.status})"

    def party_id(self, role: str) -> int:
        """Return the id of the party playing ``role`` in this conversation."""
        if role == UserRole.SUPERSTAR:
            return self.superstar_id
        return self.user_id

    def counterpart_of(self, role: str):
        """Return the account on the other side from ``role``."""
        if role == UserRole.SUPERSTAR:
            return self.user
        return self.superstar


class Message(BaseModel):
    """
    A message within a conversation.

    Content Rules:
        At least one of ``message`` (text body) or ``file_path``
        (attachment) is set. Attachment metadata (file_path, file_name,
        file_size) is set together or not at all.

    Read State:
        is_read flips to True only through the bulk mark-as-read operation
        run by the recipient, which also stamps read_at. Unread messages
        always have read_at NULL.

    Fields:
        conversation: Conversation this message belongs to
        sender_type: Role of the sender (user or superstar)
        sender: Account that sent the message
        message_type: text, image, video or file
        message: Text body (nullable when an attachment is present)
        file_path: Storage path of the attachment
        file_name: Original file name of the attachment
        file_size: Attachment size in bytes
        is_read: Whether the recipient has read the message
        read_at: When the recipient marked it read
    """

    conversation = models.ForeignKey(
        Conversation,
        on_delete=models.CASCADE,
        related_name="messages",
        help_text="Conversation this message belongs to",
    )

    sender_type = models.CharField(
        max_length=10,
        choices=UserRole.choices,
        help_text="Role of the sender (user or superstar)",
    )

    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_messages",
        help_text="Account that sent this message",
    )

    message_type = models.CharField(
        max_length=10,
        choices=MessageType.choices,
        default=MessageType.TEXT,
        help_text="Kind of content (text, image, video, file)",
    )

    message = models.TextField(
        null=True,
        blank=True,
        help_text="Text body; may be empty when an attachment is present",
    )

    file_path = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        help_text="Storage path of the attachment",
    )

    file_name = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        help_text="Original file name of the attachment",
    )

    file_size = models.PositiveBigIntegerField(
        null=True,
        blank=True,
        help_text="Attachment size in bytes",
    )

    is_read = models.BooleanField(
        default=False,
        help_text="Whether the recipient has read this message",
    )

    read_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the recipient marked this message as read",
    )

    class Meta:
        db_table = "chat_message"
        ordering = ["created_at", "id"]
        indexes = [
            # Paging through a conversation newest-first
            models.Index(
                fields=["conversation", "-created_at", "-id"],
                name="chat_msg_conv_recent_idx",
            ),
            # Unread counting and mark-as-read
            models.Index(
                fields=["conversation", "sender_type"],
                name="chat_msg_unread_idx",
                condition=Q(is_read=False),
            ),
            # Delete-own lookups
            models.Index(
                fields=["sender", "sender_type"],
                name="chat_msg_sender_idx",
            ),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(message__isnull=False) | Q(file_path__isnull=False),
                name="chat_msg_has_content",
            ),
            models.CheckConstraint(
                condition=Q(is_read=True) | Q(read_at__isnull=True),
                name="chat_msg_unread_has_no_read_at",
            ),
        ]

    def __str__(self) -> str:
        if self.message:
            body = self.message[:50] + "..." if len(self.message) > 50 else self.message
        else:
            body = f"[{self.message_type}: {self.file_name}]"
        return f"{self.sender_type} {self.sender_id}: {body}"

    @property
    def has_attachment(self) -> bool:
        """Check if this message references a stored file."""
        return bool(self.file_path)
