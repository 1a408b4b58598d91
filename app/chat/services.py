"""
Chat system service layer.

This module provides the business logic for fan/superstar messaging,
encapsulating all operations on conversations and messages. Every
conversation-scoped operation goes through ``authorize_conversation`` so
both roles share one access check.

Services:
    ConversationService: Conversation lifecycle (list, start, status changes)
    MessageService: Message operations (list, send, read marking, delete,
                    unread counting, attachment retrieval)

Design Principles:
    - Services are stateless (use class methods)
    - Expected failures return ServiceResult.failure()
    - Unexpected failures (database, storage) raise
    - Read marking and unread counting are single UPDATE / COUNT statements
    - Timestamps come from BaseService.now() so tests can pin the clock

Usage:
    from chat.authorization import Actor
    from chat.services import ConversationService, MessageService

    actor = Actor.from_user(request.user)

    result = MessageService.send_message(
        actor, conversation_id, message_type="text", message="Hello!"
    )
    if result.success:
        message = result.data
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from django.db.models import OuterRef, Subquery

from authentication.models import User, UserRole
from chat.authorization import Actor, authorize_conversation, can_access_conversation
from chat.constants import ErrorCode, get_setting
from chat.models import Conversation, ConversationStatus, Message, MessageType
from chat.pagination import Page, paginate
from chat.storage import AttachmentContent, AttachmentStorage
from core.services import BaseService, ServiceResult

if TYPE_CHECKING:
    from django.core.files.uploadedfile import UploadedFile


def validation_failure(errors: dict[str, list[str]]) -> ServiceResult:
    return ServiceResult.failure(
        "Validation failed",
        error_code=ErrorCode.VALIDATION_ERROR,
        errors=errors,
    )


@dataclass
class StartedConversation:
    """Outcome of starting a chat: the conversation and whether it is new."""

    conversation: Conversation
    created: bool


class ConversationService(BaseService):
    """
    Service for conversation lifecycle.

    Methods:
        list_conversations: Page through the actor's conversations
        start_conversation: Get or create the active conversation with a superstar
        update_status: Change status and stamp started_at / ended_at
    """

    @classmethod
    def list_conversations(
        cls,
        actor: Actor,
        status: str | None = None,
        page: int = 1,
        per_page: int | None = None,
    ) -> ServiceResult[Page[Conversation]]:
        """
        List conversations where the actor is the matching party.

        Ordered by most recently updated first, ties broken by id
        descending. Each conversation carries a ``latest_message``
        attribute (or None) instead of its full history.

        Args:
            actor: Caller
            status: Optional status filter
            page: 1-based page number
            per_page: Page size (defaults to CHAT_CONVERSATIONS_PAGE_SIZE)
        """
        if status is not None and status not in ConversationStatus.values:
            return validation_failure(
                {"status": [f"Must be one of: {', '.join(ConversationStatus.values)}."]}
            )

        per_page = per_page or get_setting("CONVERSATIONS_PAGE_SIZE")

        latest_message = (
            Message.objects.filter(conversation=OuterRef("pk"))
            .order_by("-created_at", "-id")
            .values("id")[:1]
        )
        queryset = (
            actor.conversations()
            .select_related("user", "superstar")
            .annotate(latest_message_id=Subquery(latest_message))
            .order_by("-updated_at", "-id")
        )
        if status:
            queryset = queryset.filter(status=status)

        result = paginate(queryset, page=page, per_page=per_page)

        message_ids = [c.latest_message_id for c in result.items if c.latest_message_id]
        messages = Message.objects.in_bulk(message_ids)
        for conversation in result.items:
            conversation.latest_message = messages.get(conversation.latest_message_id)

        return ServiceResult.success(result)

    @classmethod
    def start_conversation(
        cls,
        actor: Actor,
        superstar_id: int,
    ) -> ServiceResult[StartedConversation]:
        """
        Start (or resume) a chat between a user and a superstar.

        The pair's most recent conversation decides the outcome:
        - active: returned as-is (created=False)
        - blocked: refused with CONVERSATION_BLOCKED
        - ended, or no conversation yet: a new active one is created

        Error codes:
            NOT_PARTICIPANT: Actor is not a user (fan) account
            SUPERSTAR_NOT_FOUND: No active superstar with that id
            CONVERSATION_BLOCKED: The latest conversation is blocked
        """
        if actor.role != UserRole.USER:
            return ServiceResult.failure(
                "Only users can start conversations",
                error_code=ErrorCode.NOT_PARTICIPANT,
            )

        superstar = User.objects.filter(
            pk=superstar_id, role=UserRole.SUPERSTAR, is_active=True
        ).first()
        if superstar is None:
            return ServiceResult.failure(
                "Superstar not found",
                error_code=ErrorCode.SUPERSTAR_NOT_FOUND,
            )

        with cls.atomic():
            # Serialize concurrent starts by the same user
            list(User.objects.select_for_update().filter(pk=actor.id))

            latest = (
                Conversation.objects.filter(user_id=actor.id, superstar=superstar)
                .select_related("user", "superstar")
                .order_by("-created_at", "-id")
                .first()
            )

            if latest is not None and latest.status == ConversationStatus.ACTIVE:
                return ServiceResult.success(StartedConversation(latest, created=False))

            if latest is not None and latest.status == ConversationStatus.BLOCKED:
                return ServiceResult.failure(
                    "This conversation has been blocked",
                    error_code=ErrorCode.CONVERSATION_BLOCKED,
                )

            now = cls.now()
            conversation = Conversation.objects.create(
                user_id=actor.id,
                superstar=superstar,
                status=ConversationStatus.ACTIVE,
                started_at=now,
                created_at=now,
                updated_at=now,
            )

        cls.get_logger().info(
            f"User {actor.id} started conversation {conversation.id} with superstar {superstar.id}"
        )
        return ServiceResult.success(StartedConversation(conversation, created=True))

    @classmethod
    def update_status(
        cls,
        actor: Actor,
        conversation_id: int,
        status: str,
    ) -> ServiceResult[Conversation]:
        """
        Change a conversation's status.

        Side effects:
            - active: started_at is set only if it was never set
            - ended: ended_at is set to now on every call

        Error codes:
            VALIDATION_ERROR: Unknown status
            CONVERSATION_NOT_FOUND, NOT_PARTICIPANT: see authorize_conversation
        """
        if status not in ConversationStatus.values:
            return validation_failure(
                {"status": [f"Must be one of: {', '.join(ConversationStatus.values)}."]}
            )

        with cls.atomic():
            auth = authorize_conversation(
                actor,
                conversation_id,
                queryset=Conversation.objects.select_for_update(),
            )
            if not auth.success:
                return auth

            conversation = auth.data
            previous = conversation.status
            now = cls.now()

            changes = {"status": status, "updated_at": now}
            if status == ConversationStatus.ACTIVE and conversation.started_at is None:
                changes["started_at"] = now
            elif status == ConversationStatus.ENDED:
                changes["ended_at"] = now

            Conversation.objects.filter(pk=conversation.pk).update(**changes)

        cls.get_logger().info(
            f"{actor.role} {actor.id} changed conversation {conversation.id} "
            f"status {previous} -> {status}"
        )
        conversation = Conversation.objects.select_related("user", "superstar").get(
            pk=conversation.pk
        )
        return ServiceResult.success(conversation)


class MessageService(BaseService):
    """
    Service for message operations.

    Methods:
        list_messages: One page of a conversation, oldest-first within the page
        send_message: Create a text or attachment message
        mark_as_read: Bulk-mark the other party's messages read
        get_unread_count: Unread messages across all the actor's conversations
        delete_message: Delete one of the actor's own messages
        get_attachment: Read the stored file of a message
    """

    @classmethod
    def list_messages(
        cls,
        actor: Actor,
        conversation_id: int,
        page: int = 1,
        per_page: int | None = None,
    ) -> ServiceResult[Page[Message]]:
        """
        List one page of messages in a conversation.

        Pages are cut from the newest message backwards, so page 1 always
        holds the most recent ``per_page`` messages. Items within the
        returned page are oldest-first, ready for display.
        """
        auth = authorize_conversation(actor, conversation_id)
        if not auth.success:
            return auth

        per_page = per_page or get_setting("MESSAGES_PAGE_SIZE")
        queryset = Message.objects.filter(conversation=auth.data).order_by(
            "-created_at", "-id"
        )

        return ServiceResult.success(
            paginate(queryset, page=page, per_page=per_page).reversed()
        )

    @classmethod
    def send_message(
        cls,
        actor: Actor,
        conversation_id: int,
        message_type: str | None,
        message: str | None = None,
        file: UploadedFile | None = None,
    ) -> ServiceResult[Message]:
        """
        Send a message into a conversation.

        Args:
            actor: Sender
            conversation_id: Target conversation
            message_type: text, image, video or file
            message: Text body (required unless a file is attached)
            file: Optional upload, at most CHAT_ATTACHMENT_MAX_BYTES

        Returns:
            ServiceResult with the new Message (conversation loaded)

        Error codes:
            VALIDATION_ERROR: Bad message_type, no content, or file too large
            CONVERSATION_NOT_FOUND, NOT_PARTICIPANT: see authorize_conversation
        """
        message = message.strip() if message else None
        message = message or None

        errors: dict[str, list[str]] = {}
        if message_type not in MessageType.values:
            errors["message_type"] = [
                f"Must be one of: {', '.join(MessageType.values)}."
            ]
        if message is None and file is None:
            errors["message"] = ["This field is required when no file is attached."]
        max_bytes = get_setting("ATTACHMENT_MAX_BYTES")
        if file is not None and file.size > max_bytes:
            errors["file"] = [
                f"File may not be larger than {max_bytes // 1024} kilobytes."
            ]
        if errors:
            return validation_failure(errors)

        auth = authorize_conversation(actor, conversation_id)
        if not auth.success:
            return auth
        conversation = auth.data

        now = cls.now()
        stored = AttachmentStorage.save(file, now) if file is not None else None

        try:
            with cls.atomic():
                created = Message.objects.create(
                    conversation=conversation,
                    sender_type=actor.role,
                    sender_id=actor.id,
                    message_type=message_type,
                    message=message,
                    file_path=stored.path if stored else None,
                    file_name=stored.name if stored else None,
                    file_size=stored.size if stored else None,
                    is_read=False,
                    created_at=now,
                    updated_at=now,
                )
                # Move the conversation to the top of both parties' lists
                Conversation.objects.filter(pk=conversation.pk).update(updated_at=now)
                conversation.updated_at = now
        except Exception:
            if stored is not None:
                AttachmentStorage.delete(stored.path)
            raise

        cls.get_logger().debug(
            f"{actor.role} {actor.id} sent {message_type} message {created.id} "
            f"to conversation {conversation.id}"
        )
        return ServiceResult.success(created)

    @classmethod
    def mark_as_read(cls, actor: Actor, conversation_id: int) -> ServiceResult[int]:
        """
        Mark every unread message from the other party as read.

        Runs as a single UPDATE, so it is idempotent: a second call in a
        row marks nothing.

        Returns:
            ServiceResult with the number of messages marked
        """
        auth = authorize_conversation(actor, conversation_id)
        if not auth.success:
            return auth

        now = cls.now()
        marked = Message.objects.filter(
            conversation=auth.data,
            sender_type=actor.counterpart_role,
            is_read=False,
        ).update(is_read=True, read_at=now, updated_at=now)

        cls.get_logger().debug(
            f"{actor.role} {actor.id} marked {marked} messages read in conversation {conversation_id}"
        )
        return ServiceResult.success(marked)

    @classmethod
    def get_unread_count(cls, actor: Actor) -> ServiceResult[int]:
        """Count unread messages from the other party across all conversations."""
        count = Message.objects.filter(
            **{f"conversation__{actor.party_field}": actor.id},
            sender_type=actor.counterpart_role,
            is_read=False,
        ).count()
        return ServiceResult.success(count)

    @classmethod
    def delete_message(cls, actor: Actor, message_id: int) -> ServiceResult[int]:
        """
        Delete one of the actor's own messages.

        A message that does not exist and a message sent by someone else
        produce the same MESSAGE_NOT_FOUND failure. The row is deleted in
        a transaction first; the stored attachment (if any) is removed
        afterwards on a best-effort basis.

        Returns:
            ServiceResult with the deleted message id
        """
        with cls.atomic():
            message = (
                Message.objects.select_for_update()
                .filter(pk=message_id, sender_type=actor.role, sender_id=actor.id)
                .first()
            )
            if message is None:
                return ServiceResult.failure(
                    "Message not found",
                    error_code=ErrorCode.MESSAGE_NOT_FOUND,
                )
            file_path = message.file_path
            message.delete()

        if file_path:
            AttachmentStorage.delete(file_path)

        cls.get_logger().info(f"{actor.role} {actor.id} deleted message {message_id}")
        return ServiceResult.success(message_id)

    @classmethod
    def get_attachment(
        cls,
        actor: Actor,
        message_id: int,
    ) -> ServiceResult[AttachmentContent]:
        """
        Read the attachment of a message the actor can see.

        Error codes:
            MESSAGE_NOT_FOUND: No such message
            NOT_PARTICIPANT: Actor is not a party to the message's conversation
            ATTACHMENT_NOT_FOUND: Message has no attachment or the file is gone
        """
        message = Message.objects.select_related("conversation").filter(pk=message_id).first()
        if message is None:
            return ServiceResult.failure(
                "Message not found",
                error_code=ErrorCode.MESSAGE_NOT_FOUND,
            )

        if not can_access_conversation(actor, message.conversation):
            return ServiceResult.failure(
                "You are not a participant in this conversation",
                error_code=ErrorCode.NOT_PARTICIPANT,
            )

        if not message.has_attachment:
            return ServiceResult.failure(
                "This message has no attachment",
                error_code=ErrorCode.ATTACHMENT_NOT_FOUND,
            )

        try:
            content = AttachmentStorage.read(message.file_path, message.file_name or "")
        except FileNotFoundError:
            cls.get_logger().warning(
                f"Attachment {message.file_path} of message {message.id} is missing from storage"
            )
            return ServiceResult.failure(
                "Attachment not found",
                error_code=ErrorCode.ATTACHMENT_NOT_FOUND,
            )

        return ServiceResult.success(content)
