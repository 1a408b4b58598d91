"""
Service-level authorization for chat operations.

This module provides the single access-control guard shared by every
conversation-scoped operation, for both sides of the platform. It is
distinct from DRF permission classes (in permissions.py) which only check
that the caller's role matches the URL prefix.

Key Components:
    Actor: Tagged (role, id) value identifying the caller
    can_access_conversation: Pure check of an actor against a conversation
    authorize_conversation: Load a conversation and apply the check

Error Codes:
    CONVERSATION_NOT_FOUND: No conversation with that id
    NOT_PARTICIPANT: The actor is not the matching party of the conversation

Usage:
    actor = Actor.from_user(request.user)
    result = authorize_conversation(actor, conversation_id)
    if not result.success:
        return result
    conversation = result.data
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from authentication.models import UserRole
from chat.constants import ErrorCode
from chat.models import Conversation
from core.services import ServiceResult

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from authentication.models import User


@dataclass(frozen=True)
class Actor:
    """
    The authenticated caller of a chat operation.

    Build one with ``Actor.user(id)``, ``Actor.superstar(id)`` or
    ``Actor.from_user(user)`` rather than pairing a loose role string
    with an id.
    """

    role: str
    id: int

    def __post_init__(self):
        if self.role not in UserRole.values:
            raise ValueError(f"Unknown actor role: {self.role!r}")

    @classmethod
    def user(cls, id: int) -> Actor:
        return cls(UserRole.USER, id)

    @classmethod
    def superstar(cls, id: int) -> Actor:
        return cls(UserRole.SUPERSTAR, id)

    @classmethod
    def from_user(cls, user: User) -> Actor:
        return cls(user.role, user.pk)

    @property
    def party_field(self) -> str:
        """Conversation column naming this actor's side (user_id / superstar_id)."""
        return "superstar_id" if self.role == UserRole.SUPERSTAR else "user_id"

    @property
    def counterpart_role(self) -> str:
        """Role of the other side of any conversation this actor is in."""
        return UserRole.USER if self.role == UserRole.SUPERSTAR else UserRole.SUPERSTAR

    def conversations(self) -> QuerySet[Conversation]:
        """All conversations where this actor is the matching party."""
        return Conversation.objects.filter(**{self.party_field: self.id})


def can_access_conversation(actor: Actor, conversation: Conversation) -> bool:
    """Return True if ``actor`` is the party of ``conversation`` for its role."""
    return conversation.party_id(actor.role) == actor.id


def authorize_conversation(
    actor: Actor,
    conversation_id: int,
    queryset: QuerySet[Conversation] | None = None,
) -> ServiceResult[Conversation]:
    """
    Load a conversation and verify the actor may operate on it.

    Args:
        actor: Caller of the operation
        conversation_id: Conversation to load
        queryset: Optional base queryset (e.g. with select_for_update())

    Returns:
        ServiceResult with the Conversation, or a failure with
        CONVERSATION_NOT_FOUND / NOT_PARTICIPANT
    """
    if queryset is None:
        queryset = Conversation.objects.all()

    conversation = queryset.filter(pk=conversation_id).first()
    if conversation is None:
        return ServiceResult.failure(
            "Conversation not found",
            error_code=ErrorCode.CONVERSATION_NOT_FOUND,
        )

    if not can_access_conversation(actor, conversation):
        return ServiceResult.failure(
            "You are not a participant in this conversation",
            error_code=ErrorCode.NOT_PARTICIPANT,
        )

    return ServiceResult.success(conversation)
