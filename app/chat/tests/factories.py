"""
Factory Boy factories for chat models.

Provides realistic test data generation for:
- Conversation: Active conversation between a fan and a superstar
- Message: Text messages from either side, optionally with an attachment

Usage:
    from chat.tests.factories import ConversationFactory, MessageFactory

    conversation = ConversationFactory()
    message = MessageFactory(conversation=conversation)               # from the user
    reply = SuperstarMessageFactory(conversation=conversation)        # from the superstar
"""

import factory
from django.utils import timezone

from authentication.models import UserRole
from authentication.tests.factories import SuperstarFactory, UserFactory
from chat.models import Conversation, ConversationStatus, Message, MessageType


class ConversationFactory(factory.django.DjangoModelFactory):
    """
    Factory for Conversation model.

    Examples:
        conversation = ConversationFactory()
        conversation = ConversationFactory(status=ConversationStatus.ENDED)
        conversation = ConversationFactory(user=fan, superstar=star)
    """

    class Meta:
        model = Conversation

    user = factory.SubFactory(UserFactory)
    superstar = factory.SubFactory(SuperstarFactory)
    status = ConversationStatus.ACTIVE
    started_at = factory.LazyFunction(timezone.now)
    ended_at = None


class MessageFactory(factory.django.DjangoModelFactory):
    """
    Factory for messages sent by the conversation's user side.

    Examples:
        message = MessageFactory(conversation=conversation)
        message = MessageFactory(conversation=conversation, is_read=True)
    """

    class Meta:
        model = Message

    conversation = factory.SubFactory(ConversationFactory)
    sender_type = UserRole.USER
    sender = factory.LazyAttribute(lambda o: o.conversation.user)
    message_type = MessageType.TEXT
    message = factory.Faker("sentence")
    is_read = False
    read_at = factory.LazyAttribute(lambda o: timezone.now() if o.is_read else None)


class SuperstarMessageFactory(MessageFactory):
    """Factory for messages sent by the conversation's superstar side."""

    sender_type = UserRole.SUPERSTAR
    sender = factory.LazyAttribute(lambda o: o.conversation.superstar)


class AttachmentMessageFactory(MessageFactory):
    """
    Message carrying attachment metadata only (no stored bytes).

    Tests that need the file to exist should save it through
    AttachmentStorage and pass file_path explicitly.
    """

    message_type = MessageType.IMAGE
    message = None
    file_path = factory.Sequence(lambda n: f"chat_files/1700000000_photo{n}.png")
    file_name = factory.Sequence(lambda n: f"photo{n}.png")
    file_size = 1024
