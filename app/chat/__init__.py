"""
Chat app for fan/superstar direct messaging.

This app handles:
- Conversations between one user and one superstar
- Message sending, history and deletion
- Attachments stored through Django's storage API
- Read marking and unread counts

Related apps:
    - authentication: User model and roles (user, superstar)

Usage:
    from chat.authorization import Actor
    from chat.services import ConversationService, MessageService

    actor = Actor.from_user(user)
    result = ConversationService.start_conversation(actor, superstar.id)
    conversation = result.data.conversation

    MessageService.send_message(actor, conversation.id, "text", message="Hello!")
"""
