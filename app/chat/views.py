"""
API views for chat.

Every view serves both sides of the platform: urls.py mounts it under the
user prefix and under the superstar prefix, passing ``actor_role`` to
``as_view()``. The caller's role must match (HasActorRole); membership of
the conversation is checked by the service layer.

URL Structure (relative to /api/v1/user/chat/ and /api/v1/superstar/chat/):
    conversations                     GET     List conversations
    unread-count                      GET     Unread messages across conversations
    messages/{conversation_id}        GET     Page of messages (oldest-first)
    send/{conversation_id}            POST    Send text and/or attachment
    read/{conversation_id}            POST    Mark the other party's messages read
    conversation/{conversation_id}/status  PUT  Change conversation status
    message/{message_id}              DELETE  Delete own message
    file/{message_id}                 GET     Download a message attachment
    start/{superstar_id}              POST    Start a chat (user prefix only)

Error Responses:
    {"error": "...", "error_code": "..."} with the status from ERROR_STATUS;
    validation failures are 422 and add an ``errors`` field map.
"""

from __future__ import annotations

from django.http import FileResponse
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from chat.authorization import Actor
from chat.constants import ErrorCode
from chat.permissions import HasActorRole
from chat.serializers import (
    ConversationListQuerySerializer,
    ConversationListSerializer,
    ConversationSerializer,
    ConversationStatusSerializer,
    MessageCreateSerializer,
    MessageSerializer,
    MessageWithConversationSerializer,
    PageQuerySerializer,
)
from chat.services import ConversationService, MessageService

ERROR_STATUS = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.CONVERSATION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.MESSAGE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.SUPERSTAR_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ATTACHMENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.NOT_PARTICIPANT: status.HTTP_403_FORBIDDEN,
    ErrorCode.CONVERSATION_BLOCKED: status.HTTP_403_FORBIDDEN,
}

PAGE_PARAMETERS = [
    OpenApiParameter(name="page", type=OpenApiTypes.INT, location=OpenApiParameter.QUERY),
    OpenApiParameter(name="per_page", type=OpenApiTypes.INT, location=OpenApiParameter.QUERY),
]


class ChatAPIView(APIView):
    """
    Base view for role-scoped chat endpoints.

    Attributes:
        actor_role: Role served by the mounted prefix (set via as_view())
    """

    actor_role: str | None = None
    permission_classes = [IsAuthenticated, HasActorRole]

    def get_actor(self) -> Actor:
        return Actor.from_user(self.request.user)

    def error_response(self, result) -> Response:
        """Render a failed ServiceResult."""
        return Response(
            result.to_response(),
            status=ERROR_STATUS.get(result.error_code, status.HTTP_400_BAD_REQUEST),
        )

    def validation_error_response(self, errors) -> Response:
        """Render serializer errors as a 422 response."""
        return Response(
            {
                "error": "Validation failed",
                "error_code": ErrorCode.VALIDATION_ERROR,
                "errors": errors,
            },
            status=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )


class ConversationListView(ChatAPIView):
    """
    List the caller's conversations, most recently updated first.

    Each item carries the counterpart's identity and only the latest message.
    """

    @extend_schema(
        summary="List conversations",
        tags=["Chat - Conversations"],
        parameters=PAGE_PARAMETERS + [
            OpenApiParameter(name="status", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY),
        ],
        responses={200: ConversationListSerializer(many=True)},
    )
    def get(self, request):
        query = ConversationListQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return self.validation_error_response(query.errors)

        actor = self.get_actor()
        result = ConversationService.list_conversations(
            actor,
            status=query.validated_data.get("status"),
            page=query.validated_data["page"],
            per_page=query.validated_data.get("per_page"),
        )
        if not result.success:
            return self.error_response(result)

        page = result.data
        return Response(
            {
                "conversations": ConversationListSerializer(
                    page.items, many=True, context={"actor": actor}
                ).data,
                "pagination": page.metadata(),
            }
        )


class StartConversationView(ChatAPIView):
    """
    Start a chat with a superstar, or resume the active one.

    POST /api/v1/user/chat/start/{superstar_id}
    """

    @extend_schema(
        summary="Start conversation with a superstar",
        tags=["Chat - Conversations"],
        request=None,
        responses={
            200: OpenApiResponse(description="Existing active conversation"),
            201: OpenApiResponse(description="New conversation created"),
            403: OpenApiResponse(description="Conversation blocked"),
            404: OpenApiResponse(description="Superstar not found"),
        },
    )
    def post(self, request, superstar_id):
        result = ConversationService.start_conversation(self.get_actor(), superstar_id)
        if not result.success:
            return self.error_response(result)

        started = result.data
        return Response(
            {
                "message": "Conversation started" if started.created else "Conversation already active",
                "conversation": ConversationSerializer(started.conversation).data,
                "created": started.created,
            },
            status=status.HTTP_201_CREATED if started.created else status.HTTP_200_OK,
        )


class ConversationStatusView(ChatAPIView):
    """Change a conversation's status (active, ended, blocked)."""

    @extend_schema(
        summary="Update conversation status",
        tags=["Chat - Conversations"],
        request=ConversationStatusSerializer,
        responses={200: ConversationSerializer},
    )
    def put(self, request, conversation_id):
        serializer = ConversationStatusSerializer(data=request.data)
        if not serializer.is_valid():
            return self.validation_error_response(serializer.errors)

        result = ConversationService.update_status(
            self.get_actor(), conversation_id, serializer.validated_data["status"]
        )
        if not result.success:
            return self.error_response(result)

        return Response(
            {
                "message": "Conversation status updated",
                "conversation": ConversationSerializer(result.data).data,
            }
        )


class MessageListView(ChatAPIView):
    """One page of a conversation; page 1 holds the newest messages, oldest-first."""

    @extend_schema(
        summary="List messages",
        tags=["Chat - Messages"],
        parameters=PAGE_PARAMETERS,
        responses={200: MessageSerializer(many=True)},
    )
    def get(self, request, conversation_id):
        query = PageQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return self.validation_error_response(query.errors)

        result = MessageService.list_messages(
            self.get_actor(),
            conversation_id,
            page=query.validated_data["page"],
            per_page=query.validated_data.get("per_page"),
        )
        if not result.success:
            return self.error_response(result)

        page = result.data
        return Response(
            {
                "messages": MessageSerializer(page.items, many=True).data,
                "pagination": page.metadata(),
            }
        )


class SendMessageView(ChatAPIView):
    """
    Send a message, optionally with an attachment (multipart).

    Payload:
        message_type: text, image, video or file
        message: Text body (required unless file is present)
        file: Attachment (max 10 MB by default)
    """

    parser_classes = [MultiPartParser, FormParser, JSONParser]

    @extend_schema(
        summary="Send message",
        tags=["Chat - Messages"],
        request=MessageCreateSerializer,
        responses={
            201: MessageWithConversationSerializer,
            403: OpenApiResponse(description="Not a participant"),
            404: OpenApiResponse(description="Conversation not found"),
            422: OpenApiResponse(description="Validation failed"),
        },
    )
    def post(self, request, conversation_id):
        serializer = MessageCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return self.validation_error_response(serializer.errors)

        result = MessageService.send_message(
            self.get_actor(),
            conversation_id,
            message_type=serializer.validated_data["message_type"],
            message=serializer.validated_data["message"],
            file=serializer.validated_data["file"],
        )
        if not result.success:
            return self.error_response(result)

        return Response(
            {"message": MessageWithConversationSerializer(result.data).data},
            status=status.HTTP_201_CREATED,
        )


class MarkAsReadView(ChatAPIView):
    """Mark every unread message from the other party as read."""

    @extend_schema(
        summary="Mark messages as read",
        tags=["Chat - Messages"],
        request=None,
        responses={200: OpenApiResponse(description="Number of messages marked")},
    )
    def post(self, request, conversation_id):
        result = MessageService.mark_as_read(self.get_actor(), conversation_id)
        if not result.success:
            return self.error_response(result)

        return Response(
            {"message": "Messages marked as read", "messages_marked": result.data}
        )


class UnreadCountView(ChatAPIView):
    """Unread messages from the other party across all conversations."""

    @extend_schema(
        summary="Get unread count",
        tags=["Chat - Messages"],
        responses={200: OpenApiResponse(description="Total unread messages")},
    )
    def get(self, request):
        result = MessageService.get_unread_count(self.get_actor())
        return Response({"unread_count": result.data})


class DeleteMessageView(ChatAPIView):
    """Delete one of the caller's own messages and its attachment."""

    @extend_schema(
        summary="Delete message",
        tags=["Chat - Messages"],
        responses={
            200: OpenApiResponse(description="Message deleted"),
            404: OpenApiResponse(description="Not found or not owned"),
        },
    )
    def delete(self, request, message_id):
        result = MessageService.delete_message(self.get_actor(), message_id)
        if not result.success:
            return self.error_response(result)

        return Response({"message": "Message deleted successfully"})


class MessageFileView(ChatAPIView):
    """Serve a message attachment inline with its detected content type."""

    @extend_schema(
        summary="Get message attachment",
        tags=["Chat - Messages"],
        responses={
            (200, "application/octet-stream"): OpenApiTypes.BINARY,
            403: OpenApiResponse(description="Not a participant"),
            404: OpenApiResponse(description="Message or attachment not found"),
        },
    )
    def get(self, request, message_id):
        result = MessageService.get_attachment(self.get_actor(), message_id)
        if not result.success:
            return self.error_response(result)

        attachment = result.data
        response = FileResponse(attachment.file, content_type=attachment.content_type)
        response["Content-Disposition"] = attachment.content_disposition
        return response
