"""
Tests for chat API views.

Tests focus on observable HTTP behavior for both role-scoped prefixes:
- Response status codes and error bodies
- Response body structure
- Role enforcement (wrong role 403, anonymous 401)
"""

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework import status

from chat.models import ConversationStatus, Message
from chat.tests.conftest import PNG_BYTES
from chat.tests.factories import (
    ConversationFactory,
    MessageFactory,
    SuperstarMessageFactory,
)

USER_CHAT = "/api/v1/user/chat"
STAR_CHAT = "/api/v1/superstar/chat"


# =============================================================================
# Role enforcement
# =============================================================================


@pytest.mark.django_db
class TestRoleEnforcement:
    """Each prefix only serves its own role."""

    def test_anonymous_is_rejected(self, api_client):
        response = api_client.get(f"{USER_CHAT}/conversations")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_superstar_cannot_use_user_prefix(self, star_client):
        response = star_client.get(f"{USER_CHAT}/conversations")

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_user_cannot_use_superstar_prefix(self, user_client):
        response = user_client.get(f"{STAR_CHAT}/unread-count")

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_superstar_prefix_has_no_start(self, star_client, other_star):
        response = star_client.post(f"{STAR_CHAT}/start/{other_star.id}")

        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# GET conversations
# =============================================================================


@pytest.mark.django_db
class TestConversationListView:
    """Tests for GET .../conversations."""

    def test_lists_with_counterpart_and_latest_message(self, user_client, conversation, star):
        latest = SuperstarMessageFactory(conversation=conversation, message="hey fan")

        response = user_client.get(f"{USER_CHAT}/conversations")

        assert response.status_code == status.HTTP_200_OK
        item = response.data["conversations"][0]
        assert item["id"] == conversation.id
        assert item["user_id"] == conversation.user_id
        assert item["superstar_id"] == star.id
        assert item["counterpart"]["id"] == star.id
        assert item["counterpart"]["role"] == "superstar"
        assert item["counterpart"]["name"] == "Star One"
        assert item["latest_message"]["id"] == latest.id
        assert item["latest_message"]["message"] == "hey fan"

    def test_superstar_sees_fan_as_counterpart(self, star_client, conversation, fan):
        response = star_client.get(f"{STAR_CHAT}/conversations")

        item = response.data["conversations"][0]
        assert item["counterpart"]["id"] == fan.id
        assert item["latest_message"] is None

    def test_parties_and_counterpart_share_identity_shape(self, star_client, conversation, fan):
        response = star_client.get(f"{STAR_CHAT}/conversations")

        item = response.data["conversations"][0]
        assert item["user"] == item["counterpart"]
        assert set(item["superstar"]) == set(item["counterpart"])
        assert item["user"]["display_name"] == "Fan One"
        assert item["superstar"]["role"] == "superstar"

    def test_pagination_block(self, user_client, fan):
        for _ in range(3):
            ConversationFactory(user=fan)

        response = user_client.get(f"{USER_CHAT}/conversations", {"per_page": 2, "page": 2})

        assert len(response.data["conversations"]) == 1
        assert response.data["pagination"] == {
            "current_page": 2,
            "last_page": 2,
            "per_page": 2,
            "total": 3,
            "from": 3,
            "to": 3,
            "has_more_pages": False,
        }

    def test_status_filter(self, user_client, fan, conversation):
        ConversationFactory(user=fan, status=ConversationStatus.ENDED)

        response = user_client.get(f"{USER_CHAT}/conversations", {"status": "ended"})

        assert response.data["pagination"]["total"] == 1
        assert response.data["conversations"][0]["status"] == "ended"

    @pytest.mark.parametrize(
        "params, field",
        [
            ({"status": "archived"}, "status"),
            ({"page": 0}, "page"),
            ({"per_page": 101}, "per_page"),
            ({"per_page": "many"}, "per_page"),
        ],
    )
    def test_invalid_query_is_422(self, user_client, params, field):
        response = user_client.get(f"{USER_CHAT}/conversations", params)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.data["error_code"] == "VALIDATION_ERROR"
        assert field in response.data["errors"]


# =============================================================================
# POST start/{superstar_id}
# =============================================================================


@pytest.mark.django_db
class TestStartConversationView:
    """Tests for POST /api/v1/user/chat/start/{superstar_id}."""

    def test_creates_conversation(self, user_client, star):
        response = user_client.post(f"{USER_CHAT}/start/{star.id}")

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["created"] is True
        assert response.data["conversation"]["superstar_id"] == star.id
        assert response.data["conversation"]["status"] == "active"

    def test_returns_existing(self, user_client, conversation, star):
        response = user_client.post(f"{USER_CHAT}/start/{star.id}")

        assert response.status_code == status.HTTP_200_OK
        assert response.data["created"] is False
        assert response.data["conversation"]["id"] == conversation.id

    def test_blocked(self, user_client, conversation, star):
        conversation.status = ConversationStatus.BLOCKED
        conversation.save()

        response = user_client.post(f"{USER_CHAT}/start/{star.id}")

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data["error_code"] == "CONVERSATION_BLOCKED"

    def test_unknown_superstar(self, user_client, other_fan):
        response = user_client.post(f"{USER_CHAT}/start/{other_fan.id}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["error_code"] == "SUPERSTAR_NOT_FOUND"


# =============================================================================
# GET messages/{conversation_id}
# =============================================================================


@pytest.mark.django_db
class TestMessageListView:
    """Tests for GET .../messages/{conversation_id}."""

    def test_page_one_is_latest_in_ascending_order(self, star_client, conversation):
        messages = MessageFactory.create_batch(50, conversation=conversation)

        response = star_client.get(f"{STAR_CHAT}/messages/{conversation.id}", {"per_page": 20})

        ids = [m["id"] for m in response.data["messages"]]
        assert ids == [m.id for m in messages[30:]]
        assert response.data["pagination"]["has_more_pages"] is True
        assert response.data["pagination"]["from"] == 1
        assert response.data["pagination"]["to"] == 20

    def test_message_fields(self, user_client, conversation, fan):
        MessageFactory(conversation=conversation, message="hello")

        response = user_client.get(f"{USER_CHAT}/messages/{conversation.id}")

        message = response.data["messages"][0]
        assert set(message) == {
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
        }
        assert message["sender_type"] == "user"
        assert message["sender_id"] == fan.id

    def test_non_participant_is_403(self, authenticated_client_factory, other_fan, conversation):
        client = authenticated_client_factory(other_fan)

        response = client.get(f"{USER_CHAT}/messages/{conversation.id}")

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data == {
            "error": "You are not a participant in this conversation",
            "error_code": "NOT_PARTICIPANT",
        }

    def test_missing_conversation_is_404(self, user_client):
        response = user_client.get(f"{USER_CHAT}/messages/999999")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["error_code"] == "CONVERSATION_NOT_FOUND"


# =============================================================================
# POST send/{conversation_id}
# =============================================================================


@pytest.mark.django_db
class TestSendMessageView:
    """Tests for POST .../send/{conversation_id}."""

    def test_send_text_json(self, user_client, conversation, fan):
        response = user_client.post(
            f"{USER_CHAT}/send/{conversation.id}",
            {"message_type": "text", "message": "Big fan!"},
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        body = response.data["message"]
        assert body["message"] == "Big fan!"
        assert body["sender_type"] == "user"
        assert body["sender_id"] == fan.id
        assert body["conversation"]["id"] == conversation.id

    def test_send_file_only_multipart(self, star_client, conversation):
        upload = SimpleUploadedFile("selfie.png", PNG_BYTES, content_type="image/png")

        response = star_client.post(
            f"{STAR_CHAT}/send/{conversation.id}",
            {"message_type": "image", "file": upload},
            format="multipart",
        )

        assert response.status_code == status.HTTP_201_CREATED
        body = response.data["message"]
        assert body["message"] is None
        assert body["file_name"] == "selfie.png"
        assert body["file_size"] == len(PNG_BYTES)
        assert body["sender_type"] == "superstar"

    def test_send_file_with_long_name(self, user_client, conversation):
        name = "a" * 246 + ".png"
        upload = SimpleUploadedFile(name, PNG_BYTES, content_type="image/png")

        response = user_client.post(
            f"{USER_CHAT}/send/{conversation.id}",
            {"message_type": "image", "file": upload},
            format="multipart",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["message"]["file_name"] == name
        assert response.data["message"]["file_path"].endswith(".png")

    def test_missing_message_and_file_is_422(self, user_client, conversation):
        response = user_client.post(
            f"{USER_CHAT}/send/{conversation.id}",
            {"message_type": "text"},
            format="json",
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.data["error"] == "Validation failed"
        assert "message" in response.data["errors"]

    def test_invalid_message_type_is_422(self, user_client, conversation):
        response = user_client.post(
            f"{USER_CHAT}/send/{conversation.id}",
            {"message_type": "sticker", "message": "hi"},
            format="json",
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert "message_type" in response.data["errors"]

    def test_oversized_file_is_422(self, user_client, conversation, settings):
        settings.CHAT_ATTACHMENT_MAX_BYTES = 16
        upload = SimpleUploadedFile("big.png", PNG_BYTES, content_type="image/png")

        response = user_client.post(
            f"{USER_CHAT}/send/{conversation.id}",
            {"message_type": "image", "file": upload},
            format="multipart",
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert "file" in response.data["errors"]
        assert Message.objects.count() == 0

    def test_non_participant_is_403(self, authenticated_client_factory, other_star, conversation):
        client = authenticated_client_factory(other_star)

        response = client.post(
            f"{STAR_CHAT}/send/{conversation.id}",
            {"message_type": "text", "message": "intruding"},
            format="json",
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert Message.objects.count() == 0


# =============================================================================
# POST read/{conversation_id}, GET unread-count
# =============================================================================


@pytest.mark.django_db
class TestReadViews:
    """Tests for read marking and unread counting."""

    def test_unread_count_then_mark_read(self, user_client, conversation):
        SuperstarMessageFactory.create_batch(3, conversation=conversation)

        before = user_client.get(f"{USER_CHAT}/unread-count")
        marked = user_client.post(f"{USER_CHAT}/read/{conversation.id}")
        again = user_client.post(f"{USER_CHAT}/read/{conversation.id}")
        after = user_client.get(f"{USER_CHAT}/unread-count")

        assert before.data == {"unread_count": 3}
        assert marked.status_code == status.HTTP_200_OK
        assert marked.data["messages_marked"] == 3
        assert "message" in marked.data
        assert again.data["messages_marked"] == 0
        assert after.data == {"unread_count": 0}

    def test_superstar_unread_count(self, star_client, conversation):
        MessageFactory.create_batch(2, conversation=conversation)
        SuperstarMessageFactory(conversation=conversation)

        response = star_client.get(f"{STAR_CHAT}/unread-count")

        assert response.data == {"unread_count": 2}

    def test_mark_read_non_participant(self, authenticated_client_factory, other_fan, conversation):
        client = authenticated_client_factory(other_fan)

        response = client.post(f"{USER_CHAT}/read/{conversation.id}")

        assert response.status_code == status.HTTP_403_FORBIDDEN


# =============================================================================
# PUT conversation/{conversation_id}/status
# =============================================================================


@pytest.mark.django_db
class TestConversationStatusView:
    """Tests for PUT .../conversation/{conversation_id}/status."""

    def test_end_conversation(self, star_client, conversation, fan):
        response = star_client.put(
            f"{STAR_CHAT}/conversation/{conversation.id}/status",
            {"status": "ended"},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["conversation"]["status"] == "ended"
        assert response.data["conversation"]["ended_at"] is not None
        assert response.data["conversation"]["user"]["id"] == fan.id
        assert "message" in response.data

    def test_invalid_status_is_422(self, user_client, conversation):
        response = user_client.put(
            f"{USER_CHAT}/conversation/{conversation.id}/status",
            {"status": "paused"},
            format="json",
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert "status" in response.data["errors"]

    def test_non_participant_is_403(self, authenticated_client_factory, other_star, conversation):
        client = authenticated_client_factory(other_star)

        response = client.put(
            f"{STAR_CHAT}/conversation/{conversation.id}/status",
            {"status": "blocked"},
            format="json",
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN


# =============================================================================
# DELETE message/{message_id}, GET file/{message_id}
# =============================================================================


@pytest.mark.django_db
class TestMessageViews:
    """Tests for deleting messages and downloading attachments."""

    def test_delete_own_message(self, user_client, conversation):
        message = MessageFactory(conversation=conversation)

        response = user_client.delete(f"{USER_CHAT}/message/{message.id}")

        assert response.status_code == status.HTTP_200_OK
        assert "message" in response.data
        assert not Message.objects.filter(pk=message.id).exists()

    def test_delete_not_owned_is_404(self, star_client, conversation):
        message = MessageFactory(conversation=conversation)

        response = star_client.delete(f"{STAR_CHAT}/message/{message.id}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["error_code"] == "MESSAGE_NOT_FOUND"
        assert Message.objects.filter(pk=message.id).exists()

    def test_download_attachment(self, user_client, star_client, conversation):
        upload = SimpleUploadedFile("pic.png", PNG_BYTES, content_type="image/png")
        sent = user_client.post(
            f"{USER_CHAT}/send/{conversation.id}",
            {"message_type": "image", "file": upload},
            format="multipart",
        )

        response = star_client.get(f"{STAR_CHAT}/file/{sent.data['message']['id']}")

        assert response.status_code == status.HTTP_200_OK
        assert b"".join(response.streaming_content) == PNG_BYTES
        assert response["Content-Type"] == "image/png"
        assert response["Content-Disposition"] == 'inline; filename="pic.png"'

    def test_download_without_attachment_is_404(self, user_client, conversation):
        message = MessageFactory(conversation=conversation)

        response = user_client.get(f"{USER_CHAT}/file/{message.id}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["error_code"] == "ATTACHMENT_NOT_FOUND"
