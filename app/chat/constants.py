"""
Constants and configuration for the chat module.

Values that operators may need to tune are read from Django settings with
the defaults below.

Import example:
    from chat.constants import CHAT_CONFIG, ErrorCode
"""

from typing import Final

from django.conf import settings


class CHAT_CONFIG:
    """Defaults for attachment handling and pagination."""

    # Attachments
    ATTACHMENT_MAX_BYTES: Final[int] = 10 * 1024 * 1024  # 10 MB
    ATTACHMENT_DIR: Final[str] = "chat_files"

    # Pagination
    CONVERSATIONS_PAGE_SIZE: Final[int] = 15
    MESSAGES_PAGE_SIZE: Final[int] = 20
    MAX_PAGE_SIZE: Final[int] = 100


def get_setting(name: str):
    """Read ``CHAT_<name>`` from settings, falling back to CHAT_CONFIG."""
    return getattr(settings, f"CHAT_{name}", getattr(CHAT_CONFIG, name))


class ErrorCode:
    """Machine-readable error codes returned in API error bodies."""

    VALIDATION_ERROR: Final[str] = "VALIDATION_ERROR"
    CONVERSATION_NOT_FOUND: Final[str] = "CONVERSATION_NOT_FOUND"
    MESSAGE_NOT_FOUND: Final[str] = "MESSAGE_NOT_FOUND"
    SUPERSTAR_NOT_FOUND: Final[str] = "SUPERSTAR_NOT_FOUND"
    ATTACHMENT_NOT_FOUND: Final[str] = "ATTACHMENT_NOT_FOUND"
    NOT_PARTICIPANT: Final[str] = "NOT_PARTICIPANT"
    CONVERSATION_BLOCKED: Final[str] = "CONVERSATION_BLOCKED"
