"""
Attachment storage for chat messages.

Thin wrapper over Django's storage API (``default_storage``) that:
- Saves uploads under the attachment directory with a time-prefixed name
- Deletes stored attachments on a best-effort basis
- Opens attachments for streaming with a content type detected from their header

Content types are detected with python-magic (libmagic) from the file
header, falling back to the type guessed from the original file name.

Stored names are shortened (keeping the extension) so the path fits
``Message.file_path`` and the file name stays within NAME_MAX bytes.

Usage:
    stored = AttachmentStorage.save(uploaded_file, uploaded_at)
    message.file_path = stored.path
"""

from __future__ import annotations

import logging
import mimetypes
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING
from urllib.parse import quote

import magic
from django.core.exceptions import SuspiciousFileOperation
from django.core.files.storage import default_storage
from django.utils.text import get_valid_filename

from chat.constants import get_setting
from chat.models import Message

if TYPE_CHECKING:
    from datetime import datetime

    from django.core.files import File
    from django.core.files.uploadedfile import UploadedFile

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"
MAGIC_HEADER_BYTES = 2048

# Longest file name most filesystems accept, in bytes
NAME_MAX_BYTES = 255
# Room for the "_<7 chars>" suffix get_available_name() appends on collision
COLLISION_SUFFIX_LENGTH = 8


@dataclass(frozen=True)
class StoredAttachment:
    """Metadata recorded on a Message for a saved upload."""

    path: str
    name: str
    size: int


@dataclass(frozen=True)
class AttachmentContent:
    """An opened stored attachment ready to be streamed."""

    file: File
    content_type: str
    file_name: str

    @property
    def content_disposition(self) -> str:
        return f'inline; filename="{quote(self.file_name, safe="")}"'


def detect_content_type(content: bytes, file_name: str = "") -> str:
    """
    Detect a MIME type from file content.

    Args:
        content: File bytes (only the header is inspected)
        file_name: Original name, used when libmagic gives no answer

    Returns:
        MIME type string, ``application/octet-stream`` if unknown
    """
    header = content[:MAGIC_HEADER_BYTES]
    if header:
        try:
            detected = magic.from_buffer(header, mime=True)
        except magic.MagicException:
            logger.warning("libmagic could not inspect %s", file_name, exc_info=True)
            detected = None
        # libmagic reports unknown binary/plain data generically
        if detected and detected not in (DEFAULT_CONTENT_TYPE, "application/x-empty"):
            return detected

    guessed, _ = mimetypes.guess_type(file_name)
    return guessed or DEFAULT_CONTENT_TYPE


def shorten_filename(name: str, max_chars: int, max_bytes: int) -> str:
    """
    Trim ``name`` to at most ``max_chars`` characters and ``max_bytes``
    UTF-8 bytes, cutting from the stem so the extension survives.
    """
    stem, ext = os.path.splitext(name)
    if len(ext) >= max_chars or len(ext.encode()) >= max_bytes:
        stem, ext = name, ""

    stem = stem[: max_chars - len(ext)]
    while stem and len(f"{stem}{ext}".encode()) > max_bytes:
        stem = stem[:-1]
    return f"{stem}{ext}"


class AttachmentStorage:
    """
    Stores, deletes and opens chat attachments through ``default_storage``.

    All methods are classmethods; the backend is whatever the STORAGES
    setting configures (local filesystem by default).
    """

    @classmethod
    def max_path_length(cls) -> int:
        return Message._meta.get_field("file_path").max_length

    @classmethod
    def build_path(cls, original_name: str, uploaded_at: datetime) -> str:
        """Storage path ``<dir>/<unix time>_<sanitized original name>``."""
        try:
            safe_name = get_valid_filename(original_name)
        except SuspiciousFileOperation:
            safe_name = "attachment"

        prefix = f"{get_setting('ATTACHMENT_DIR')}/{int(uploaded_at.timestamp())}_"
        basename_prefix = prefix.rsplit("/", 1)[-1]
        safe_name = shorten_filename(
            safe_name,
            max_chars=cls.max_path_length() - len(prefix) - COLLISION_SUFFIX_LENGTH,
            max_bytes=NAME_MAX_BYTES - len(basename_prefix.encode()) - COLLISION_SUFFIX_LENGTH,
        )
        return f"{prefix}{safe_name or 'attachment'}"

    @classmethod
    def save(cls, upload: UploadedFile, uploaded_at: datetime) -> StoredAttachment:
        """
        Persist an upload and return the metadata to record on the message.

        The storage backend may adjust the name to avoid overwriting an
        existing file; the returned path is the one actually used.
        """
        path = default_storage.save(
            cls.build_path(upload.name, uploaded_at),
            upload,
            max_length=cls.max_path_length(),
        )
        logger.debug(f"Stored chat attachment {path} ({upload.size} bytes)")
        return StoredAttachment(path=path, name=upload.name, size=upload.size)

    @classmethod
    def exists(cls, path: str) -> bool:
        return bool(path) and default_storage.exists(path)

    @classmethod
    def delete(cls, path: str) -> bool:
        """
        Delete a stored attachment if it exists.

        Backend errors are logged and reported as False; they never
        propagate to the caller.

        Returns:
            True if a stored object was removed
        """
        try:
            if not default_storage.exists(path):
                return False
            default_storage.delete(path)
        except Exception:
            logger.warning(f"Failed to delete chat attachment {path}", exc_info=True)
            return False
        return True

    @classmethod
    def read(cls, path: str, file_name: str) -> AttachmentContent:
        """
        Open a stored attachment for streaming.

        Only the header is read to detect the content type; the returned
        file is rewound and left open for the response to stream and close.

        Raises:
            FileNotFoundError: If nothing is stored at ``path``
        """
        if not cls.exists(path):
            raise FileNotFoundError(f"File not found: {path}")

        stored = default_storage.open(path, "rb")
        header = stored.read(MAGIC_HEADER_BYTES)
        stored.seek(0)

        return AttachmentContent(
            file=stored,
            content_type=detect_content_type(header, file_name),
            file_name=file_name,
        )
