"""
Base service layer patterns for business logic encapsulation.

This module provides the foundations every domain service builds on:
- ServiceResult: Standard result wrapper for consistent success/failure handling
- BaseService: Base class with logging, transactions and an injectable clock

Service Layer Philosophy:
    Views handle HTTP concerns, models handle data, services handle logic.
    Expected failures (validation, authorization, missing rows) come back as
    ServiceResult.failure(); unexpected failures (database, storage) raise.

Usage:
    from core.services import BaseService, ServiceResult

    class ConversationService(BaseService):
        @classmethod
        def end(cls, conversation) -> ServiceResult[Conversation]:
            with cls.atomic():
                conversation.ended_at = cls.now()
                conversation.save(update_fields=["ended_at", "updated_at"])

            cls.get_logger().info(f"Ended conversation {conversation.id}")
            return ServiceResult.success(conversation)
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

from django.db import transaction
from django.utils import timezone

if TYPE_CHECKING:
    from collections.abc import Callable, Generator
    from datetime import datetime
    from typing import Any

T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    Standard result wrapper for service operations.

    Attributes:
        success: Whether the operation succeeded
        data: Result data if successful (None if failed)
        error: Error message if failed (None if successful)
        error_code: Machine-readable code for client handling
        errors: Field-level errors for validation failures

    Usage:
        result = MessageService.mark_as_read(actor, conversation_id)
        if result.success:
            marked = result.data
        else:
            print(f"Error: {result.error} ({result.error_code})")
    """

    success: bool
    data: T | None = None
    error: str | None = None
    error_code: str | None = None
    errors: dict[str, list[str]] | None = field(default=None)

    @classmethod
    def success(cls, data: T) -> ServiceResult[T]:
        """
        Create a successful result.

        Example:
            message = Message.objects.create(...)
            return ServiceResult.success(message)
        """
        return cls(success=True, data=data)

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
        errors: dict[str, list[str]] | None = None,
    ) -> ServiceResult[T]:
        """
        Create a failed result.

        Args:
            error: Human-readable error message
            error_code: Machine-readable error code for client handling
            errors: Field-level errors (for validation failures)

        Example:
            return ServiceResult.failure(
                "Validation failed",
                error_code="VALIDATION_ERROR",
                errors={"message": ["This field is required when no file is attached."]},
            )
        """
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            errors=errors,
        )

    def to_response(self) -> dict[str, Any]:
        """
        Convert a failed result to the API error body.

        Returns:
            Dict with error and error_code, plus field errors when present
        """
        response: dict[str, Any] = {
            "error": self.error,
            "error_code": self.error_code,
        }
        if self.errors:
            response["errors"] = self.errors
        return response

    def __bool__(self) -> bool:
        """Allow ``if result:`` as a shorthand for ``if result.success:``."""
        return self.success


class BaseService:
    """
    Base class for service layer classes.

    Provides common utilities for services:
    - Logging setup per service
    - Database transaction management
    - Injectable clock for timestamps

    Design Notes:
        - Use @classmethod (no instance state)
        - Use ServiceResult for expected failures
        - Raise exceptions for unexpected failures
        - Replace ``clock`` in tests to pin read_at/started_at/ended_at
    """

    clock: Callable[[], datetime] = staticmethod(timezone.now)

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """
        Get logger for this service.

        Returns:
            Logger named ``<module>.<ClassName>`` for easy filtering in logs
        """
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    def now(cls) -> datetime:
        """Current time according to the service clock."""
        return cls.clock()

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """
        Execute operations in a database transaction.

        Thin wrapper around Django's transaction.atomic() that makes
        transaction boundaries explicit in service code.
        """
        with transaction.atomic():
            yield
