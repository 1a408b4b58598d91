"""
Offset pagination for chat lists.

This module provides page-number pagination shared by the conversation and
message lists:
- paginate(): Slice an ordered queryset and compute page metadata
- Page: The slice plus its metadata, serialized as ``pagination``

Design Decisions:
    - Pages are 1-based; last_page is never below 1, even for empty results
    - A page beyond the last returns no items and null from/to
    - Total is a single COUNT query; items are a single LIMIT/OFFSET query
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """
    One window of an ordered result set.

    Attributes:
        items: Objects on this page, in query order
        current_page: 1-based page number requested
        per_page: Page size requested
        total: Number of objects across all pages
    """

    items: list[T] = field(default_factory=list)
    current_page: int = 1
    per_page: int = 15
    total: int = 0

    @property
    def last_page(self) -> int:
        return max(1, math.ceil(self.total / self.per_page))

    @property
    def has_more_pages(self) -> bool:
        return self.current_page < self.last_page

    @property
    def first_item_index(self) -> int | None:
        """1-based index of the first item on this page (None when empty)."""
        if not self.items:
            return None
        return (self.current_page - 1) * self.per_page + 1

    @property
    def last_item_index(self) -> int | None:
        """1-based index of the last item on this page (None when empty)."""
        if not self.items:
            return None
        return (self.current_page - 1) * self.per_page + len(self.items)

    def reversed(self) -> Page[T]:
        """Same window with items in the opposite order."""
        return Page(
            items=list(reversed(self.items)),
            current_page=self.current_page,
            per_page=self.per_page,
            total=self.total,
        )

    def metadata(self) -> dict[str, Any]:
        """Pagination block of list responses."""
        return {
            "current_page": self.current_page,
            "last_page": self.last_page,
            "per_page": self.per_page,
            "total": self.total,
            "from": self.first_item_index,
            "to": self.last_item_index,
            "has_more_pages": self.has_more_pages,
        }


def paginate(queryset, page: int = 1, per_page: int = 15) -> Page:
    """
    Return one page of an ordered queryset (or list).

    Args:
        queryset: Ordered QuerySet or sequence
        page: 1-based page number
        per_page: Page size

    Raises:
        ValueError: If page or per_page is below 1
    """
    if page < 1:
        raise ValueError("page must be >= 1")
    if per_page < 1:
        raise ValueError("per_page must be >= 1")

    if isinstance(queryset, (list, tuple)):
        total = len(queryset)
    else:
        total = queryset.count()

    offset = (page - 1) * per_page
    items = list(queryset[offset:offset + per_page]) if offset < total else []

    return Page(items=items, current_page=page, per_page=per_page, total=total)
