"""
Permission classes for chat API.

Chat endpoints are mounted twice, once under the user prefix and once under
the superstar prefix. The view records which role its prefix serves in
``actor_role``; HasActorRole rejects callers of the other role.

Conversation membership is not checked here: that is the service layer's
job (see chat.authorization), so that both roles share one check.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rest_framework import permissions

if TYPE_CHECKING:
    from rest_framework.request import Request
    from rest_framework.views import APIView


class HasActorRole(permissions.BasePermission):
    """
    Allows access only to authenticated accounts whose role matches the view.

    Views without an ``actor_role`` accept any authenticated account.
    """

    message = "Your account role cannot use this endpoint."

    def has_permission(self, request: Request, view: APIView) -> bool:
        if not request.user or not request.user.is_authenticated:
            return False

        expected = getattr(view, "actor_role", None)
        if expected is None:
            return True
        return request.user.role == expected
