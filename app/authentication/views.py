"""
Authentication views.

Token endpoints come straight from djangorestframework-simplejwt and are
wired in urls.py:
    - Obtain: /api/v1/auth/token/
    - Refresh: /api/v1/auth/token/refresh/

This module adds the identity endpoint clients use to learn which side of
the platform (user or superstar) a token belongs to, and therefore which
chat prefix to call.
"""

from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.serializers import MeSerializer


class MeView(APIView):
    """
    Return the authenticated account's identity.

    URL: /api/v1/auth/me/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="auth_me",
        summary="Get current account",
        description="Identity and role of the account the bearer token belongs to.",
        tags=["Auth"],
        responses={200: MeSerializer},
    )
    def get(self, request):
        serializer = MeSerializer(request.user)
        return Response(serializer.data)
