"""Authentication endpoints: register and login both answer with a JWT pair."""

from __future__ import annotations

import structlog
from django.contrib.auth.models import update_last_login  # type: ignore
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken  # type: ignore

from .auth_serializers import LoginSerializer, RegisterSerializer
from .serializers import UserSerializer

logger = structlog.get_logger(__name__)


def session_payload(user) -> dict:
    """Profile plus a fresh refresh/access pair for ``user``."""
    refresh = RefreshToken.for_user(user)
    return {
        "user": UserSerializer(user).data,
        "tokens": {"refresh": str(refresh), "access": str(refresh.access_token)},
    }


class AuthView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []
    throttle_scope = "auth"
    serializer_class = None
    success_status = status.HTTP_200_OK

    def get_user(self, serializer):  # type: ignore
        raise NotImplementedError

    def post(self, request):  # type: ignore
        serializer = self.serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = self.get_user(serializer)
        return Response(session_payload(user), status=self.success_status)


class RegisterView(AuthView):
    """Self-service sign-up as a renter (buyer) or car owner (seller)."""

    serializer_class = RegisterSerializer
    success_status = status.HTTP_201_CREATED

    def get_user(self, serializer):  # type: ignore
        user = serializer.save()
        logger.info("user.registered", user_id=user.pk, role=user.role)
        return user


class LoginView(AuthView):
    serializer_class = LoginSerializer

    def get_user(self, serializer):  # type: ignore
        user = serializer.validated_data["user"]
        update_last_login(None, user)
        logger.info("user.logged_in", user_id=user.pk)
        return user
