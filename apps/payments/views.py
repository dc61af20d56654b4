"""Payment API views and the Paystack webhook."""

from __future__ import annotations

import structlog
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.users.identity import actor_from_user

from . import paystack
from .models import Payment
from .serializers import PaymentCreateSerializer, PaymentSerializer
from .services import PaystackWebhookHandler, payments_visible_to, register_payment

logger = structlog.get_logger(__name__)


class PaymentViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet,
):
    """Payments a renter made for their bookings."""

    queryset = Payment.objects.select_related("booking")
    permission_classes = [permissions.IsAuthenticated]
    filterset_fields = ["status", "booking"]

    def get_queryset(self):  # type: ignore
        return payments_visible_to(actor_from_user(self.request.user), super().get_queryset())

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return PaymentCreateSerializer
        return PaymentSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        payment = register_payment(actor_from_user(request.user), **serializer.validated_data)
        return Response(PaymentSerializer(payment).data, status=status.HTTP_201_CREATED)


class PaystackWebhookView(APIView):
    """
    Receives Paystack events.

    The raw body is verified against ``x-paystack-signature`` before it is
    parsed. Known charge events update the payment; every verified event
    is acknowledged with 200.
    """

    authentication_classes: list = []
    permission_classes = [permissions.AllowAny]
    throttle_classes: list = []
    handler_class = PaystackWebhookHandler

    def post(self, request, *args, **kwargs):  # type: ignore
        body = request.body
        paystack.verify_signature(body, request.META.get(paystack.SIGNATURE_HEADER), paystack.get_secret_key())
        event = paystack.parse_event(body)
        logger.info("paystack.webhook_received", event_type=event.event, reference=event.reference)
        self.handler_class().handle(event)
        return Response({"message": "Webhook processed"}, status=status.HTTP_200_OK)
