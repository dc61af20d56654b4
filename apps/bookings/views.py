"""API views for the booking domain."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.identity import actor_from_user

from .models import Booking
from .serializers import BookingCreateSerializer, BookingSerializer, BookingUpdateSerializer
from .services import BookingService, bookings_visible_to


class BookingViewSet(viewsets.ModelViewSet):
    """
    Viewset for creating and managing bookings.

    Reads are scoped to the bookings the caller rents or owns the car of
    (administrators see everything). Writes go through ``BookingService``.
    """

    queryset = Booking.objects.select_related("car", "car__owner", "renter")
    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_fields = ["status", "car", "renter"]
    ordering_fields = ["start_date", "created_at", "total_amount"]
    lookup_value_regex = r"\d+"
    service_class = BookingService

    def get_service(self) -> BookingService:
        return self.service_class()

    def get_queryset(self):  # type: ignore
        return bookings_visible_to(actor_from_user(self.request.user), super().get_queryset())

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        if self.action in {"update", "partial_update"}:
            return BookingUpdateSerializer
        return BookingSerializer

    def _render(self, booking: Booking, status_code=status.HTTP_200_OK) -> Response:
        data = BookingSerializer(booking, context=self.get_serializer_context()).data
        return Response(data, status=status_code)

    def retrieve(self, request, *args, **kwargs):  # type: ignore
        booking = self.get_service().get_booking(actor_from_user(request.user), int(kwargs["pk"]))
        return self._render(booking)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = self.get_service().create_booking(actor_from_user(request.user), **serializer.validated_data)
        return self._render(booking, status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data, partial=kwargs.pop("partial", False))
        serializer.is_valid(raise_exception=True)
        booking = self.get_service().update_booking(
            actor_from_user(request.user),
            int(kwargs["pk"]),
            serializer.validated_data,
        )
        return self._render(booking)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        self.get_service().delete_booking(actor_from_user(request.user), int(kwargs["pk"]))
        return Response(status=status.HTTP_204_NO_CONTENT)
