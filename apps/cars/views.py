"""Car API views."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter, SearchFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.services import BookingService
from apps.users.identity import actor_from_user
from apps.users.permissions import IsCarOwnerOrAdmin, IsPlatformAdmin, is_platform_admin

from . import services
from .filters import CarFilterSet
from .models import Car
from .serializers import AvailabilityQuerySerializer, CarSerializer, CarWriteSerializer


class CarViewSet(viewsets.ModelViewSet):
    """Viewset for managing cars."""

    queryset = Car.objects.select_related("owner")
    permission_classes = [IsCarOwnerOrAdmin]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_class = CarFilterSet
    search_fields = ["make", "model", "location"]
    ordering_fields = ["daily_rate", "created_at", "year"]

    def get_permissions(self):  # type: ignore
        if self.action == "verify":
            return [IsPlatformAdmin()]
        if self.action in {"list", "retrieve", "availability"}:
            return [permissions.AllowAny()]
        return super().get_permissions()

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        if self.action != "list":
            return qs
        user = self.request.user
        params = self.request.query_params
        if params.get("mine") == "true" and user.is_authenticated:
            return qs.filter(owner=user)
        if not is_platform_admin(user):
            qs = qs.filter(is_verified=True)
        if "available" not in params:
            qs = qs.filter(is_available=True)
        return qs

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return CarWriteSerializer
        return CarSerializer

    def perform_create(self, serializer):  # type: ignore
        serializer.instance = services.create_car(self.request.user, serializer.validated_data)

    def perform_update(self, serializer):  # type: ignore
        serializer.instance = services.update_car(
            actor_from_user(self.request.user),
            serializer.instance,
            serializer.validated_data,
        )

    def perform_destroy(self, instance):  # type: ignore
        services.delete_car(actor_from_user(self.request.user), instance)

    @action(detail=True, methods=["post"])
    def verify(self, request, pk=None):  # type: ignore
        car = self.get_object()
        verified = request.data.get("is_verified", True)
        if isinstance(verified, str):
            verified = verified.lower() not in {"false", "0", "no"}
        car = services.set_verified(actor_from_user(request.user), car, bool(verified))
        return Response(CarSerializer(car, context=self.get_serializer_context()).data)

    @action(detail=True, methods=["get"])
    def availability(self, request, pk=None):  # type: ignore
        """Check whether the car is free for ``start``..``end`` (query params)."""
        car = self.get_object()
        query = AvailabilityQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        start, end = query.validated_data["start"], query.validated_data["end"]
        available = BookingService().is_available(car.pk, start, end)
        return Response(
            {
                "car_id": car.pk,
                "start": start,
                "end": end,
                "is_bookable": car.is_bookable,
                "available": available and car.is_bookable,
            },
            status=status.HTTP_200_OK,
        )
