"""API views for managing reviews."""

from __future__ import annotations

from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.identity import actor_from_user
from apps.users.permissions import is_platform_admin

from .models import Review
from .serializers import ReviewCreateSerializer, ReviewSerializer
from .services import create_review


class IsReviewerOrAdmin(permissions.BasePermission):
    """Allow reviewers to delete their reviews and admins to delete all."""

    def has_object_permission(self, request, view, obj: Review) -> bool:  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        if is_platform_admin(request.user):
            return True
        return obj.reviewer_id == request.user.id


class ReviewViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """Viewset for creating, retrieving and deleting reviews."""

    queryset = Review.objects.select_related('reviewer', 'reviewed').all()
    permission_classes = [permissions.IsAuthenticatedOrReadOnly, IsReviewerOrAdmin]

    def get_serializer_class(self):  # type: ignore
        if self.action == 'create':
            return ReviewCreateSerializer
        return ReviewSerializer

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        params = self.request.query_params

        reviewed_id = params.get('reviewed')
        if reviewed_id and reviewed_id.isdigit():
            qs = qs.filter(reviewed_id=int(reviewed_id))

        review_type = params.get('review_type')
        if review_type:
            qs = qs.filter(review_type=review_type)

        booking_id = params.get('booking')
        if booking_id and booking_id.isdigit():
            qs = qs.filter(booking_id=int(booking_id))
        return qs

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        review = create_review(actor_from_user(request.user), **serializer.validated_data)
        return Response(ReviewSerializer(review).data, status=status.HTTP_201_CREATED)
