# services/booking-service/src/apps/api/views/booking_views.py
"""
Booking API Views

Thin adapters between HTTP and BookingService.
"""

import logging

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, generics, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from apps.api.serializers import (
    BookingSerializer,
    BookingCreateSerializer,
    BookingUpdateSerializer,
)
from apps.core.services import BookingService
from .base import ExceptionHandlerMixin
from .filters import BookingFilter
from .pagination import StandardResultsSetPagination

logger = logging.getLogger(__name__)

UUID_REGEX = '[0-9a-fA-F-]{36}'


class BookingListMixin:
    """Shared listing configuration for booking collections."""

    serializer_class = BookingSerializer
    pagination_class = StandardResultsSetPagination
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_class = BookingFilter
    ordering_fields = ['created_at', 'slot__date', 'slot__start_time', 'status']
    ordering = ['-created_at']


class BookingViewSet(ExceptionHandlerMixin, BookingListMixin, viewsets.GenericViewSet):
    """
    Booking endpoints.

    create      POST   /bookings/              authenticated user or guest
    retrieve    GET    /bookings/{id}/         booking owner or business owner
    update      PATCH  /bookings/{id}/         status and/or special requests
    cancel      DELETE /bookings/{id}/         returns the cancelled booking
    confirm     POST   /bookings/{id}/confirm/ business owner only
    my          GET    /bookings/my/           caller's own bookings
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = UUID_REGEX

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.booking_service = BookingService()

    def get_permissions(self):
        if self.action == 'create':
            return [AllowAny()]
        return super().get_permissions()

    def get_queryset(self):
        return self.booking_service.list_user_bookings(self.request.user)

    def create(self, request, *args, **kwargs):
        """Create a booking for the authenticated user, or for a guest."""
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        booking = self.booking_service.create_booking(
            serializer.validated_data,
            user=request.user
        )
        return Response(BookingSerializer(booking).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        booking = self.booking_service.get_booking(pk, request.user)
        return Response(BookingSerializer(booking).data)

    def partial_update(self, request, pk=None):
        serializer = BookingUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        booking = self.booking_service.update_booking(
            pk,
            request.user,
            status=serializer.validated_data.get('status'),
            special_requests=serializer.validated_data.get('special_requests'),
        )
        return Response(BookingSerializer(booking).data)

    def destroy(self, request, pk=None):
        """Cancel the booking; rows are never deleted."""
        booking = self.booking_service.cancel_booking(pk, request.user)
        return Response(BookingSerializer(booking).data)

    @action(detail=True, methods=['post'])
    def confirm(self, request, pk=None):
        booking = self.booking_service.confirm_booking(pk, request.user)
        return Response(BookingSerializer(booking).data)

    @action(detail=False, methods=['get'])
    def my(self, request):
        """Bookings made by the caller, filtered and paginated."""
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        serializer = BookingSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)


class BusinessBookingListView(ExceptionHandlerMixin, BookingListMixin, generics.ListAPIView):
    """All bookings of a business, for its owner."""

    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return BookingService().list_business_bookings(
            self.kwargs['business_id'],
            self.request.user
        )
