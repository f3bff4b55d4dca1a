# services/booking-service/src/apps/api/views/availability_views.py
"""
Availability API Views

Available windows, opening hours and slot blocking.
"""

import logging
from datetime import timedelta

from django.conf import settings
from django.utils import timezone
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.serializers import (
    AvailabilityQuerySerializer,
    AvailableDaySerializer,
    OpeningHoursSerializer,
    OpeningHoursReplaceSerializer,
    SlotBlockSerializer,
    SlotSerializer,
)
from apps.core.services import (
    BookingTransactionService,
    BookingValidator,
    OpeningHoursService,
    SlotService,
)
from .base import ExceptionHandlerMixin

logger = logging.getLogger(__name__)


class AvailableSlotsView(ExceptionHandlerMixin, APIView):
    """
    Get available booking windows.

    Query params:
    - business: business UUID (required)
    - offering: service offering UUID (required)
    - start_date: first date, YYYY-MM-DD (defaults to tomorrow)
    - days: number of dates to scan (defaults to 7)
    """

    permission_classes = [AllowAny]

    def get(self, request):
        query = AvailabilityQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        start_date = params.get('start_date') or timezone.localdate() + timedelta(days=1)
        days = params.get('days') or settings.AVAILABILITY_DEFAULT_DAYS

        availability = SlotService().get_available_slots(
            business_id=params['business'],
            offering_id=params['offering'],
            start_date=start_date,
            days=days,
        )

        payload = [
            {
                'date': entry['date'],
                'business_id': params['business'],
                'service_offering_id': params['offering'],
                'slots': entry['slots'],
            }
            for entry in availability
        ]
        return Response(AvailableDaySerializer(payload, many=True).data)


class OpeningHoursView(ExceptionHandlerMixin, APIView):
    """
    GET: weekly opening hours of a business (public).
    PUT: replace the whole schedule (business owner).
    """

    def get_permissions(self):
        if self.request.method == 'GET':
            return [AllowAny()]
        return [IsAuthenticated()]

    def get(self, request, business_id):
        service = OpeningHoursService()
        service.get_business(business_id)
        hours = service.list_for_business(business_id)
        return Response(OpeningHoursSerializer(hours, many=True).data)

    def put(self, request, business_id):
        service = OpeningHoursService()
        business = service.get_business(business_id)
        BookingValidator.ensure_business_owner(business, request.user, action='update_opening_hours')

        serializer = OpeningHoursReplaceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        hours = service.replace_for_business(business, serializer.validated_data['hours'])
        return Response(OpeningHoursSerializer(hours, many=True).data)


class SlotBlockView(ExceptionHandlerMixin, APIView):
    """Block or unblock one window of a service offering (business owner)."""

    permission_classes = [IsAuthenticated]
    blocked = True

    def post(self, request):
        serializer = SlotBlockSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        transaction_service = BookingTransactionService()
        offering = transaction_service.slot_service.get_service_offering(
            data['service_offering_id'],
            active_only=False
        )
        BookingValidator.ensure_business_owner(
            offering.business,
            request.user,
            action='block_slot' if self.blocked else 'unblock_slot'
        )

        slot = transaction_service.set_slot_blocked(
            offering,
            data['date'],
            data['start_time'],
            blocked=self.blocked,
        )
        return Response(SlotSerializer(slot).data, status=status.HTTP_200_OK)
