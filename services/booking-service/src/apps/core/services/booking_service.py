# services/booking-service/src/apps/core/services/booking_service.py
"""
Booking Service

Entry point for booking operations used by the API: creation with
pre-validation, lookups, status changes and cancellation.
"""

import logging
import uuid
from typing import Any, Dict, Optional

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.core.models import Booking, Business
from .booking_transaction_service import BookingTransactionService
from .booking_validator import BookingValidator
from .exceptions import BookingNotFoundError, BookingValidationError, BusinessNotFoundError

logger = logging.getLogger(__name__)


def _user_id(user) -> Optional[str]:
    if user is None or not getattr(user, 'is_authenticated', False):
        return None
    return getattr(user, 'id', None)


class BookingService:
    """
    Service for managing bookings.

    Handles:
    - Booking creation (validation, then the booking transaction)
    - Access-checked retrieval and listings
    - Status transitions and cancellation
    """

    def __init__(self, transaction_service: BookingTransactionService = None):
        self.transaction_service = transaction_service or BookingTransactionService()

    # ==========================================================================
    # Creation
    # ==========================================================================

    def create_booking(self, data: Dict[str, Any], user=None) -> Booking:
        """
        Validate a booking request and hand it to the transaction manager.

        Validation happens before any database access.
        """
        user_id = _user_id(user)

        start_datetime = data['start_datetime']
        if timezone.is_naive(start_datetime):
            start_datetime = timezone.make_aware(start_datetime)

        BookingValidator.validate_guest_booking_data(data, user_id)
        BookingValidator.validate_booking_time(start_datetime)

        payload = dict(data, start_datetime=start_datetime)
        if user_id:
            for field in ('guest_name', 'guest_email', 'guest_phone'):
                payload.pop(field, None)

        return self.transaction_service.create_booking_with_transaction(payload, user_id)

    # ==========================================================================
    # Retrieval
    # ==========================================================================

    def get_booking(self, booking_id: uuid.UUID, user) -> Booking:
        booking = self._get_booking(booking_id)
        BookingValidator.validate_booking_access(booking, user)
        return booking

    def list_user_bookings(self, user) -> QuerySet:
        """Bookings made by the authenticated user."""
        return self._base_queryset().filter(user_id=_user_id(user))

    def list_business_bookings(self, business_id: uuid.UUID, user) -> QuerySet:
        """All bookings of a business; owner only."""
        try:
            business = Business.objects.get(id=business_id)
        except Business.DoesNotExist:
            raise BusinessNotFoundError(business_id)

        BookingValidator.ensure_business_owner(business, user, action='list_bookings')
        return self._base_queryset().filter(service_offering__business=business)

    # ==========================================================================
    # Updates
    # ==========================================================================

    @transaction.atomic
    def update_booking(
        self,
        booking_id: uuid.UUID,
        user,
        status: Optional[str] = None,
        special_requests: Optional[str] = None
    ) -> Booking:
        """
        Change status and/or special requests.

        All checks run before the first write. Moving to CANCELLED gives
        the seat back to the slot in the same transaction.
        """
        booking = self._get_booking(booking_id, for_update=True)
        BookingValidator.validate_booking_access(booking, user)
        is_owner = BookingValidator.is_business_owner(booking.business, user)

        if status is not None:
            BookingValidator.validate_status_transition(booking.status, status, is_owner)

        if special_requests is not None and booking.is_finalized:
            raise BookingValidationError(
                f"Cannot modify a {booking.status} booking",
                field='special_requests'
            )

        previous_status = booking.status
        if special_requests is not None:
            booking.special_requests = special_requests

        if status is not None:
            if status == Booking.Status.CANCELLED:
                self.transaction_service.release_seat(booking.slot)
            booking.apply_status(status)

        booking.save()

        if status is not None:
            logger.info(
                f"Booking {booking.id} moved from {previous_status} to {booking.status} "
                f"by {_user_id(user)}"
            )
        return booking

    def cancel_booking(self, booking_id: uuid.UUID, user) -> Booking:
        return self.update_booking(booking_id, user, status=Booking.Status.CANCELLED)

    def confirm_booking(self, booking_id: uuid.UUID, user) -> Booking:
        return self.update_booking(booking_id, user, status=Booking.Status.CONFIRMED)

    # ==========================================================================
    # Helpers
    # ==========================================================================

    def _base_queryset(self) -> QuerySet:
        return Booking.objects.select_related(
            'slot',
            'service_offering',
            'service_offering__business',
        )

    def _get_booking(self, booking_id: uuid.UUID, for_update: bool = False) -> Booking:
        queryset = self._base_queryset()
        if for_update:
            queryset = queryset.select_for_update(of=('self',))
        try:
            return queryset.get(id=booking_id)
        except Booking.DoesNotExist:
            raise BookingNotFoundError(booking_id)
