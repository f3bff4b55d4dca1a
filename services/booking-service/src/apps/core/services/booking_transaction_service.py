# services/booking-service/src/apps/core/services/booking_transaction_service.py
"""
Booking Transaction Service

Turns a requested start time into an occupied seat. All changes to a
slot's bookings_count and is_blocked go through this module.

Capacity is enforced by the database: the seat is claimed with a single
conditional UPDATE (bookings_count < capacity AND NOT is_blocked), so
concurrent requests on several service instances serialize on the slot
row and at most ``capacity`` of them succeed.
"""

import logging
import uuid
from datetime import date, datetime, time
from typing import Any, Dict, Optional

from django.db import DatabaseError, transaction
from django.db.models import F
from django.utils import timezone

from apps.core.models import Booking, ServiceOffering, Slot
from .exceptions import (
    BookingValidationError,
    SlotNotFoundError,
    SlotUnavailableError,
)
from .intervals import MINUTES_PER_DAY, Interval, minutes_to_time, parse_time
from .slot_service import SlotService

logger = logging.getLogger(__name__)


class BookingTransactionService:
    """Atomic seat reservation and release on Slot rows."""

    def __init__(self, slot_service: SlotService = None):
        self.slot_service = slot_service or SlotService()

    # ==========================================================================
    # Booking
    # ==========================================================================

    @transaction.atomic
    def create_booking_with_transaction(
        self,
        data: Dict[str, Any],
        user_id: Optional[uuid.UUID] = None
    ) -> Booking:
        """
        Reserve a seat and persist the booking in one transaction.

        ``data`` carries ``service_offering_id``, ``start_datetime`` and the
        optional ``special_requests`` and guest fields. Any failure rolls
        back the seat claim together with the booking insert.
        """
        offering = self.slot_service.get_service_offering(data['service_offering_id'])

        slot = self.check_availability_and_book(
            data['start_datetime'],
            offering,
            offering.duration_minutes,
        )

        try:
            booking = Booking.objects.create(
                user_id=user_id,
                slot=slot,
                service_offering=offering,
                status=Booking.Status.CREATED,
                special_requests=data.get('special_requests'),
                guest_name=data.get('guest_name'),
                guest_email=data.get('guest_email'),
                guest_phone=data.get('guest_phone'),
            )
        except DatabaseError:
            logger.exception(
                f"Failed to persist booking for slot {slot.id} "
                f"(offering {offering.id}, user {user_id})"
            )
            raise

        logger.info(
            f"Created booking {booking.id} for offering {offering.id} "
            f"on {slot.date} {slot.start_time:%H:%M} "
            f"({'guest' if user_id is None else f'user {user_id}'})"
        )
        return booking

    def check_availability_and_book(
        self,
        start_datetime: datetime,
        offering: ServiceOffering,
        duration_minutes: int
    ) -> Slot:
        """
        Claim one seat in the window starting at ``start_datetime``.

        The window must be one the availability computation currently
        offers for that day. The slot row is created on first use and its
        counter incremented atomically. Raises SlotUnavailableError when
        the window is not offered, blocked or already full.
        """
        day, start_minutes = self._split_local(start_datetime)
        requested = Interval(start_minutes, start_minutes + duration_minutes)

        windows = self.slot_service.get_day_windows(offering.business_id, offering, day)
        if requested not in windows:
            logger.warning(
                f"Rejected booking for offering {offering.id}: "
                f"{day} {minutes_to_time(start_minutes):%H:%M} is not an available window"
            )
            raise SlotUnavailableError(details={
                'date': day.isoformat(),
                'start_time': f"{minutes_to_time(start_minutes):%H:%M}",
            })

        slot, created = Slot.objects.get_or_create(
            service_offering=offering,
            date=day,
            start_time=minutes_to_time(requested.start),
            defaults={
                'business_id': offering.business_id,
                'end_time': minutes_to_time(requested.end),
            }
        )
        if created:
            logger.info(f"Materialized slot {slot.id} for offering {offering.id} on {day}")

        claimed = Slot.objects.filter(
            pk=slot.pk,
            is_blocked=False,
            bookings_count__lt=offering.capacity,
        ).update(
            bookings_count=F('bookings_count') + 1,
            updated_at=timezone.now(),
        )
        if not claimed:
            logger.warning(f"Slot {slot.id} is full or blocked; booking rejected")
            raise SlotUnavailableError(details={'slot_id': str(slot.id)})

        slot.refresh_from_db()
        SlotService.invalidate_business(offering.business_id)
        return slot

    # ==========================================================================
    # Seat release and blocking
    # ==========================================================================

    @transaction.atomic
    def release_seat(self, slot: Slot) -> Slot:
        """Give back one seat, e.g. when a booking is cancelled."""
        released = Slot.objects.filter(
            pk=slot.pk,
            bookings_count__gt=0,
        ).update(
            bookings_count=F('bookings_count') - 1,
            updated_at=timezone.now(),
        )

        if not released:
            if not Slot.objects.filter(pk=slot.pk).exists():
                raise SlotNotFoundError(slot.pk)
            logger.warning(f"Slot {slot.pk} has no occupied seats to release")

        slot.refresh_from_db()
        SlotService.invalidate_business(slot.business_id)
        return slot

    @transaction.atomic
    def set_slot_blocked(
        self,
        offering: ServiceOffering,
        day: date,
        start_time: time,
        blocked: bool
    ) -> Slot:
        """
        Block or unblock the window of ``offering`` starting at ``start_time``.

        Blocking materializes the slot if needed; unblocking requires an
        existing slot. Existing bookings are left untouched.
        """
        start_minutes = parse_time(start_time)
        end_minutes = start_minutes + offering.duration_minutes
        if end_minutes >= MINUTES_PER_DAY:
            raise BookingValidationError(
                "Slot must end before midnight",
                field='start_time'
            )

        lookup = {
            'service_offering': offering,
            'date': day,
            'start_time': minutes_to_time(start_minutes),
        }
        if blocked:
            slot, _ = Slot.objects.get_or_create(
                **lookup,
                defaults={
                    'business_id': offering.business_id,
                    'end_time': minutes_to_time(end_minutes),
                }
            )
        else:
            slot = Slot.objects.filter(**lookup).first()
            if slot is None:
                raise SlotNotFoundError(
                    message=f"No slot for offering {offering.id} on {day} at {start_time:%H:%M}"
                )

        Slot.objects.filter(pk=slot.pk).update(
            is_blocked=blocked,
            updated_at=timezone.now(),
        )
        slot.refresh_from_db()
        SlotService.invalidate_business(offering.business_id)

        logger.info(f"Slot {slot.id} {'blocked' if blocked else 'unblocked'}")
        return slot

    # ==========================================================================
    # Helpers
    # ==========================================================================

    @staticmethod
    def _split_local(start_datetime: datetime):
        """Date and minute-of-day of ``start_datetime`` in the service time zone."""
        if timezone.is_naive(start_datetime):
            start_datetime = timezone.make_aware(start_datetime)
        local = timezone.localtime(start_datetime)

        if local.second or local.microsecond:
            raise SlotUnavailableError(
                message="Booking start must fall on a whole minute boundary"
            )
        return local.date(), local.hour * 60 + local.minute
