# services/booking-service/src/apps/core/services/booking_validator.py
"""
Booking Validator

Input checks performed before a booking is written, the booking status
state machine, and ownership rules. Every check raises before anything is
persisted.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from django.utils import timezone

from apps.core.models import Booking, Business
from shared.common.constants import PRIVILEGED_ROLES
from .exceptions import (
    BookingPermissionError,
    BookingValidationError,
    InvalidStatusTransitionError,
)

Status = Booking.Status

# Allowed target states per current state. COMPLETED and CANCELLED are final.
ALLOWED_TRANSITIONS = {
    Status.CREATED: frozenset({Status.PENDING, Status.CANCELLED}),
    Status.PENDING: frozenset({Status.CONFIRMED, Status.CANCELLED}),
    Status.CONFIRMED: frozenset({Status.COMPLETED, Status.CANCELLED}),
    Status.COMPLETED: frozenset(),
    Status.CANCELLED: frozenset(),
}

GUEST_FIELDS = ('guest_name', 'guest_email', 'guest_phone')


class BookingValidator:
    """Stateless validation rules for bookings."""

    @staticmethod
    def validate_guest_booking_data(data: Dict[str, Any], user_id: Optional[Any] = None) -> None:
        """Guest bookings need a name, an email and a phone number."""
        if user_id:
            return

        missing = [
            field for field in GUEST_FIELDS
            if not str(data.get(field) or '').strip()
        ]
        if missing:
            raise BookingValidationError(
                "Guest bookings require guest name, email and phone",
                details={'missing_fields': missing}
            )

    @staticmethod
    def validate_booking_time(start_datetime: datetime, now: Optional[datetime] = None) -> None:
        """The booking must start strictly after ``now``."""
        now = now or timezone.now()
        if start_datetime <= now:
            raise BookingValidationError(
                "Booking time must be in the future",
                field='start_datetime'
            )

    @staticmethod
    def validate_status_transition(current_status: str, new_status: str, is_business_owner: bool) -> None:
        """
        Check a status change against the transition table, then require
        the business owner for confirmations.
        """
        try:
            current, target = Status(current_status), Status(new_status)
        except ValueError:
            raise InvalidStatusTransitionError(current_status, new_status)

        if target not in ALLOWED_TRANSITIONS[current]:
            raise InvalidStatusTransitionError(current, target)

        if target == Status.CONFIRMED and not is_business_owner:
            raise BookingPermissionError(
                "Only the business owner can confirm a booking",
                action='confirm'
            )

    @staticmethod
    def is_business_owner(business: Business, user) -> bool:
        if user is None or not getattr(user, 'is_authenticated', False):
            return False
        roles = getattr(user, 'roles', None) or []
        if PRIVILEGED_ROLES.intersection(roles):
            return True
        return business.is_owned_by(getattr(user, 'id', None))

    @classmethod
    def ensure_business_owner(cls, business: Business, user, action: str = None) -> None:
        if not cls.is_business_owner(business, user):
            raise BookingPermissionError(
                "Only the business owner can perform this action",
                action=action
            )

    @classmethod
    def validate_booking_access(cls, booking: Booking, user) -> None:
        """
        A booking is visible to the owner of its business and to the user
        who made it. Guest bookings are visible to the business owner only.
        """
        if cls.is_business_owner(booking.business, user):
            return

        user_id = getattr(user, 'id', None) if getattr(user, 'is_authenticated', False) else None
        if user_id is not None and booking.user_id is not None and str(booking.user_id) == str(user_id):
            return

        raise BookingPermissionError(
            "You do not have access to this booking",
            action='access'
        )
