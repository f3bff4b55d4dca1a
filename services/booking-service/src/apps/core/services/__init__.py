# services/booking-service/src/apps/core/services/__init__.py
"""
Booking Service Business Logic
"""

from .exceptions import (
    BookingServiceError,
    BookingValidationError,
    InvalidTimeFormatError,
    ResourceNotFoundError,
    BusinessNotFoundError,
    ServiceOfferingNotFoundError,
    SlotNotFoundError,
    BookingNotFoundError,
    SlotUnavailableError,
    InvalidStatusTransitionError,
    BookingPermissionError,
)
from .opening_hours_service import OpeningHoursService
from .slot_service import SlotService
from .booking_transaction_service import BookingTransactionService
from .booking_validator import BookingValidator
from .booking_service import BookingService

__all__ = [
    # Services
    'OpeningHoursService',
    'SlotService',
    'BookingTransactionService',
    'BookingValidator',
    'BookingService',

    # Exceptions
    'BookingServiceError',
    'BookingValidationError',
    'InvalidTimeFormatError',
    'ResourceNotFoundError',
    'BusinessNotFoundError',
    'ServiceOfferingNotFoundError',
    'SlotNotFoundError',
    'BookingNotFoundError',
    'SlotUnavailableError',
    'InvalidStatusTransitionError',
    'BookingPermissionError',
]
