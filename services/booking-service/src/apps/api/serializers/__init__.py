# services/booking-service/src/apps/api/serializers/__init__.py
"""
Booking API Serializers
"""

from .booking_serializers import (
    SlotSummarySerializer,
    ServiceOfferingSummarySerializer,
    BookingSerializer,
    BookingCreateSerializer,
    BookingUpdateSerializer,
)
from .availability_serializers import (
    AvailabilityQuerySerializer,
    TimeWindowSerializer,
    AvailableDaySerializer,
    OpeningHoursSerializer,
    OpeningHoursReplaceSerializer,
    SlotBlockSerializer,
    SlotSerializer,
)

__all__ = [
    'SlotSummarySerializer',
    'ServiceOfferingSummarySerializer',
    'BookingSerializer',
    'BookingCreateSerializer',
    'BookingUpdateSerializer',
    'AvailabilityQuerySerializer',
    'TimeWindowSerializer',
    'AvailableDaySerializer',
    'OpeningHoursSerializer',
    'OpeningHoursReplaceSerializer',
    'SlotBlockSerializer',
    'SlotSerializer',
]
