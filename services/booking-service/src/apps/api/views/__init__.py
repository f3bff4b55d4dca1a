# services/booking-service/src/apps/api/views/__init__.py
"""
Booking API Views
"""

from .booking_views import BookingViewSet, BusinessBookingListView
from .availability_views import AvailableSlotsView, OpeningHoursView, SlotBlockView

__all__ = [
    'BookingViewSet',
    'BusinessBookingListView',
    'AvailableSlotsView',
    'OpeningHoursView',
    'SlotBlockView',
]
