# services/booking-service/src/apps/core/models/__init__.py
"""
Booking Service Models
"""

from .business import Business
from .service_offering import ServiceOffering
from .opening_hours import OpeningHours
from .slot import Slot
from .booking import Booking

__all__ = [
    'Business',
    'ServiceOffering',
    'OpeningHours',
    'Slot',
    'Booking',
]
