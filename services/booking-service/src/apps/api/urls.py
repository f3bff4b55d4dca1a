# services/booking-service/src/apps/api/urls.py
"""
Booking API URL Configuration
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import (
    BookingViewSet,
    BusinessBookingListView,
    AvailableSlotsView,
    OpeningHoursView,
    SlotBlockView,
)

router = DefaultRouter()
router.register(r'bookings', BookingViewSet, basename='booking')

app_name = 'api'

urlpatterns = [
    path('', include(router.urls)),

    # Availability
    path('availability/', AvailableSlotsView.as_view(), name='availability'),

    # Business-scoped
    path(
        'businesses/<uuid:business_id>/bookings/',
        BusinessBookingListView.as_view(),
        name='business-bookings'
    ),
    path(
        'businesses/<uuid:business_id>/opening-hours/',
        OpeningHoursView.as_view(),
        name='opening-hours'
    ),

    # Slot overrides
    path('slots/block/', SlotBlockView.as_view(blocked=True), name='slot-block'),
    path('slots/unblock/', SlotBlockView.as_view(blocked=False), name='slot-unblock'),
]
