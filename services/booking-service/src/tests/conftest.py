# services/booking-service/src/tests/conftest.py
"""
Pytest Configuration and Fixtures

Provides common fixtures for booking service tests.
"""

import uuid
from datetime import datetime, time, timedelta
from unittest.mock import Mock

import pytest
from django.core.cache import cache
from django.utils import timezone
from rest_framework.test import APIClient

from apps.core.models import Booking, Business, OpeningHours, ServiceOffering, Slot
from shared.common.authentication import TokenUser


@pytest.fixture(autouse=True)
def clear_cache():
    """Cached availability must not leak between tests."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    """Provide API client for testing."""
    return APIClient()


@pytest.fixture
def owner_id():
    """Identity of the business owner."""
    return uuid.uuid4()


@pytest.fixture
def user_id():
    """Identity of a regular customer."""
    return uuid.uuid4()


def make_token_user(user_id, roles=None):
    return TokenUser({'sub': str(user_id), 'roles': roles or ['user']})


def broken_cache(error=None):
    """Stand-in cache backend whose every call fails like an unreachable Redis."""
    error = error or ConnectionError('redis down')
    return Mock(**{
        f'{method}.side_effect': error
        for method in ('get', 'set', 'get_or_set', 'incr', 'delete')
    })


@pytest.fixture
def owner_user(owner_id):
    return make_token_user(owner_id, roles=['business_owner'])


@pytest.fixture
def customer_user(user_id):
    return make_token_user(user_id)


@pytest.fixture
def other_user():
    return make_token_user(uuid.uuid4())


@pytest.fixture
def admin_user():
    return make_token_user(uuid.uuid4(), roles=['admin'])


@pytest.fixture
def business(db, owner_id):
    """Provide a business owned by ``owner_id``."""
    return Business.objects.create(owner_id=owner_id, name='Corner Barbershop')


@pytest.fixture
def offering(business):
    """One-hour service with a single seat per window."""
    return ServiceOffering.objects.create(
        business=business,
        name='Haircut',
        duration_minutes=60,
        capacity=1,
    )


@pytest.fixture
def set_opening_hours():
    """Factory: open ``business`` on the given weekdays (0 = Sunday)."""
    def _set(business, opens_at='09:00', closes_at='17:00', days=range(7)):
        OpeningHours.objects.filter(business=business).delete()
        return [
            OpeningHours.objects.create(
                business=business,
                day_of_week=day,
                opens_at=time.fromisoformat(opens_at),
                closes_at=time.fromisoformat(closes_at),
            )
            for day in days
        ]
    return _set


@pytest.fixture
def open_all_week(business, set_opening_hours):
    """Business open 09:00-17:00 every day."""
    return set_opening_hours(business)


@pytest.fixture
def future_day():
    """A date safely in the future."""
    return timezone.localdate() + timedelta(days=3)


@pytest.fixture
def make_start():
    """Factory: aware datetime for ``day`` at "HH:MM"."""
    def _make(day, hhmm):
        return timezone.make_aware(datetime.combine(day, time.fromisoformat(hhmm)))
    return _make


@pytest.fixture
def create_slot():
    """Factory for materialized slots."""
    def _create(offering, day, start='10:00', end='11:00', **kwargs):
        return Slot.objects.create(
            business=offering.business,
            service_offering=offering,
            date=day,
            start_time=time.fromisoformat(start),
            end_time=time.fromisoformat(end),
            **kwargs
        )
    return _create


@pytest.fixture
def create_booking(offering, future_day, make_start):
    """
    Factory for bookings made through the transaction manager, so slot
    counters stay consistent. ``status`` is written directly afterwards.
    """
    from apps.core.services import BookingTransactionService

    def _create(start='10:00', day=None, user_id=None, status=None, service_offering=None, **kwargs):
        data = {
            'service_offering_id': (service_offering or offering).id,
            'start_datetime': make_start(day or future_day, start),
        }
        if user_id is None:
            data.update({
                'guest_name': 'Guest Customer',
                'guest_email': 'guest@example.com',
                'guest_phone': '+15551234567',
            })
        data.update(kwargs)

        booking = BookingTransactionService().create_booking_with_transaction(data, user_id=user_id)
        if status:
            Booking.objects.filter(pk=booking.pk).update(status=status)
            booking.refresh_from_db()
        return booking
    return _create
