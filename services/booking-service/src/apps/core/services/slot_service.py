# services/booking-service/src/apps/core/services/slot_service.py
"""
Slot Service

Availability computation. Bookable windows are derived on the fly from
opening hours minus materialized slots that are blocked or full; no
calendar is pre-generated.
"""

import logging
import uuid
from datetime import date
from typing import Any, Dict, List, Optional

from django.conf import settings
from django.db import transaction
from django.db.models import Q

from apps.core.models import ServiceOffering, Slot
from shared.common.cache import VersionedNamespace
from .exceptions import BookingValidationError, ServiceOfferingNotFoundError
from .intervals import (
    Interval,
    dates_between,
    day_of_week,
    generate_time_slots,
    parse_time,
    subtract_interval,
)
from .opening_hours_service import OpeningHoursService

logger = logging.getLogger(__name__)

availability_cache = VersionedNamespace('availability')


class SlotService:
    """
    Computes available booking windows for a service offering.

    Reads happen outside any transaction; the booking transaction re-checks
    authoritatively before claiming a window.
    """

    def __init__(self, opening_hours_service: OpeningHoursService = None):
        self.opening_hours_service = opening_hours_service or OpeningHoursService()

    # ==========================================================================
    # Lookups
    # ==========================================================================

    def get_service_offering(
        self,
        offering_id: uuid.UUID,
        business_id: Optional[uuid.UUID] = None,
        active_only: bool = True
    ) -> ServiceOffering:
        """Load an offering, optionally checking it belongs to ``business_id``."""
        queryset = ServiceOffering.objects.select_related('business')
        if active_only:
            queryset = queryset.filter(is_active=True)

        try:
            offering = queryset.get(id=offering_id)
        except ServiceOffering.DoesNotExist:
            raise ServiceOfferingNotFoundError(offering_id)

        if business_id is not None and str(offering.business_id) != str(business_id):
            raise ServiceOfferingNotFoundError(offering_id)

        return offering

    def blocked_intervals_for_day(
        self,
        business_id: uuid.UUID,
        offering_id: uuid.UUID,
        day: date,
        capacity: int
    ) -> List[Interval]:
        """Intervals of slots that are explicitly blocked or at capacity."""
        rows = Slot.objects.filter(
            business_id=business_id,
            service_offering_id=offering_id,
            date=day,
        ).filter(
            Q(is_blocked=True) | Q(bookings_count__gte=capacity)
        ).order_by('start_time').values_list('start_time', 'end_time')

        return [Interval(parse_time(start), parse_time(end)) for start, end in rows]

    # ==========================================================================
    # Availability
    # ==========================================================================

    def get_day_windows(
        self,
        business_id: uuid.UUID,
        offering: ServiceOffering,
        day: date
    ) -> List[Interval]:
        """
        Bookable windows for one day, computed from the database.

        Returns an empty list when the business is closed that weekday.
        """
        hours = self.opening_hours_service.find_worktime_for_weekday(
            business_id, day_of_week(day)
        )
        if hours is None:
            logger.debug(f"Business {business_id} is closed on {day}; no windows")
            return []

        free = [Interval(parse_time(hours.opens_at), parse_time(hours.closes_at))]
        blocked = self.blocked_intervals_for_day(
            business_id, offering.id, day, offering.capacity
        )
        for interval in blocked:
            free = subtract_interval(free, interval)

        windows = []
        for interval in free:
            windows.extend(generate_time_slots(interval, offering.duration_minutes))
        return windows

    def get_available_slots(
        self,
        business_id: uuid.UUID,
        offering_id: uuid.UUID,
        start_date: date,
        days: int
    ) -> List[Dict[str, Any]]:
        """
        Available windows for each date in [start_date, start_date + days).

        Dates without windows (closed, fully booked, or too short for the
        service duration) are left out of the result.
        """
        max_days = getattr(settings, 'AVAILABILITY_MAX_DAYS', 62)
        if days < 1 or days > max_days:
            raise BookingValidationError(
                f"days must be between 1 and {max_days}",
                field='days'
            )

        offering = self.get_service_offering(offering_id, business_id)

        results = []
        for day in dates_between(start_date, days):
            windows = self._cached_day_windows(business_id, offering, day)
            if not windows:
                continue
            results.append({
                'date': day,
                'slots': [window.to_dict() for window in windows],
            })

        logger.debug(
            f"Availability for offering {offering_id} from {start_date} "
            f"({days} days): {len(results)} open dates"
        )
        return results

    def _cached_day_windows(
        self,
        business_id: uuid.UUID,
        offering: ServiceOffering,
        day: date
    ) -> List[Interval]:
        timeout = getattr(settings, 'AVAILABILITY_CACHE_TIMEOUT', 60)
        if not timeout:
            return self.get_day_windows(business_id, offering, day)

        # Duration and capacity are part of the key so offering edits never
        # serve windows computed with old values
        key = availability_cache.key(
            business_id,
            offering.id,
            day.isoformat(),
            offering.duration_minutes,
            offering.capacity,
        )
        if key is None:
            return self.get_day_windows(business_id, offering, day)

        cached = availability_cache.get(key)
        if cached is not None:
            return [Interval(start, end) for start, end in cached]

        windows = self.get_day_windows(business_id, offering, day)
        availability_cache.set(key, [(w.start, w.end) for w in windows], timeout)
        return windows

    @staticmethod
    def invalidate_business(business_id: uuid.UUID) -> None:
        """
        Drop cached availability for every offering of a business.

        Runs immediately and again after commit, so a reader that recomputed
        while the writing transaction was still open cannot keep stale data.
        """
        availability_cache.invalidate(business_id)
        transaction.on_commit(lambda: availability_cache.invalidate(business_id))
