# services/booking-service/src/apps/core/services/opening_hours_service.py
"""
Opening Hours Service

Weekly schedule lookup and wholesale replacement.
"""

import logging
import uuid
from datetime import time
from typing import Any, Dict, Iterable, List, Optional

from django.db import transaction

from apps.core.models import Business, OpeningHours
from .exceptions import BookingValidationError, BusinessNotFoundError

logger = logging.getLogger(__name__)


class OpeningHoursService:
    """Reads and replaces a business's weekly opening hours."""

    def find_worktime_for_weekday(
        self,
        business_id: uuid.UUID,
        day_of_week: int
    ) -> Optional[OpeningHours]:
        """Opening window for a weekday (0 = Sunday), or None when closed."""
        return OpeningHours.objects.filter(
            business_id=business_id,
            day_of_week=day_of_week
        ).first()

    def list_for_business(self, business_id: uuid.UUID) -> List[OpeningHours]:
        return list(
            OpeningHours.objects.filter(business_id=business_id).order_by('day_of_week')
        )

    @transaction.atomic
    def replace_for_business(
        self,
        business: Business,
        entries: Iterable[Dict[str, Any]]
    ) -> List[OpeningHours]:
        """
        Replace the whole weekly schedule.

        Existing rows are deleted and the given entries recreated; weekdays
        not listed become closed. Each entry needs ``day_of_week``,
        ``opens_at`` and ``closes_at``.
        """
        from .slot_service import SlotService

        entries = list(entries)
        self._validate_entries(entries)

        deleted, _ = OpeningHours.objects.filter(business=business).delete()
        created = OpeningHours.objects.bulk_create([
            OpeningHours(
                business=business,
                day_of_week=entry['day_of_week'],
                opens_at=entry['opens_at'],
                closes_at=entry['closes_at'],
            )
            for entry in entries
        ])

        SlotService.invalidate_business(business.id)

        logger.info(
            f"Replaced opening hours for business {business.id}: "
            f"{deleted} removed, {len(created)} created"
        )
        return sorted(created, key=lambda hours: hours.day_of_week)

    def get_business(self, business_id: uuid.UUID) -> Business:
        try:
            return Business.objects.get(id=business_id)
        except Business.DoesNotExist:
            raise BusinessNotFoundError(business_id)

    def _validate_entries(self, entries: List[Dict[str, Any]]) -> None:
        seen = set()
        for entry in entries:
            day = entry.get('day_of_week')
            if day not in OpeningHours.DayOfWeek.values:
                raise BookingValidationError(
                    f"Invalid day of week: {day}",
                    field='day_of_week'
                )
            if day in seen:
                raise BookingValidationError(
                    f"Duplicate opening hours for day {day}",
                    field='day_of_week'
                )
            seen.add(day)

            opens_at, closes_at = entry.get('opens_at'), entry.get('closes_at')
            if not isinstance(opens_at, time) or not isinstance(closes_at, time):
                raise BookingValidationError(
                    "opens_at and closes_at are required",
                    field='opens_at'
                )
            if opens_at >= closes_at:
                raise BookingValidationError(
                    "opens_at must be before closes_at",
                    field='closes_at',
                    details={'day_of_week': day}
                )
