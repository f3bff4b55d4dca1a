# services/booking-service/src/apps/core/models/slot.py
"""
Slot Model

A concrete, capacity-bounded time window for one service offering on one
date. Rows are materialized lazily when the first booking claims a window.
"""

from datetime import datetime

from django.db import models
from django.utils import timezone

from shared.common.mixins import UUIDPrimaryKeyMixin, TimestampMixin


class Slot(UUIDPrimaryKeyMixin, TimestampMixin, models.Model):
    """
    Materialized booking window.

    ``bookings_count`` and ``is_blocked`` are the only fields contended by
    concurrent bookings; they are changed exclusively through
    BookingTransactionService.
    """

    business = models.ForeignKey(
        'core.Business',
        on_delete=models.CASCADE,
        related_name='slots'
    )
    service_offering = models.ForeignKey(
        'core.ServiceOffering',
        on_delete=models.CASCADE,
        related_name='slots'
    )
    date = models.DateField(db_index=True)
    start_time = models.TimeField()
    end_time = models.TimeField()
    bookings_count = models.PositiveIntegerField(default=0)
    is_blocked = models.BooleanField(
        default=False,
        help_text="Closed by the business regardless of capacity"
    )

    class Meta:
        db_table = 'slots'
        ordering = ['date', 'start_time']
        constraints = [
            models.UniqueConstraint(
                fields=['service_offering', 'date', 'start_time'],
                name='unique_slot_window'
            ),
        ]
        indexes = [
            models.Index(fields=['business', 'service_offering', 'date'], name='slot_lookup_idx'),
        ]

    def __str__(self):
        return f"{self.date} {self.start_time:%H:%M}-{self.end_time:%H:%M}"

    def is_full(self, capacity: int) -> bool:
        return self.bookings_count >= capacity

    @property
    def start_datetime(self) -> datetime:
        return timezone.make_aware(
            datetime.combine(self.date, self.start_time),
            timezone.get_current_timezone()
        )
