# services/booking-service/src/apps/core/models/opening_hours.py
"""
Opening Hours Model

Weekly opening window of a business. A missing weekday means closed.
"""

from django.db import models

from shared.common.mixins import UUIDPrimaryKeyMixin


class OpeningHours(UUIDPrimaryKeyMixin, models.Model):
    """One row per business per weekday the business is open."""

    class DayOfWeek(models.IntegerChoices):
        SUNDAY = 0, 'Sunday'
        MONDAY = 1, 'Monday'
        TUESDAY = 2, 'Tuesday'
        WEDNESDAY = 3, 'Wednesday'
        THURSDAY = 4, 'Thursday'
        FRIDAY = 5, 'Friday'
        SATURDAY = 6, 'Saturday'

    business = models.ForeignKey(
        'core.Business',
        on_delete=models.CASCADE,
        related_name='opening_hours'
    )
    day_of_week = models.IntegerField(choices=DayOfWeek.choices)
    opens_at = models.TimeField()
    closes_at = models.TimeField()

    class Meta:
        db_table = 'business_opening_hours'
        ordering = ['business', 'day_of_week']
        constraints = [
            models.UniqueConstraint(
                fields=['business', 'day_of_week'],
                name='unique_opening_hours_per_weekday'
            ),
        ]
        verbose_name_plural = 'opening hours'

    def __str__(self):
        return f"{self.get_day_of_week_display()}: {self.opens_at:%H:%M}-{self.closes_at:%H:%M}"

