# services/booking-service/src/apps/core/models/service_offering.py
"""
Service Offering Model

Bookable service with a fixed duration and per-window capacity.
"""

from django.core.validators import MinValueValidator
from django.db import models

from shared.common.mixins import UUIDPrimaryKeyMixin, TimestampMixin


class ServiceOffering(UUIDPrimaryKeyMixin, TimestampMixin, models.Model):
    """
    A service a business sells, e.g. "Haircut, 30 min".

    ``duration_minutes`` sizes every bookable window and ``capacity`` is the
    number of bookings one window holds before it is full.
    """

    business = models.ForeignKey(
        'core.Business',
        on_delete=models.CASCADE,
        related_name='service_offerings'
    )
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')
    duration_minutes = models.PositiveIntegerField(
        validators=[MinValueValidator(1)]
    )
    capacity = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
        help_text="Concurrent bookings allowed per window"
    )
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        blank=True,
        null=True
    )
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = 'service_offerings'
        ordering = ['business', 'name']

    def __str__(self):
        return f"{self.name} ({self.duration_minutes} min)"
