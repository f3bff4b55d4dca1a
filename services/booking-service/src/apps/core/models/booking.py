# services/booking-service/src/apps/core/models/booking.py
"""
Booking Model

One occupied seat in a Slot, made by an authenticated user or a guest.
"""

from django.db import models
from django.utils import timezone

from shared.common.mixins import UUIDPrimaryKeyMixin, TimestampMixin


class Booking(UUIDPrimaryKeyMixin, TimestampMixin, models.Model):
    """
    Customer reservation.

    Rows are never deleted; cancellation is a status change. Status changes
    go through BookingValidator so only sanctioned transitions are stored.
    """

    class Status(models.TextChoices):
        CREATED = 'created', 'Created'
        PENDING = 'pending', 'Pending'
        CONFIRMED = 'confirmed', 'Confirmed'
        COMPLETED = 'completed', 'Completed'
        CANCELLED = 'cancelled', 'Cancelled'

    # Null for guest bookings
    user_id = models.UUIDField(blank=True, null=True, db_index=True)

    slot = models.ForeignKey(
        'core.Slot',
        on_delete=models.PROTECT,
        related_name='bookings'
    )
    service_offering = models.ForeignKey(
        'core.ServiceOffering',
        on_delete=models.PROTECT,
        related_name='bookings'
    )

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.CREATED,
        db_index=True
    )
    special_requests = models.CharField(max_length=500, blank=True, null=True)

    # Guest contact
    guest_name = models.CharField(max_length=100, blank=True, null=True)
    guest_email = models.EmailField(max_length=255, blank=True, null=True)
    guest_phone = models.CharField(max_length=20, blank=True, null=True)

    confirmed_at = models.DateTimeField(blank=True, null=True)
    cancelled_at = models.DateTimeField(blank=True, null=True)

    class Meta:
        db_table = 'bookings'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user_id', 'status'], name='booking_user_status_idx'),
        ]

    def __str__(self):
        return f"Booking {self.id} ({self.status})"

    @property
    def is_guest(self) -> bool:
        return self.user_id is None

    @property
    def is_finalized(self) -> bool:
        return self.status in (self.Status.COMPLETED, self.Status.CANCELLED)

    @property
    def business(self):
        return self.service_offering.business

    def apply_status(self, new_status: str) -> None:
        """Set status and the matching timestamp. Legality is checked by the caller."""
        self.status = new_status
        if new_status == self.Status.CONFIRMED:
            self.confirmed_at = timezone.now()
        elif new_status == self.Status.CANCELLED:
            self.cancelled_at = timezone.now()
