# services/booking-service/src/apps/core/models/business.py
"""
Business Model

Local projection of a business profile. The profile itself is managed by
the business directory; this service only needs identity and ownership.
"""

from django.db import models

from shared.common.mixins import UUIDPrimaryKeyMixin, TimestampMixin


class Business(UUIDPrimaryKeyMixin, TimestampMixin, models.Model):
    """A tenant that publishes service offerings and opening hours."""

    owner_id = models.UUIDField(
        db_index=True,
        help_text="Identity-provider user id of the owner"
    )
    name = models.CharField(max_length=255)

    class Meta:
        db_table = 'businesses'
        ordering = ['name']

    def __str__(self):
        return self.name

    def is_owned_by(self, user_id) -> bool:
        if user_id is None:
            return False
        return str(self.owner_id) == str(user_id)
