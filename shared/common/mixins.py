# shared/common/mixins.py
"""
Abstract model mixins shared by every service
"""

import uuid
from django.db import models


class UUIDPrimaryKeyMixin(models.Model):
    """
    Use a random UUID as primary key so identifiers can be exposed
    publicly and generated outside the database.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier"
    )

    class Meta:
        abstract = True


class TimestampMixin(models.Model):
    """
    Adds created_at / updated_at columns maintained by Django.
    """

    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text="Creation time"
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="Last modification time"
    )

    class Meta:
        abstract = True
