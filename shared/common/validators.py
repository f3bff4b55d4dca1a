# shared/common/validators.py
"""
Field validators usable from DRF serializers
"""

import re
from datetime import date
from typing import Optional

from rest_framework.exceptions import ValidationError

PHONE_PATTERN = re.compile(r'^\+?\d{7,15}$')


def validate_phone_number(value: str, field_name: str = "phone") -> str:
    """Normalize a phone number and check it has a plausible digit count."""
    cleaned = re.sub(r'[\s\-().]', '', value or '')

    if not cleaned:
        raise ValidationError(f"{field_name} is required")

    if not PHONE_PATTERN.match(cleaned):
        raise ValidationError(f"Invalid {field_name} format")

    return cleaned


def validate_date_range(
    start: Optional[date],
    end: Optional[date],
    start_field: str = "from_date",
    end_field: str = "to_date"
) -> None:
    """Reject ranges whose end precedes their start."""
    if start and end and end < start:
        raise ValidationError({end_field: f"{end_field} must not be before {start_field}"})
