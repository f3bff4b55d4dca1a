# services/booking-service/src/apps/api/views/base.py
"""
Base Views and Mixins

Common functionality for Booking Service API views.
"""

import logging

from rest_framework import status
from rest_framework.response import Response

from apps.core.services.exceptions import (
    BookingServiceError,
    BookingValidationError,
    ResourceNotFoundError,
    SlotUnavailableError,
    InvalidStatusTransitionError,
    BookingPermissionError,
)

logger = logging.getLogger(__name__)


class ExceptionHandlerMixin:
    """Mixin for handling service layer exceptions."""

    status_map = (
        (ResourceNotFoundError, status.HTTP_404_NOT_FOUND),
        (BookingValidationError, status.HTTP_400_BAD_REQUEST),
        (InvalidStatusTransitionError, status.HTTP_400_BAD_REQUEST),
        (SlotUnavailableError, status.HTTP_409_CONFLICT),
        (BookingPermissionError, status.HTTP_403_FORBIDDEN),
    )

    def handle_exception(self, exc):
        """Convert service exceptions to appropriate HTTP responses."""
        if not isinstance(exc, BookingServiceError):
            # DRF errors and unexpected failures go to the platform handler
            return super().handle_exception(exc)

        response_status = status.HTTP_400_BAD_REQUEST
        for exc_class, mapped_status in self.status_map:
            if isinstance(exc, exc_class):
                response_status = mapped_status
                break

        logger.info(f"{type(exc).__name__}: {exc.message}")
        return Response(
            {
                'success': False,
                'error': {
                    **exc.to_dict(),
                    'request_id': getattr(self.request, 'request_id', None),
                },
            },
            status=response_status
        )
