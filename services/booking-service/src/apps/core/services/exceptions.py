# services/booking-service/src/apps/core/services/exceptions.py
"""
Booking Service Exceptions

Domain errors raised by the service layer. Views translate them to HTTP
responses; anything not derived from BookingServiceError is treated as an
unexpected failure.
"""

from typing import Optional, Dict, Any


class BookingServiceError(Exception):
    """Base exception for booking service errors."""

    def __init__(
        self,
        message: str,
        code: str = "BOOKING_SERVICE_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class BookingValidationError(BookingServiceError):
    """Raised when input is malformed or incomplete."""

    def __init__(
        self,
        message: str,
        field: str = None,
        details: Optional[Dict[str, Any]] = None,
        code: str = "VALIDATION_ERROR"
    ):
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(message=message, code=code, details=error_details)


class InvalidTimeFormatError(BookingValidationError):
    """Raised when a time-of-day value cannot be parsed or formatted."""

    def __init__(self, value: Any, message: str = None):
        super().__init__(
            message=message or f"Invalid time value: {value!r}",
            details={"value": str(value)},
            code="INVALID_TIME_FORMAT"
        )


class ResourceNotFoundError(BookingServiceError):
    """Base class for missing entities."""

    resource = "Resource"
    error_code = "NOT_FOUND"

    def __init__(self, resource_id: Any = None, message: str = None):
        super().__init__(
            message=message or f"{self.resource} not found: {resource_id}",
            code=self.error_code,
            details={"id": str(resource_id)} if resource_id is not None else {}
        )


class BusinessNotFoundError(ResourceNotFoundError):
    resource = "Business"
    error_code = "BUSINESS_NOT_FOUND"


class ServiceOfferingNotFoundError(ResourceNotFoundError):
    resource = "Service offering"
    error_code = "SERVICE_NOT_FOUND"


class SlotNotFoundError(ResourceNotFoundError):
    resource = "Slot"
    error_code = "SLOT_NOT_FOUND"


class BookingNotFoundError(ResourceNotFoundError):
    resource = "Booking"
    error_code = "BOOKING_NOT_FOUND"


class SlotUnavailableError(BookingServiceError):
    """Raised when a window is full, blocked, or not offered at all."""

    def __init__(self, message: str = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message or "The selected time slot is not available",
            code="SLOT_UNAVAILABLE",
            details=details
        )


class InvalidStatusTransitionError(BookingServiceError):
    """Raised when a booking status change is not in the transition table."""

    def __init__(self, current_status: str, target_status: str, message: str = None):
        super().__init__(
            message=message or f"Cannot transition booking from {current_status} to {target_status}",
            code="INVALID_STATUS_TRANSITION",
            details={
                "current_status": str(current_status),
                "target_status": str(target_status),
            }
        )


class BookingPermissionError(BookingServiceError):
    """Raised when the caller is neither the booking owner nor the business owner."""

    def __init__(self, message: str = "You are not allowed to perform this action", action: str = None):
        super().__init__(
            message=message,
            code="UNAUTHORIZED",
            details={"action": action} if action else {}
        )
