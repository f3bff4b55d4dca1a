# Shared Common Library for the booking platform.
# Authentication, middleware, model mixins, error handling and cache helpers
# reused by every service.

__version__ = "1.0.0"
