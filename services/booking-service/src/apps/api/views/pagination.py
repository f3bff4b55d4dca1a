# services/booking-service/src/apps/api/views/pagination.py
"""
API Pagination

Pagination classes for booking API.
"""

from rest_framework.pagination import PageNumberPagination


class StandardResultsSetPagination(PageNumberPagination):
    """Page-number pagination driven by ``page`` and ``limit``."""

    page_size = 20
    page_size_query_param = 'limit'
    max_page_size = 100
