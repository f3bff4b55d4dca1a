# services/booking-service/src/apps/api/views/filters.py
"""
API Filters

Django Filter classes for booking API.
"""

import django_filters

from apps.core.models import Booking
from shared.common.validators import validate_date_range


class BookingFilter(django_filters.FilterSet):
    """Filter for booking listings."""

    status = django_filters.ChoiceFilter(
        choices=Booking.Status.choices
    )
    status_in = django_filters.BaseInFilter(
        field_name='status'
    )

    # Slot date range
    from_date = django_filters.DateFilter(
        field_name='slot__date',
        lookup_expr='gte'
    )
    to_date = django_filters.DateFilter(
        field_name='slot__date',
        lookup_expr='lte'
    )

    service_offering = django_filters.UUIDFilter(
        field_name='service_offering_id'
    )
    is_guest = django_filters.BooleanFilter(
        field_name='user_id',
        lookup_expr='isnull'
    )

    class Meta:
        model = Booking
        fields = ['status', 'service_offering']

    def filter_queryset(self, queryset):
        validate_date_range(
            self.form.cleaned_data.get('from_date'),
            self.form.cleaned_data.get('to_date'),
        )
        return super().filter_queryset(queryset)
