# services/booking-service/src/apps/api/serializers/availability_serializers.py
"""
Availability, Opening Hours and Slot Serializers
"""

from django.conf import settings
from rest_framework import serializers

from apps.core.models import OpeningHours, Slot

TIME_INPUT_FORMATS = ['%H:%M', '%H:%M:%S']


class AvailabilityQuerySerializer(serializers.Serializer):
    """Query parameters of the availability endpoint."""

    business = serializers.UUIDField()
    offering = serializers.UUIDField()
    start_date = serializers.DateField(required=False)
    days = serializers.IntegerField(required=False, min_value=1)

    def validate_days(self, value):
        if value > settings.AVAILABILITY_MAX_DAYS:
            raise serializers.ValidationError(
                f"Ensure this value is less than or equal to {settings.AVAILABILITY_MAX_DAYS}."
            )
        return value


class TimeWindowSerializer(serializers.Serializer):
    start_time = serializers.CharField()
    end_time = serializers.CharField()


class AvailableDaySerializer(serializers.Serializer):
    """One date with its bookable windows."""

    date = serializers.DateField()
    business_id = serializers.UUIDField()
    service_offering_id = serializers.UUIDField()
    slots = TimeWindowSerializer(many=True)


class OpeningHoursSerializer(serializers.ModelSerializer):
    opens_at = serializers.TimeField(format='%H:%M', input_formats=TIME_INPUT_FORMATS)
    closes_at = serializers.TimeField(format='%H:%M', input_formats=TIME_INPUT_FORMATS)
    day_name = serializers.CharField(source='get_day_of_week_display', read_only=True)

    class Meta:
        model = OpeningHours
        fields = ['day_of_week', 'day_name', 'opens_at', 'closes_at']


class OpeningHoursReplaceSerializer(serializers.Serializer):
    """Full weekly schedule; weekdays left out are closed."""

    hours = OpeningHoursSerializer(many=True)


class SlotBlockSerializer(serializers.Serializer):
    service_offering_id = serializers.UUIDField()
    date = serializers.DateField()
    start_time = serializers.TimeField(input_formats=TIME_INPUT_FORMATS)


class SlotSerializer(serializers.ModelSerializer):
    service_offering_id = serializers.UUIDField(read_only=True)
    start_time = serializers.TimeField(format='%H:%M')
    end_time = serializers.TimeField(format='%H:%M')

    class Meta:
        model = Slot
        fields = [
            'id', 'service_offering_id', 'date', 'start_time', 'end_time',
            'bookings_count', 'is_blocked',
        ]
        read_only_fields = fields
