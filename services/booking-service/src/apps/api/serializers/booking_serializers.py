# services/booking-service/src/apps/api/serializers/booking_serializers.py
"""
Booking Serializers
"""

from rest_framework import serializers

from apps.core.models import Booking, ServiceOffering, Slot
from shared.common.validators import validate_phone_number


class SlotSummarySerializer(serializers.ModelSerializer):
    """Slot fields embedded in booking responses."""

    business_id = serializers.UUIDField(read_only=True)
    start_time = serializers.TimeField(format='%H:%M')
    end_time = serializers.TimeField(format='%H:%M')

    class Meta:
        model = Slot
        fields = ['id', 'business_id', 'date', 'start_time', 'end_time']
        read_only_fields = fields


class ServiceOfferingSummarySerializer(serializers.ModelSerializer):
    """Service offering fields embedded in booking responses."""

    business_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = ServiceOffering
        fields = ['id', 'business_id', 'name', 'duration_minutes', 'capacity', 'price']
        read_only_fields = fields


class BookingSerializer(serializers.ModelSerializer):
    """Booking representation returned by every booking endpoint."""

    slot = SlotSummarySerializer(read_only=True)
    service_offering = ServiceOfferingSummarySerializer(read_only=True)
    start_datetime = serializers.DateTimeField(source='slot.start_datetime', read_only=True)
    is_guest = serializers.BooleanField(read_only=True)

    class Meta:
        model = Booking
        fields = [
            'id', 'user_id', 'status', 'special_requests',
            'guest_name', 'guest_email', 'guest_phone', 'is_guest',
            'start_datetime', 'slot', 'service_offering',
            'confirmed_at', 'cancelled_at', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class BookingCreateSerializer(serializers.Serializer):
    """
    Booking request. Guest fields are required only when the caller is
    not authenticated; that rule is enforced by the service layer.
    """

    service_offering_id = serializers.UUIDField()
    start_datetime = serializers.DateTimeField()
    special_requests = serializers.CharField(
        max_length=500, required=False, allow_blank=True, allow_null=True
    )
    guest_name = serializers.CharField(
        max_length=100, required=False, allow_blank=True, allow_null=True
    )
    guest_email = serializers.EmailField(
        max_length=255, required=False, allow_blank=True, allow_null=True
    )
    guest_phone = serializers.CharField(
        max_length=20, required=False, allow_blank=True, allow_null=True
    )

    def validate_guest_phone(self, value):
        if value:
            return validate_phone_number(value, field_name='guest_phone')
        return value


class BookingUpdateSerializer(serializers.Serializer):
    """Partial booking update."""

    status = serializers.ChoiceField(choices=Booking.Status.choices, required=False)
    special_requests = serializers.CharField(
        max_length=500, required=False, allow_blank=True
    )

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("Provide status or special_requests")
        return attrs
