from django.contrib import admin
from .models import Business, ServiceOffering, OpeningHours, Slot, Booking


@admin.register(Business)
class BusinessAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'owner_id']
    search_fields = ['name']


@admin.register(ServiceOffering)
class ServiceOfferingAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'business', 'duration_minutes', 'capacity', 'is_active']
    list_filter = ['is_active']


@admin.register(OpeningHours)
class OpeningHoursAdmin(admin.ModelAdmin):
    list_display = ['business', 'day_of_week', 'opens_at', 'closes_at']


@admin.register(Slot)
class SlotAdmin(admin.ModelAdmin):
    list_display = ['id', 'service_offering', 'date', 'start_time', 'end_time', 'bookings_count', 'is_blocked']
    list_filter = ['is_blocked', 'date']

    # Slots change only through BookingTransactionService
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ['id', 'status', 'user_id', 'guest_name', 'slot', 'created_at']
    list_filter = ['status']
    readonly_fields = ['status', 'slot', 'service_offering']
