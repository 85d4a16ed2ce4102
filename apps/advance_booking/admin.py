from django.contrib import admin
from .models import AdvanceBooking


@admin.register(AdvanceBooking)
class AdvanceBookingAdmin(admin.ModelAdmin):
    list_display = ('bill', 'booking_date', 'delivery_date', 'advance_amount', 'total_amount',
                    'booking_status')
    list_filter = ('booking_status',)
    search_fields = ('bill__bill_no', 'bill__customer__name')
    raw_id_fields = ('bill', 'created_by')
