from django.contrib import admin
from .models import LayawayTransaction


@admin.register(LayawayTransaction)
class LayawayTransactionAdmin(admin.ModelAdmin):
    list_display = ('bill', 'payment_date', 'amount', 'payment_method', 'reference_number')
    list_filter = ('payment_method', 'payment_date')
    search_fields = ('bill__bill_no', 'reference_number')
    raw_id_fields = ('bill', 'created_by')
