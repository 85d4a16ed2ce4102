from django.contrib import admin
from .models import OldGoldExchange


@admin.register(OldGoldExchange)
class OldGoldExchangeAdmin(admin.ModelAdmin):
    list_display = ('bill', 'weight', 'purity', 'rate_per_gram', 'total_value', 'created_at')
    search_fields = ('bill__bill_no', 'notes')
    raw_id_fields = ('bill',)
