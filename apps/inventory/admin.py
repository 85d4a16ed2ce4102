from django.contrib import admin
from .models import GoldRate, Item


@admin.register(Item)
class ItemAdmin(admin.ModelAdmin):
    list_display = ('barcode', 'item_name', 'category', 'weight', 'purity', 'stock_status', 'location')
    list_filter = ('stock_status', 'category')
    search_fields = ('barcode', 'item_name')


@admin.register(GoldRate)
class GoldRateAdmin(admin.ModelAdmin):
    list_display = ('effective_date', 'rate_per_gram', 'created_at')
    ordering = ('-effective_date',)
