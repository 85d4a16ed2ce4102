from django.contrib import admin
from .models import PurchaseBill, PurchaseItem


class PurchaseItemInline(admin.TabularInline):
    model = PurchaseItem
    extra = 0
    readonly_fields = ('amount',)


@admin.register(PurchaseBill)
class PurchaseBillAdmin(admin.ModelAdmin):
    list_display = ('purchase_no', 'purchase_date', 'customer', 'grand_total', 'payment_mode')
    list_filter = ('payment_mode', 'purchase_date')
    search_fields = ('purchase_no', 'customer__name', 'customer__phone')
    raw_id_fields = ('customer', 'sale_bill', 'staff')
    inlines = [PurchaseItemInline]
