from django.contrib import admin
from .models import Bill, BillItem, SaleReturn


class BillItemInline(admin.TabularInline):
    model = BillItem
    extra = 0
    raw_id_fields = ('item',)


@admin.register(Bill)
class BillAdmin(admin.ModelAdmin):
    list_display = ('bill_no', 'bill_date', 'customer', 'sale_type', 'grand_total', 'amount_payable',
                    'bill_status', 'staff')
    list_filter = ('sale_type', 'bill_status', 'bill_date')
    search_fields = ('bill_no', 'customer__name', 'customer__phone')
    raw_id_fields = ('customer', 'staff', 'nongst_auth')
    inlines = [BillItemInline]


@admin.register(SaleReturn)
class SaleReturnAdmin(admin.ModelAdmin):
    list_display = ('bill', 'return_date', 'original_amount', 'deduction_percent', 'refund_amount')
    raw_id_fields = ('bill', 'bill_item', 'processed_by')
