from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone

from apps.customers.models import Customer
from apps.inventory.models import Item

PAYMENT_TYPE_CHOICES = [
    ('cash', 'Cash'),
    ('card', 'Card'),
    ('upi', 'UPI'),
    ('bank_transfer', 'Bank Transfer'),
    ('cheque', 'Cheque'),
    ('advance', 'Advance'),
]

VALUE_ADDED_LABEL = 'MC / VALUE ADDED'


class Bill(models.Model):
    SALE_TYPE_CHOICES = [
        ('gst', 'GST'),
        ('non_gst', 'Non-GST'),
    ]

    STATUS_DRAFT = 'draft'
    STATUS_FINALIZED = 'finalized'
    STATUS_CANCELLED = 'cancelled'

    STATUS_CHOICES = [
        (STATUS_DRAFT, 'Draft'),
        (STATUS_FINALIZED, 'Finalized'),
        (STATUS_CANCELLED, 'Cancelled'),
    ]

    bill_no = models.CharField(max_length=50, unique=True)
    bill_date = models.DateField(default=timezone.localdate, db_index=True)
    customer = models.ForeignKey(Customer, on_delete=models.SET_NULL, null=True, blank=True,
                                 related_name='bills')
    staff = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True,
                              blank=True, related_name='bills')
    nongst_auth = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True,
                                    blank=True, related_name='authorized_nongst_bills')
    sale_type = models.CharField(max_length=10, choices=SALE_TYPE_CHOICES, default='gst')

    subtotal = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    gst_amount = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    cgst = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    sgst = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    igst = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    discount = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    grand_total = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    amount_payable = models.DecimalField(max_digits=14, decimal_places=2, default=0)

    payment_method = models.JSONField(default=list, blank=True,
                                      help_text="List of {type, amount, reference}")
    bill_status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_FINALIZED,
                                   db_index=True)
    remarks = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'bills'
        ordering = ['-bill_date', '-created_at']

    def __str__(self):
        return self.bill_no

    @property
    def is_cancelled(self):
        return self.bill_status == self.STATUS_CANCELLED

    @property
    def has_returns(self):
        return self.pk is not None and self.returns.exists()

    @property
    def has_payable_override(self):
        return self.amount_payable != self.grand_total

    @property
    def amount_received(self):
        total = Decimal('0')
        for payment in self.payment_method or []:
            try:
                total += Decimal(str(payment.get('amount') or 0))
            except ArithmeticError:
                continue
        return total

    @property
    def sale_items(self):
        return [item for item in self.items.all() if not item.is_value_added]

    @property
    def value_added_item(self):
        for item in self.items.all():
            if item.is_value_added:
                return item
        return None


class BillItem(models.Model):
    bill = models.ForeignKey(Bill, on_delete=models.CASCADE, related_name='items')
    item = models.ForeignKey(Item, on_delete=models.SET_NULL, null=True, blank=True,
                             related_name='bill_items')
    barcode = models.CharField(max_length=50, blank=True)
    item_name = models.CharField(max_length=255)
    weight = models.DecimalField(max_digits=10, decimal_places=3)
    rate = models.DecimalField(max_digits=14, decimal_places=4)
    making_charges = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    gst_rate = models.DecimalField(max_digits=5, decimal_places=2, default=0)
    line_total = models.DecimalField(max_digits=14, decimal_places=2)
    is_value_added = models.BooleanField(default=False)

    class Meta:
        db_table = 'bill_items'
        ordering = ['is_value_added', 'id']

    def __str__(self):
        return f"{self.bill.bill_no} - {self.item_name}"


class SaleReturn(models.Model):
    bill = models.ForeignKey(Bill, on_delete=models.CASCADE, related_name='returns')
    bill_item = models.ForeignKey(BillItem, on_delete=models.SET_NULL, null=True, blank=True,
                                  related_name='returns')
    return_date = models.DateField(default=timezone.localdate)
    original_amount = models.DecimalField(max_digits=14, decimal_places=2)
    deduction_percent = models.DecimalField(max_digits=5, decimal_places=2, default=5)
    refund_amount = models.DecimalField(max_digits=14, decimal_places=2)
    reason = models.TextField(blank=True)
    processed_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL,
                                     null=True, blank=True, related_name='processed_returns')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'sale_returns'
        ordering = ['-return_date', '-created_at']

    def __str__(self):
        return f"Return on {self.bill.bill_no}: {self.refund_amount}"
