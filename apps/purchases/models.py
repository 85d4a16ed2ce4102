from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone

from apps.billing.models import Bill, PAYMENT_TYPE_CHOICES
from apps.customers.models import Customer


class PurchaseBill(models.Model):
    """
    Pink slip for old gold bought from a customer.

    Totals are derived from the items: subtotal is the sum of item amounts
    and GST is charged on top, split equally into CGST and SGST.
    """
    purchase_no = models.CharField(max_length=50, unique=True, editable=False)
    purchase_date = models.DateField(default=timezone.localdate, db_index=True)
    customer = models.ForeignKey(Customer, on_delete=models.SET_NULL, null=True, blank=True,
                                 related_name='purchase_bills')
    sale_bill = models.ForeignKey(Bill, on_delete=models.SET_NULL, null=True, blank=True,
                                  related_name='purchase_bills',
                                  help_text="Sale bill this purchase is adjusted against")
    staff = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True,
                              blank=True, related_name='purchase_bills')
    particulars = models.CharField(max_length=255, blank=True)

    subtotal = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    cgst = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    sgst = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    grand_total = models.DecimalField(max_digits=14, decimal_places=2, default=0)

    payment_mode = models.CharField(max_length=20, choices=PAYMENT_TYPE_CHOICES, default='cash')
    payment_reference = models.CharField(max_length=100, blank=True)
    remarks = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'purchase_bills'
        ordering = ['-purchase_date', '-created_at']

    def __str__(self):
        return self.purchase_no

    @property
    def gst_amount(self):
        return self.cgst + self.sgst

    @property
    def total_weight(self):
        return sum((item.weight for item in self.items.all()), Decimal('0'))


class PurchaseItem(models.Model):
    purchase_bill = models.ForeignKey(PurchaseBill, on_delete=models.CASCADE, related_name='items')
    hsn_code = models.CharField(max_length=20, blank=True)
    code = models.CharField(max_length=50, blank=True)
    weight = models.DecimalField(max_digits=10, decimal_places=3)
    purity = models.CharField(max_length=20, blank=True)
    rate = models.DecimalField(max_digits=12, decimal_places=2)
    amount = models.DecimalField(max_digits=14, decimal_places=2, editable=False)

    class Meta:
        db_table = 'purchase_items'
        ordering = ['id']

    def __str__(self):
        return f"{self.purchase_bill.purchase_no} - {self.weight} g"
